"""Three-bullet page summary with an estimated reading time.

``summarize_page`` is best-effort: any failure (fetch, too little text,
completion error, unusable reply) yields an empty :class:`SummaryResult`
rather than an exception.
"""

from __future__ import annotations

import logging
import math

from gateway.config import settings
from gateway.llm.json_extract import parse_json_object
from gateway.pipeline.rewriter import Completer
from gateway.scraper.document import HtmlDocument
from gateway.scraper.fetcher import fetch_page
from gateway.scraper.models import SummaryResult

logger = logging.getLogger(__name__)

SUMMARY_NOISE_SELECTORS = (
    "nav, header, footer, aside, script, noscript, style, .cookie-banner, .modal, .ad"
)
SUMMARY_TEXT_SELECTORS = "h1, h2, h3, h4, p, li, blockquote"

MIN_SAMPLE_CHARS = 100
WORDS_PER_MINUTE = 200
MAX_BULLETS = 3

_SUMMARY_PROMPT = """\
You must respond with ONLY a raw JSON object — no markdown, no code fences, no explanation, no extra text.
Return exactly this structure: {{"bullets": ["sentence one", "sentence two", "sentence three"], "readingTime": "{reading_time}"}}

Rules:
- Exactly 3 bullet points
- Each bullet must be one clear sentence, under 20 words
- Use simple language (Grade 5 reading level)
- Focus on what the page is ACTUALLY about

Webpage text to summarise:
{sample}"""


def extract_page_text(html: str) -> str:
    """Return the main textual content of *html*, one content element per line."""
    doc = HtmlDocument(html)
    doc.remove(SUMMARY_NOISE_SELECTORS)
    return "".join(node.get_text() + "\n" for node in doc.select(SUMMARY_TEXT_SELECTORS))


def estimate_reading_time(text: str) -> str:
    """Return ``"~N min"`` at 200 words per minute, never less than ``"~1 min"``."""
    minutes = math.ceil(len(text.split()) / WORDS_PER_MINUTE)
    return "~1 min" if minutes <= 1 else f"~{minutes} min"


def _clean_bullets(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    bullets = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return bullets[:MAX_BULLETS]


def summarize_text(full_text: str, client: Completer) -> SummaryResult:
    """Summarize already-extracted page text.

    The completion client is not called when the sample is shorter than
    :data:`MIN_SAMPLE_CHARS`.
    """
    sample = full_text[: settings.summary_char_budget].strip()
    if len(sample) < MIN_SAMPLE_CHARS:
        logger.info("[summary] only %d chars of text, skipping model call", len(sample))
        return SummaryResult()

    reading_time = estimate_reading_time(full_text)
    prompt = _SUMMARY_PROMPT.format(reading_time=reading_time, sample=sample)
    try:
        raw = client.complete(
            prompt,
            max_tokens=settings.summary_max_tokens,
            timeout=settings.summary_completion_timeout,
        )
        parsed = parse_json_object(raw)
    except Exception as exc:  # noqa: BLE001
        logger.error("[summary] completion failed: %s", exc)
        return SummaryResult()

    bullets = _clean_bullets(parsed.get("bullets"))
    if not bullets:
        logger.warning("[summary] model reply had no usable bullets")
        return SummaryResult()
    return SummaryResult(bullets=bullets, reading_time=reading_time)


def summarize_page(url: str, client: Completer) -> SummaryResult:
    """Fetch *url* and summarize it; never raises."""
    try:
        page = fetch_page(url, timeout=settings.summary_fetch_timeout)
        full_text = extract_page_text(page.html)
    except Exception as exc:  # noqa: BLE001
        logger.warning("[summary] could not load %s: %s", url, exc)
        return SummaryResult()
    return summarize_text(full_text, client)
