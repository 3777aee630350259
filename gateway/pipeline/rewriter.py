"""Batched AI rewriting of extracted text nodes.

``rewrite_candidates`` sends every candidate in one indexed JSON object,
asks the model to rewrite (``simplified``) or translate (``translated``)
each value, and writes the answers back onto the matching nodes.

Outcomes
--------
``skipped``
    No candidates, so no completion call was made.
``succeeded``
    The reply parsed as a JSON object.  Nodes whose key is missing or whose
    value is not a string keep their original text.
``failed``
    The call or the reply parsing failed.  Every node keeps its original
    text.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Sequence

from gateway.config import settings
from gateway.llm.json_extract import parse_json_object
from gateway.pipeline.extractor import TextNodeCandidate
from gateway.scraper.document import HtmlDocument
from gateway.scraper.models import Mode

logger = logging.getLogger(__name__)


class Completer(Protocol):
    def complete(self, prompt: str, max_tokens: int, timeout: float) -> str: ...


class RewriteStatus(str, Enum):
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RewriteResult:
    status: RewriteStatus
    applied: int = 0

    @property
    def failed(self) -> bool:
        return self.status is RewriteStatus.FAILED


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

_JSON_ONLY = (
    "You must respond with ONLY a raw JSON object — no markdown, no code fences, "
    "no explanation, no extra text.\n"
)

_TRANSLATE_INSTRUCTION = (
    _JSON_ONLY
    + "Translate every VALUE in the JSON object below into Tamil. "
    "Keep all JSON keys exactly the same.\n"
    'Example output format: {"0": "Tamil text here", "1": "Tamil text here"}\n'
    "\n"
    "JSON to translate:"
)

_SIMPLIFY_INSTRUCTION = (
    _JSON_ONLY
    + "Rewrite every VALUE in the JSON object below so it reads at a 6th-grade level:\n"
    "- Replace technical jargon with plain, everyday words\n"
    "- Keep sentences short and clear\n"
    "- Keep numbers and proper nouns exactly as-is\n"
    "- Keep all JSON keys exactly the same\n"
    'Example output format: {"0": "Simple text here", "1": "Simple text here"}\n'
    "\n"
    "JSON to rewrite:"
)

_INSTRUCTIONS = {
    Mode.SIMPLIFIED: _SIMPLIFY_INSTRUCTION,
    Mode.TRANSLATED: _TRANSLATE_INSTRUCTION,
}

SIMPLIFY_FAILED_BANNER = """\
<div class="gateway-notice" role="status" style="position:sticky;top:0;z-index:9999;background:#fef3c7;border-bottom:2px solid #f59e0b;padding:10px 16px;font-family:sans-serif;font-size:14px;color:#92400e;display:flex;align-items:center;gap:8px;">
  <span style="font-size:18px;">⚠️</span>
  <span><strong>AI simplification unavailable right now</strong> — showing the original page. The AI model may be busy; please try again in a moment.</span>
</div>
"""


def build_batch(candidates: Sequence[TextNodeCandidate]) -> dict[str, str]:
    """Map each candidate's string key to its original text."""
    return {candidate.key: candidate.text for candidate in candidates}


def build_prompt(mode: Mode, batch: dict[str, str]) -> str:
    """Return the full instruction plus JSON payload for *mode*.

    Raises:
        ValueError: If *mode* has no rewrite instruction.
    """
    try:
        instruction = _INSTRUCTIONS[mode]
    except KeyError:
        raise ValueError(f"Mode {mode.value!r} does not rewrite text") from None
    return f"{instruction}\n{json.dumps(batch, ensure_ascii=False)}"


def _lookup(updated: dict[Any, Any], candidate: TextNodeCandidate) -> Any:
    value = updated.get(candidate.key)
    if value is None:
        value = updated.get(candidate.index)
    return value


def apply_rewrites(
    candidates: Sequence[TextNodeCandidate],
    updated: dict[Any, Any],
) -> int:
    """Write every usable value in *updated* onto its candidate node.

    Returns:
        The number of nodes whose text was replaced.
    """
    applied = 0
    for candidate in candidates:
        new_text = _lookup(updated, candidate)
        if not isinstance(new_text, str) or not new_text:
            continue
        HtmlDocument.replace_direct_text(candidate.node, new_text)
        applied += 1
    return applied


def rewrite_candidates(
    candidates: Sequence[TextNodeCandidate],
    mode: Mode,
    client: Completer,
) -> RewriteResult:
    """Rewrite *candidates* in place with a single completion call.

    Never raises once the prompt is built.  Any error from the completion
    call or the reply parsing is logged and reported as
    :attr:`RewriteStatus.FAILED`.
    """
    if not candidates:
        return RewriteResult(RewriteStatus.SKIPPED)

    prompt = build_prompt(mode, build_batch(candidates))
    logger.info("[rewrite] %s: sending %d node(s) to the model", mode.value, len(candidates))
    try:
        raw = client.complete(
            prompt,
            max_tokens=settings.rewrite_max_tokens,
            timeout=settings.rewrite_timeout,
        )
        updated = parse_json_object(raw)
    except Exception as exc:  # noqa: BLE001
        logger.error("[rewrite] %s failed, keeping original text: %s", mode.value, exc)
        return RewriteResult(RewriteStatus.FAILED)

    applied = apply_rewrites(candidates, updated)
    logger.info("[rewrite] %s: replaced %d/%d node(s)", mode.value, applied, len(candidates))
    return RewriteResult(RewriteStatus.SUCCEEDED, applied=applied)
