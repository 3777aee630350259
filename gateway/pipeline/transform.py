"""Page transformation pipeline.

``transform_page`` runs the full flow for one request::

    fetch → parse → fix <base> → strip scripts → remove noise
          → (simplified / translated) extract → rewrite
          → mode styles → accessibility script → serialize

Only a failed fetch is fatal; it is rendered as an error page.  A failed
rewrite degrades to the original text and never stops the rest of the
pipeline.
"""

from __future__ import annotations

import logging

from gateway.config import settings
from gateway.pipeline.extractor import extract_candidates
from gateway.pipeline.injector import inject_accessibility_script, inject_mode_styles
from gateway.pipeline.pages import error_page
from gateway.pipeline.rewriter import (
    SIMPLIFY_FAILED_BANNER,
    Completer,
    RewriteResult,
    RewriteStatus,
    rewrite_candidates,
)
from gateway.pipeline.sanitizer import fix_base_href, remove_noise, strip_scripts
from gateway.scraper.document import HtmlDocument
from gateway.scraper.errors import FetchError, InvalidRequestError
from gateway.scraper.fetcher import fetch_page, validate_url
from gateway.scraper.models import Mode, TransformRequest

logger = logging.getLogger(__name__)

_REWRITE_MODES = (Mode.SIMPLIFIED, Mode.TRANSLATED)

GENERIC_FAILURE_MESSAGE = (
    "Something went wrong while preparing this page. Please try again."
)


def parse_transform_request(url: str | None, mode: str | None = None) -> TransformRequest:
    """Validate raw query values into a :class:`TransformRequest`.

    An omitted *mode* means ``simplified``.

    Raises:
        InvalidUrlError: If *url* is missing or not ``http``/``https``.
        InvalidRequestError: If *mode* is not a known mode.
    """
    target_url = validate_url(url)
    raw_mode = (mode or Mode.SIMPLIFIED.value).strip().lower()
    try:
        parsed_mode = Mode(raw_mode)
    except ValueError:
        raise InvalidRequestError("Invalid mode") from None
    return TransformRequest(target_url=target_url, mode=parsed_mode)


def transform_document(
    doc: HtmlDocument,
    request: TransformRequest,
    client: Completer,
) -> RewriteResult:
    """Apply every transformation for ``request.mode`` to *doc* in place."""
    mode = request.mode

    fix_base_href(doc, request.target_url)
    strip_scripts(doc)

    if mode is not Mode.ORIGINAL:
        remove_noise(doc)

    result = RewriteResult(RewriteStatus.SKIPPED)
    if mode in _REWRITE_MODES:
        candidates = extract_candidates(doc)
        if not candidates:
            logger.info("[transform] no rewritable text on %s", request.target_url)
        result = rewrite_candidates(candidates, mode, client)
        if result.failed and mode is Mode.SIMPLIFIED:
            doc.prepend_markup(doc.body(), SIMPLIFY_FAILED_BANNER)

    inject_mode_styles(doc, mode)
    inject_accessibility_script(doc)
    return result


def transform_html(html: str, request: TransformRequest, client: Completer) -> str:
    """Parse *html*, transform it for ``request.mode``, and serialize it."""
    doc = HtmlDocument(html)
    transform_document(doc, request, client)
    return doc.serialize()


def transform_page(request: TransformRequest, client: Completer) -> str:
    """Fetch and transform the target page, returning HTML in every case.

    Fetch failures and unexpected errors are rendered as an error page; no
    exception escapes.
    """
    try:
        page = fetch_page(request.target_url, timeout=settings.page_fetch_timeout)
    except FetchError as exc:
        logger.warning("[transform] fetch failed for %s: %s", request.target_url, exc)
        return error_page(exc.message)

    try:
        return transform_html(page.html, request, client)
    except Exception:
        logger.exception("[transform] unexpected failure for %s", request.target_url)
        return error_page(GENERIC_FAILURE_MESSAGE)
