"""Base-href correction, script stripping, and noise removal."""

from __future__ import annotations

import logging
from urllib.parse import urlsplit, urlunsplit

from gateway.scraper.document import HtmlDocument

logger = logging.getLogger(__name__)

# Layout chrome, consent banners, overlays and ad slots.  Removed in every
# mode except ``original``.
NOISE_SELECTORS = [
    "nav", "header", "footer", "aside",
    ".cookie-banner", ".cookie-notice", ".gdpr", "#cookie",
    ".popup", ".modal", ".overlay",
    ".ad", ".ads", ".advertisement",
    '[class*="cookie"]', '[class*="popup"]', '[class*="banner"]', '[id*="cookie"]',
    '[role="banner"]', '[role="navigation"]',
]

_EXECUTABLE_SELECTORS = ["script", "noscript"]


def compute_base_href(url: str) -> str:
    """Return the directory of *url* for use as a ``<base href>``.

    A URL ending in ``/`` is used as-is.  Otherwise the path is cut after its
    last ``/``; query and fragment are dropped and an empty path becomes ``/``.
    """
    if url.endswith("/"):
        return url
    parts = urlsplit(url)
    path = parts.path[: parts.path.rfind("/") + 1] or "/"
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def fix_base_href(doc: HtmlDocument, url: str) -> str:
    """Point relative links and assets in *doc* back at the origin site.

    Existing ``<base>`` tags are removed and a fresh one becomes the first
    child of ``<head>`` (synthesized if the page has none).

    Returns:
        The base href that was installed.
    """
    base_href = compute_base_href(url)
    for base in doc.select("base"):
        base.decompose()
    head = doc.ensure_head()
    head.insert(0, doc.new_tag("base", href=base_href))
    return base_href


def strip_scripts(doc: HtmlDocument) -> int:
    """Remove every ``<script>`` and ``<noscript>`` element."""
    return sum(doc.remove(selector) for selector in _EXECUTABLE_SELECTORS)


def remove_noise(doc: HtmlDocument, selectors: list[str] | None = None) -> int:
    """Remove elements matching the noise denylist.

    Each selector is tried on its own; one that fails is logged and the
    rest still run.

    Returns:
        Total number of removed elements.
    """
    removed = 0
    for selector in selectors if selectors is not None else NOISE_SELECTORS:
        try:
            removed += doc.remove(selector)
        except Exception as exc:  # noqa: BLE001
            logger.warning("[sanitize] selector %r failed: %s", selector, exc)
    if removed:
        logger.debug("[sanitize] removed %d noise element(s)", removed)
    return removed
