"""HTTP fetcher for target pages.

Only ``http``/``https`` URLs are accepted, and only HTML responses are handed
on to the parser.  Failures are raised as :class:`FetchError` subclasses so
callers can render them without inspecting httpx internals.
"""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

import httpx

from gateway.config import settings
from gateway.scraper.errors import (
    FetchError,
    FetchTimeoutError,
    InvalidUrlError,
    NotHtmlError,
    UpstreamStatusError,
)
from gateway.scraper.models import FetchedPage

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = ("http", "https")

_DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/124.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


def validate_url(url: str | None) -> str:
    """Return *url* stripped of surrounding whitespace if it is fetchable.

    Raises:
        InvalidUrlError: If *url* is empty, relative, has no host, uses a
            scheme other than ``http``/``https``, or is rejected by httpx
            (bad port, control characters, a host that does not IDNA-encode).
    """
    candidate = (url or "").strip()
    if not candidate:
        raise InvalidUrlError("Missing URL")
    try:
        parts = urlsplit(candidate)
    except ValueError as exc:
        raise InvalidUrlError("Invalid URL") from exc
    if parts.scheme.lower() not in _ALLOWED_SCHEMES or not parts.netloc:
        raise InvalidUrlError("Invalid URL")
    try:
        parsed = httpx.URL(candidate)
        if not parsed.host:
            raise InvalidUrlError("Invalid URL")
        # Sockets encode the host with the idna codec, which enforces label lengths.
        parsed.raw_host.decode("ascii").encode("idna")
    except (httpx.InvalidURL, UnicodeError) as exc:
        raise InvalidUrlError("Invalid URL") from exc
    return candidate


def fetch_page(url: str, timeout: float | None = None) -> FetchedPage:
    """Fetch *url* and return its HTML as a :class:`FetchedPage`.

    Args:
        url: Absolute ``http``/``https`` URL of the target page.
        timeout: Overall timeout in seconds; defaults to
            ``settings.page_fetch_timeout``.

    Raises:
        InvalidUrlError: Before any network access, if *url* is not fetchable.
        UpstreamStatusError: If the server answers with a non-2xx status.
        NotHtmlError: If the content-type does not mention ``html``.
        FetchTimeoutError: If the request exceeds *timeout*.
        FetchError: For DNS, connection, and other transport failures, or a
            URL that httpx refuses at request time.
    """
    url = validate_url(url)
    if timeout is None:
        timeout = settings.page_fetch_timeout

    try:
        with httpx.Client(
            headers=_DEFAULT_HEADERS,
            timeout=timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(url)

            if not response.is_success:
                logger.warning("[fetch] %s answered HTTP %s", url, response.status_code)
                raise UpstreamStatusError(response.status_code, response.reason_phrase)

            content_type = response.headers.get("content-type", "")
            if "html" not in content_type.lower():
                logger.warning("[fetch] %s is not HTML (content-type=%r)", url, content_type)
                raise NotHtmlError(content_type)

            html = response.text
            status_code = response.status_code
    except httpx.TimeoutException as exc:
        logger.warning("[fetch] %s timed out after %.1fs: %s", url, timeout, exc)
        raise FetchTimeoutError() from exc
    except (httpx.InvalidURL, UnicodeError) as exc:
        logger.warning("[fetch] %r rejected by the HTTP client: %s", url, exc)
        raise FetchError(
            "That URL could not be requested. Check the address and try again."
        ) from exc
    except httpx.HTTPError as exc:
        logger.warning("[fetch] %s failed: %r", url, exc)
        raise FetchError(
            "Could not connect to that website. Check the address and try again."
        ) from exc

    logger.info("[fetch] %s → HTTP %s (%d chars)", url, status_code, len(html))
    return FetchedPage(
        url=url,
        html=html,
        status_code=status_code,
        content_type=content_type,
    )
