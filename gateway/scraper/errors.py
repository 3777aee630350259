"""Exceptions raised while validating and fetching a target page.

Every fetch failure carries a ``message`` suitable for showing to the reader
of the rewritten page; the raw cause is only ever logged.
"""

from __future__ import annotations


class InvalidRequestError(ValueError):
    """A caller-supplied parameter was missing or malformed."""


class InvalidUrlError(InvalidRequestError):
    """The target URL is not an absolute ``http``/``https`` URL."""


class FetchError(Exception):
    """The target page could not be retrieved."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UpstreamStatusError(FetchError):
    """The target site answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        status = f"{status_code} {reason}".strip()
        super().__init__(
            f"Could not reach that website ({status}). It may block automated access."
        )
        self.status_code = status_code
        self.reason = reason


class NotHtmlError(FetchError):
    """The target responded with something other than an HTML document."""

    def __init__(self, content_type: str = "") -> None:
        super().__init__(
            "That URL doesn't appear to be a webpage (e.g. it might be a PDF)."
        )
        self.content_type = content_type


class FetchTimeoutError(FetchError):
    """The target did not respond within the fetch timeout."""

    def __init__(self) -> None:
        super().__init__("That website took too long to respond. Try a different URL.")
