"""Scraper package: target validation, fetch, and the HTML document model."""

from gateway.scraper.document import HtmlDocument
from gateway.scraper.errors import FetchError, InvalidRequestError, InvalidUrlError
from gateway.scraper.fetcher import fetch_page, validate_url
from gateway.scraper.models import FetchedPage, Mode, SummaryResult, TransformRequest

__all__ = [
    "fetch_page",
    "validate_url",
    "HtmlDocument",
    "FetchError",
    "InvalidRequestError",
    "InvalidUrlError",
    "FetchedPage",
    "Mode",
    "SummaryResult",
    "TransformRequest",
]
