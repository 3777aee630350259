"""Transform endpoint.

Routes
------
GET /transform?url=<abs-url>&mode=original|simplified|translated|dyslexia
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from gateway.pipeline.transform import parse_transform_request, transform_page
from gateway.scraper.errors import InvalidRequestError

router = APIRouter()

# The result is rendered inside the gateway's own frame and is never cached.
HTML_HEADERS = {
    "Cache-Control": "no-store, max-age=0",
    "X-Frame-Options": "SAMEORIGIN",
}


@router.get("", response_class=HTMLResponse)
def transform(
    request: Request,
    url: Optional[str] = None,
    mode: Optional[str] = None,
) -> Response:
    """Return the target page rewritten for *mode*.

    Handled failures (unreachable site, non-HTML content, timeouts) come back
    as a 200 error page so the embedding frame stays stable.  Only a
    missing or malformed ``url`` or an unknown ``mode`` yields a 400.
    """
    try:
        transform_request = parse_transform_request(url, mode)
    except InvalidRequestError as exc:
        return PlainTextResponse(str(exc), status_code=400)

    html = transform_page(transform_request, request.app.state.completion_client)
    return HTMLResponse(
        content=html,
        headers=HTML_HEADERS,
        media_type="text/html; charset=utf-8",
    )
