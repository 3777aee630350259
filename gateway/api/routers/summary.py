"""Summary endpoint.

Routes
------
GET /summary?url=<abs-url>    → {"bullets": [...], "readingTime": "~3 min"}
"""

from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from gateway.pipeline.summary import summarize_page
from gateway.scraper.errors import InvalidUrlError
from gateway.scraper.fetcher import validate_url

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class SummaryResponse(BaseModel):
    bullets: List[str] = Field(default_factory=list)
    reading_time: str = Field(default="", alias="readingTime")


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.get("", response_model=SummaryResponse)
def summary(request: Request, url: Optional[str] = None) -> Any:
    """Summarize the target page in three short bullets.

    Best-effort: every failure after input validation degrades to
    ``{"bullets": [], "readingTime": ""}`` with a 200.
    """
    try:
        target_url = validate_url(url)
    except InvalidUrlError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)

    result = summarize_page(target_url, request.app.state.completion_client)
    return result.to_dict()
