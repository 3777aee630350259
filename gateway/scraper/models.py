"""Data models for the fetch and transform pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Mode(str, Enum):
    """Accessibility preset applied to a fetched page."""

    ORIGINAL = "original"
    SIMPLIFIED = "simplified"
    TRANSLATED = "translated"
    DYSLEXIA = "dyslexia"


@dataclass(frozen=True)
class TransformRequest:
    """A validated request to transform one target page."""

    target_url: str
    mode: Mode = Mode.SIMPLIFIED


@dataclass
class FetchedPage:
    """The raw HTTP response for a single successful page fetch."""

    url: str
    html: str
    status_code: int
    content_type: str = ""


@dataclass
class SummaryResult:
    """Up to three summary bullets plus an estimated reading time."""

    bullets: List[str] = field(default_factory=list)
    reading_time: str = ""

    def to_dict(self) -> dict:
        return {"bullets": list(self.bullets), "readingTime": self.reading_time}
