"""Transformation pipeline: sanitize, extract, rewrite, inject."""

from gateway.pipeline.summary import summarize_page
from gateway.pipeline.transform import (
    parse_transform_request,
    transform_html,
    transform_page,
)

__all__ = ["parse_transform_request", "transform_html", "transform_page", "summarize_page"]
