"""Completion service client and model-output repair."""

from gateway.llm.client import CompletionClient, CompletionError
from gateway.llm.json_extract import (
    JsonExtractionError,
    NoJsonObjectError,
    UnterminatedJsonError,
    extract_json_object,
    parse_json_object,
)

__all__ = [
    "CompletionClient",
    "CompletionError",
    "JsonExtractionError",
    "NoJsonObjectError",
    "UnterminatedJsonError",
    "extract_json_object",
    "parse_json_object",
]
