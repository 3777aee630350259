"""Recover a single JSON object from free-form model output.

Models asked for "only a raw JSON object" still wrap their answer in prose
or markdown code fences often enough that the reply has to be repaired
before parsing.  :func:`extract_json_object` strips fences and slices out
the first brace-balanced ``{...}`` block; only brace depth is used for
slicing, so JSON validity is left to :func:`json.loads` afterwards.
"""

from __future__ import annotations

import json
import re
from typing import Any

_FENCE_RE = re.compile(r"^```(?:json)?\s*|```\s*$", re.MULTILINE)


class JsonExtractionError(ValueError):
    """The model response did not contain a usable JSON object."""


class NoJsonObjectError(JsonExtractionError):
    def __init__(self) -> None:
        super().__init__("No JSON object found in model response")


class UnterminatedJsonError(JsonExtractionError):
    def __init__(self) -> None:
        super().__init__("Unterminated JSON object in model response")


def strip_code_fences(raw: str) -> str:
    """Remove markdown fence markers (with optional ``json`` tag) and trim."""
    return _FENCE_RE.sub("", raw).strip()


def extract_json_object(raw: str) -> str:
    """Return the first brace-balanced ``{...}`` substring of *raw*.

    Raises:
        NoJsonObjectError: If *raw* contains no ``{``.
        UnterminatedJsonError: If the input ends before the braces balance.
    """
    stripped = strip_code_fences(raw)
    start = stripped.find("{")
    if start == -1:
        raise NoJsonObjectError()

    depth = 0
    for i in range(start, len(stripped)):
        char = stripped[i]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return stripped[start : i + 1]
    raise UnterminatedJsonError()


def parse_json_object(raw: str) -> dict[str, Any]:
    """Extract, parse, and shape-check the JSON object in *raw*.

    Raises:
        JsonExtractionError: If no object can be extracted, or the parsed
            value is not a JSON object.
        json.JSONDecodeError: If the extracted slice is not valid JSON.
    """
    parsed = json.loads(extract_json_object(raw))
    if not isinstance(parsed, dict):
        raise JsonExtractionError(
            f"Expected a JSON object, got {type(parsed).__name__}"
        )
    return parsed
