"""
Response sanitizer for generative model output.

Models are told to return bare JSON but still wrap it in markdown fences, and
occasionally echo multi-line text with raw newlines inside string values.
Both faults are repaired here without touching the semantic content:

    sanitize_response('```json\\n{"a": "x\\ny"}\\n```')  ->  '{"a": "x\\\\ny"}'
"""

import json
import re
from enum import Enum
from typing import Any

from career_coach.services.errors import ResponseParseError

# A fence marker on a line of its own, with an optional language tag
_FENCE_LINE_RE = re.compile(r"^[ \t]*```[A-Za-z0-9_+-]*[ \t]*\r?$\n?", re.MULTILINE)
# Fences glued to the payload: ```json{...}```
_LEADING_FENCE_RE = re.compile(r"\A\s*```(?:json)?")
_TRAILING_FENCE_RE = re.compile(r"```\s*\Z")

_CONTROL_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


class _ScanState(Enum):
    OUTSIDE = "outside-string"
    INSIDE = "inside-string"


def strip_code_fences(text: str) -> str:
    """
    Remove markdown fence markers, keeping the enclosed content. Backticks
    inside string values are left alone, and unfenced text is returned as is.
    """
    text = text or ""
    stripped = _FENCE_LINE_RE.sub("", text)
    stripped = _LEADING_FENCE_RE.sub("", stripped)
    stripped = _TRAILING_FENCE_RE.sub("", stripped)
    if stripped == text:
        return text
    return stripped.strip()


def escape_control_chars_in_strings(text: str) -> str:
    """
    Escape raw newline, carriage return and tab characters that appear inside
    JSON string literals. Characters outside strings pass through unchanged.
    """
    out = []
    state = _ScanState.OUTSIDE
    escaped = False

    for ch in text:
        if state is _ScanState.OUTSIDE:
            if ch == '"':
                state = _ScanState.INSIDE
            out.append(ch)
            continue

        # Inside a string literal
        if escaped:
            escaped = False
            out.append(ch)
        elif ch == "\\":
            escaped = True
            out.append(ch)
        elif ch == '"':
            state = _ScanState.OUTSIDE
            out.append(ch)
        else:
            out.append(_CONTROL_ESCAPES.get(ch, ch))

    return "".join(out)


def sanitize_response(raw: str) -> str:
    """Fence stripping followed by in-string control character repair."""
    return escape_control_chars_in_strings(strip_code_fences(raw))


def parse_json_response(raw: str) -> Any:
    """Sanitize provider text and parse it as JSON."""
    cleaned = sanitize_response(raw)
    if not cleaned.strip():
        raise ResponseParseError("Model returned an empty response", raw_text=raw)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Model returned invalid JSON: {e}", raw_text=raw) from e
