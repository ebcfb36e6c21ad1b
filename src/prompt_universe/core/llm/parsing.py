"""Extraction of JSON objects from free-form model output."""

import json
import re
from typing import Any


_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)


def first_balanced_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` span of ``text``, if any.

    Braces inside JSON strings are ignored.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def json_candidates(raw_text: str) -> list[str]:
    """Candidate JSON strings in order of preference, without duplicates.

    Tried in turn: the first fenced code block, the whole text, and the
    first balanced object.
    """
    text = (raw_text or "").strip()
    if not text:
        return []

    candidates: list[str] = []
    fenced = _FENCED_BLOCK.search(text)
    if fenced:
        candidates.append(fenced.group(1))
    candidates.append(text)
    balanced = first_balanced_object(text)
    if balanced:
        candidates.append(balanced)

    unique: list[str] = []
    for candidate in candidates:
        candidate = candidate.strip()
        if candidate and candidate not in unique:
            unique.append(candidate)
    return unique


def extract_json_object(raw_text: str) -> dict[str, Any] | None:
    """Parse the first JSON object found in ``raw_text``, or return None."""
    for candidate in json_candidates(raw_text):
        try:
            parsed = json.loads(candidate, strict=False)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None
