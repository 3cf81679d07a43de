"""Locate a JSON object inside free text (code fences, leading prose...)."""

from __future__ import annotations

import json
from typing import Any, Optional


def find_object_span(text: str) -> Optional[str]:
    """Return the ``{...}`` span opened by the first brace, ignoring braces inside strings.

    ``None`` when that brace never closes (e.g. output cut off mid-object);
    objects nested inside an unclosed span are never returned.
    """
    start = text.find("{")
    if start == -1:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
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
                return text[start:i + 1]
    return None


def loads_lenient(raw: str) -> Any:
    """``json.loads``, falling back to the first embedded object.

    Raises ``ValueError`` (``json.JSONDecodeError``) when neither parses.
    """
    try:
        return json.loads(raw)
    except ValueError:
        pass
    span = find_object_span(raw)
    if span is None:
        raise ValueError("no JSON object found in text")
    return json.loads(span)
