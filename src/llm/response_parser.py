from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from llm.errors import ParseError
from llm.schemas import AnalysisPayload
from taskmaster.models import TaskAnalysis


def _first_balanced_object(text: str) -> Optional[str]:
    """First `{...}` span whose braces balance, ignoring braces inside JSON strings.

    Single pass with a stack of open-brace positions. The answer is the
    matched pair with the smallest start; once the stack empties no open
    brace can start earlier, so the scan stops there.
    """
    opened: List[int] = []
    best: Optional[Tuple[int, int]] = None
    in_string = False
    escaped = False

    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"' and opened:
            # quotes only count inside an object; prose around it may have stray ones
            in_string = True
        elif ch == "{":
            opened.append(i)
        elif ch == "}" and opened:
            start = opened.pop()
            if not opened:
                return text[start : i + 1]
            if best is None or start < best[0]:
                best = (start, i)

    if best is None:
        return None
    return text[best[0] : best[1] + 1]


def extract_json_object(text: str) -> Dict[str, Any]:
    """Decode the JSON object in `text`, tolerating prose around it.

    Models often wrap the payload ("Sure! Here is the result: {...}") or
    use markdown fences, so try the whole text first and then the first
    balanced brace span.
    """
    stripped = (text or "").strip()
    if not stripped:
        raise ParseError("empty provider response")

    candidates = [stripped]
    span = _first_balanced_object(stripped)
    if span is not None and span != stripped:
        candidates.append(span)

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(data, dict):
            return data
        raise ParseError(f"expected a JSON object, got {type(data).__name__}")

    raise ParseError("no JSON object found in provider response")


def parse_analysis(text: str) -> TaskAnalysis:
    """Raw provider text -> validated TaskAnalysis (fields defaulted and clamped)."""
    data = extract_json_object(text)
    return AnalysisPayload.model_validate(data).to_analysis()
