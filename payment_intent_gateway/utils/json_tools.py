"""JSON extraction from free-text oracle responses"""

import json
import re
from typing import Any, Optional

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markup (```json ... ```) wherever it appears."""
    return _FENCE_RE.sub("", text).strip()


def extract_json_object(text: Optional[str]) -> Optional[dict[str, Any]]:
    """
    Return the first JSON object found in *text*, or None.

    Strategy:
    1. Strip code fences and try ``json.loads`` on the remainder.
    2. Otherwise scan for ``{`` and try a brace-balanced candidate at each one.
    """
    if not text or not text.strip():
        return None

    cleaned = strip_code_fences(text)

    try:
        parsed = json.loads(cleaned)
    except ValueError:
        parsed = None
    else:
        return parsed if isinstance(parsed, dict) else None

    for i, ch in enumerate(cleaned):
        if ch == "{":
            candidate = _balanced_object(cleaned, i)
            if candidate is not None:
                return candidate

    return None


def _balanced_object(text: str, start: int) -> Optional[dict[str, Any]]:
    """Parse the brace-balanced substring starting at *start*."""
    depth = 0
    in_string = False
    escape = False

    for i in range(start, len(text)):
        ch = text[i]

        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = in_string
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue

        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                try:
                    parsed = json.loads(text[start : i + 1])
                except ValueError:
                    return None
                return parsed if isinstance(parsed, dict) else None

    return None
