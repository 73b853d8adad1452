"""
JSON parsing utilities for model responses.

Models asked for JSON still occasionally wrap it in markdown fences or add
prose around it; these helpers recover the object when they can.
"""

import json
from typing import Any, Dict, List, Optional


def strip_markdown_fences(text: str) -> str:
    """Remove ```json / ``` fence lines while preserving the content."""
    normalized = (text or "").strip()
    if not normalized.startswith("```"):
        return normalized
    lines = [line for line in normalized.split("\n") if not line.strip().startswith("```")]
    return "\n".join(lines).strip()


def extract_largest_balanced_json(text: str) -> Optional[str]:
    """Extract the largest balanced JSON object from text.

    Scans for balanced braces while respecting string literals and escapes.

    Args:
        text: Source text potentially containing JSON.

    Returns:
        The largest balanced JSON object substring, or None if not found.
    """
    if not text:
        return None

    in_string = False
    escape = False
    stack: List[str] = []
    start_idx: Optional[int] = None
    best: Optional[str] = None

    for i, ch in enumerate(text):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == "\"":
                in_string = False
            continue

        if ch == "\"":
            in_string = True
            continue

        if ch in "{[":
            if not stack:
                start_idx = i
            stack.append(ch)
            continue

        if ch in "}]":
            if not stack:
                continue
            open_ch = stack[-1]
            if (open_ch == "{" and ch == "}") or (open_ch == "[" and ch == "]"):
                stack.pop()
                if not stack and start_idx is not None:
                    candidate = text[start_idx:i + 1]
                    if candidate.startswith("{") and (best is None or len(candidate) > len(best)):
                        best = candidate
                    start_idx = None
            else:
                # Mismatched closing; reset state.
                stack.clear()
                start_idx = None

    return best


def parse_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse a JSON object out of a model response.

    Tries the fence-stripped text as-is first, then the largest balanced
    object inside it.

    Returns:
        The parsed dict, or None if no object could be recovered.
    """
    normalized = strip_markdown_fences(text)
    if not normalized:
        return None

    try:
        parsed = json.loads(normalized)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        pass

    candidate = extract_largest_balanced_json(normalized)
    if not candidate:
        return None
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None
