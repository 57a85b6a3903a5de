"""Locate the JSON array inside free-form model output."""

from __future__ import annotations


def extract_json_array(text: str) -> str:
    """Return the span from the first ``[`` to the last ``]``, inclusive.

    Models like to wrap JSON in prose or code fences. This is a bracket-span
    heuristic, not a parser: balance and escapes are not checked. When no
    usable span exists the text comes back unchanged so that JSON parsing
    fails loudly downstream instead of on an empty string.
    """
    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end != -1 and end > start:
        return text[start : end + 1]
    return text
