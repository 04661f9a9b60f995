"""Utility to extract a JSON object from an AI text response."""

from __future__ import annotations

import json
import re

_JSON_FENCE = re.compile(r"```json[ \t]*\r?\n?(.*?)```", re.DOTALL | re.IGNORECASE)
_ANY_FENCE = re.compile(r"```[\w-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)


def find_fenced_block(text: str) -> str | None:
    """Return the interior of the first fenced code block, if any.

    A block labelled ```json wins over an earlier unlabelled one.
    """
    match = _JSON_FENCE.search(text) or _ANY_FENCE.search(text)
    if match is None:
        return None
    return match.group(1).strip()


def extract_json(text: str) -> dict:
    """Parse the JSON object in an AI response.

    Tries in order:
    1. The interior of a fenced code block (```json ... ``` or ``` ... ```)
    2. The full text verbatim

    Only strict json.loads is used; prose around an unfenced object is not
    searched.
    """
    if not isinstance(text, str):
        raise ValueError(f"Expected text, got {type(text).__name__}")

    candidate = find_fenced_block(text)
    if candidate is None:
        candidate = text.strip()

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Could not extract JSON from text: {text[:200]}...") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data
