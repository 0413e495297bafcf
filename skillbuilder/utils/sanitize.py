"""Prompt sanitisation applied before anything reaches the generation API."""

from __future__ import annotations

import re
from typing import Any

MAX_INPUT_LENGTH = 2000

_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_ANGLE_BRACKETS = re.compile(r"[<>]")


def sanitize_input(value: Any, max_length: int = MAX_INPUT_LENGTH) -> str:
    """Truncate, strip script blocks and angle brackets, trim whitespace.

    Non-string input sanitises to an empty string.
    """
    if not isinstance(value, str):
        return ""

    text = value[:max_length]
    text = _SCRIPT_BLOCK.sub("", text)
    text = _ANGLE_BRACKETS.sub("", text)
    return text.strip()
