"""Markdown helpers — pulling front-matter fields out of generated SKILL.md text."""

from __future__ import annotations

import re
import secrets
import string

CATEGORIES = ("Dev", "Docs", "Testing", "Security", "DevOps", "Data")
DEFAULT_CATEGORY = "Dev"

MAX_NAME_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 200

_NAME_INVALID = re.compile(r"[^a-z0-9-]", re.ASCII)
_TOKEN_ALPHABET = string.ascii_letters + string.digits + "_-"


def random_token(size: int) -> str:
    """URL-safe random token (nanoid alphabet)."""
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(size))


def extract_field(content: str, field: str) -> str | None:
    """Return the value of the first line starting with ``<field>:``.

    This is a plain line-prefix scan, not a YAML parse: the front-matter
    comes from the model and its delimiters are never validated.
    """
    prefix = f"{field}:"
    for line in content.split("\n"):
        if line.startswith(prefix):
            return line[len(prefix):].strip()
    return None


def normalize_name(name: str) -> str:
    # No IGNORECASE: only ASCII a-z may survive, so lowercase before matching
    return _NAME_INVALID.sub("-", name.lower())[:MAX_NAME_LENGTH]


def fallback_name() -> str:
    # nanoid alphabet includes "_" and upper case, so normalise it too
    return normalize_name(f"skill-{random_token(6)}")


def normalize_description(description: str) -> str:
    return description[:MAX_DESCRIPTION_LENGTH]


def normalize_category(category: str | None) -> str | None:
    """Return the canonical category or None when it's not a known one."""
    if not category:
        return None
    for known in CATEGORIES:
        if category.strip().lower() == known.lower():
            return known
    return None
