"""CSV value normalization — handles BOM, zero-width characters, spacing quirks."""

from __future__ import annotations

import re

# BOM (both byte orders), zero-width space/joiners, word joiner.
_INVISIBLE = re.compile("[\ufeff\ufffe\u200b\u200c\u200d\u2060]")
_TECH_NAME_JUNK = re.compile(r"[^\w\s@.\\-]")
TECHNICIAN_NAME_MAX = 50


def strip_invisible(value: str) -> str:
    """Drop invisible characters and turn non-breaking spaces into plain ones."""
    return _INVISIBLE.sub("", value).replace("\u00a0", " ")


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM and zero-width characters
    - Strips leading/trailing whitespace
    - Replaces runs of spaces / non-breaking spaces with a single underscore
    - Lowercases
    - Strips non-alphanumeric characters (except underscore)
    """
    name = strip_invisible(name).strip()
    name = re.sub(r"\s+", "_", name)
    name = name.lower()
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def normalize_columns(columns: list[str]) -> dict[str, str]:
    """Return mapping of original column names to normalized names."""
    return {col: normalize_column_name(col) for col in columns}


def clean_string(value: str | None) -> str | None:
    """Strip invisible characters and whitespace; None for empty strings."""
    if value is None:
        return None
    value = strip_invisible(value).strip()
    return value if value else None


def clean_technician_name(raw: str | None) -> str | None:
    """Tidy a technician column value: drop stray symbols, collapse spaces, cap length."""
    value = clean_string(raw)
    if value is None:
        return None
    value = _TECH_NAME_JUNK.sub("", value)
    value = re.sub(r"\s+", " ", value).strip()[:TECHNICIAN_NAME_MAX].strip()
    return value or None
