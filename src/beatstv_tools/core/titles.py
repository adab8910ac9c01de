"""Helpers for turning IPTV channel names into movie search queries."""

from __future__ import annotations

import re

_QUALITY_TAGS: tuple[str, ...] = (" HD", " SD", " 4K", " UHD", " FHD")

# "US| ", "[UK] ", "(FR): ", "DE - " ...
_REGION_PREFIX = re.compile(r"^[\[(]?[A-Z]{2,3}[\])]?[:|\-\s]+")

_YEAR_IN_PARENS = re.compile(r"\((\d{4})\)")


def clean_title(title: str) -> str:
    """Strip quality tags and a leading region tag from *title*.

    Quality tags are case-sensitive literal substrings; the year, if any,
    is left in place (see :func:`extract_year`).
    """
    cleaned = title.strip()
    for tag in _QUALITY_TAGS:
        cleaned = cleaned.replace(tag, "")
    cleaned = cleaned.strip()
    return _REGION_PREFIX.sub("", cleaned, count=1).strip()


def extract_year(title: str) -> int | None:
    """Return the first four-digit number wrapped in parentheses."""
    match = _YEAR_IN_PARENS.search(title)
    if match is None:
        return None
    return int(match.group(1))


def strip_year(title: str) -> str:
    """Remove every parenthesised four-digit year from *title*."""
    return " ".join(_YEAR_IN_PARENS.sub("", title).split())
