"""
Clean-up of names scraped from card list tables.

Wiki tables quote card names and break long names over several lines:
    "Blue-Eyes White
     Dragon"
becomes
    Blue-Eyes White Dragon
"""

import re

# One layer of straight or curly double quotes around the whole text
QUOTED_PATTERN = re.compile(r'^["“](.*)["”]$', re.DOTALL)

WHITESPACE_PATTERN = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs (including newlines) to one space and trim."""
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def normalize_card_name(name: str) -> str:
    """
    Normalize a scraped card name.

    Trims, strips exactly one layer of wrapping double quotes, then collapses
    whitespace. Never fails; empty input gives an empty string.
    """
    normalized = name.strip()
    match = QUOTED_PATTERN.match(normalized)
    if match:
        normalized = match.group(1)
    return collapse_whitespace(normalized)


def normalize_localized_name(name: str) -> str:
    """Normalize the localized (non-English) name column."""
    return normalize_card_name(name)
