"""
Series code and name inference.

    derive_series_code("blmm-fr001")  -> "BLMM"
    extract_series_name_from_url(
        "https://yugipedia.com/wiki/Set_Card_Lists:Battles_of_Legend:_Monster_Mayhem_(TCG-FR)"
    ) -> "Battles of Legend: Monster Mayhem"
"""

import re
from urllib.parse import unquote

MAX_SERIES_CODE_LENGTH = 10

SET_CARD_LISTS_MARKER = "Set_Card_Lists:"
WIKI_MARKER = "/wiki/"

# Region suffixes of Yugipedia page titles
REGION_SUFFIX_PATTERN = re.compile(r"\((?:TCG-[A-Z]{2}|TCG|OCG)\)$", re.IGNORECASE)


def derive_series_code(card_code: str) -> str:
    """Series code of a card code: the part before the first dash, uppercased."""
    if not card_code:
        return ""

    trimmed = card_code.strip().upper()
    prefix, separator, _ = trimmed.partition("-")
    if separator and prefix:
        return prefix[:MAX_SERIES_CODE_LENGTH]
    return trimmed[:MAX_SERIES_CODE_LENGTH]


def extract_series_name_from_url(url: str) -> str:
    """
    Human readable series name from a Yugipedia URL.

    Returns an empty string if the URL is not a wiki page URL.
    """
    if not url:
        return ""

    if SET_CARD_LISTS_MARKER in url:
        title = url.split(SET_CARD_LISTS_MARKER, 1)[1]
    elif WIKI_MARKER in url:
        title = url.split(WIKI_MARKER, 1)[1]
    else:
        return ""

    title = title.split("?", 1)[0].split("#", 1)[0]
    title = REGION_SUFFIX_PATTERN.sub("", unquote(title).strip())
    title = title.replace("&colon;", ":").replace("_", " ")
    return re.sub(r"\s+", " ", title).strip()
