from cardvault.parsers.artwork import ArtworkDetection, detect_artwork
from cardvault.parsers.card_table import (
    HtmlTableDocument,
    TableDocument,
    extract_raw_rows,
    parse_cards_from_html,
    parse_rows,
)
from cardvault.parsers.language import (
    DEFAULT_LANGUAGE_CODE,
    LANGUAGE_OPTIONS,
    detect_dominant_language,
    detect_language_from_code,
    get_language_label,
    resolve_language_code,
)
from cardvault.parsers.names import normalize_card_name, normalize_localized_name

__all__ = [
    "ArtworkDetection",
    "DEFAULT_LANGUAGE_CODE",
    "HtmlTableDocument",
    "LANGUAGE_OPTIONS",
    "TableDocument",
    "detect_artwork",
    "detect_dominant_language",
    "detect_language_from_code",
    "extract_raw_rows",
    "get_language_label",
    "normalize_card_name",
    "normalize_localized_name",
    "parse_cards_from_html",
    "parse_rows",
    "resolve_language_code",
]
