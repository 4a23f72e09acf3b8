"""
Parser for Yugipedia "Set Card Lists" tables.

Table layout (one printing per row):
    | Code       | English name | Localized name | Rarity links         | Type  | Artwork hint |
    | BLMM-FR001 | "Dark ..."   | "Magicien ..." | Secret Rare, Starl.. | Monst | New artwork  |

Each row fans out to one CardEntry per rarity link. Header rows, short rows,
rows without a code and rows without a rarity are skipped silently.

The parser only needs a tabular document whose cells yield text and link
labels (TableDocument). HtmlTableDocument implements it with BeautifulSoup.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from bs4 import BeautifulSoup, Tag

from cardvault.models.card import CardEntry, RawTableRow
from cardvault.parsers.artwork import detect_artwork
from cardvault.parsers.names import (
    collapse_whitespace,
    normalize_card_name,
    normalize_localized_name,
)

logger = logging.getLogger(__name__)

# Column positions
CODE_CELL = 0
ENGLISH_NAME_CELL = 1
LOCALIZED_NAME_CELL = 2
RARITY_CELL = 3
TYPE_CELL = 4
EXTRA_HINT_CELL = 5

MIN_DATA_CELLS = 4


class TableCell(Protocol):
    """A table cell: its text and the labels of the links it contains."""

    def text(self) -> str: ...

    def link_labels(self) -> list[str]: ...


class TableRow(Protocol):
    """A table row. Header rows have no data cells."""

    @property
    def cells(self) -> Sequence[TableCell]: ...


class TableDocument(Protocol):
    """A document holding one card table."""

    def rows(self) -> Iterable[TableRow]: ...


class HtmlTableCell:
    """TableCell backed by a BeautifulSoup <td>."""

    def __init__(self, tag: Tag):
        self._tag = tag

    def text(self) -> str:
        return self._tag.get_text()

    def link_labels(self) -> list[str]:
        labels = (link.get_text().strip() for link in self._tag.find_all("a"))
        return [label for label in labels if label]


class HtmlTableRow:
    """TableRow backed by a BeautifulSoup <tr>. Only <td> cells count as data."""

    def __init__(self, tag: Tag):
        self._cells = [HtmlTableCell(td) for td in tag.find_all("td")]

    @property
    def cells(self) -> Sequence[HtmlTableCell]:
        return self._cells


class HtmlTableDocument:
    """
    TableDocument over card table markup.

    Accepts a full page, a <table>, or a bare <tbody> fragment as returned by
    the page fetcher. Rows come from the first <tbody>, or the first <table>
    if the markup has no <tbody>.
    """

    def __init__(self, html: str):
        self._soup = BeautifulSoup(_wrap_table_body(html), "html.parser")

    def rows(self) -> list[HtmlTableRow]:
        body = self._soup.find("tbody") or self._soup.find("table")
        if not isinstance(body, Tag):
            return []
        return [HtmlTableRow(tr) for tr in body.find_all("tr")]


def _wrap_table_body(html: str) -> str:
    """Wrap a bare <tbody> fragment in a <table>."""
    trimmed = html.strip()
    if not trimmed:
        return ""
    return f"<table>{html}</table>" if trimmed.startswith("<tbody") else html


def _cell_text(cells: Sequence[TableCell], index: int) -> str | None:
    return cells[index].text() if index < len(cells) else None


def extract_raw_rows(document: TableDocument) -> list[RawTableRow]:
    """
    Extract the relevant cells of every data row.

    Rows with fewer than four data cells (headers, separators) are dropped.
    """
    raw_rows: list[RawTableRow] = []

    for row in document.rows():
        cells = row.cells
        if len(cells) < MIN_DATA_CELLS:
            continue

        raw_rows.append(
            RawTableRow(
                code=cells[CODE_CELL].text(),
                english_name_raw=cells[ENGLISH_NAME_CELL].text(),
                localized_name_raw=cells[LOCALIZED_NAME_CELL].text(),
                rarity_labels=tuple(cells[RARITY_CELL].link_labels()),
                type_raw=_cell_text(cells, TYPE_CELL) or "",
                extra_hint_raw=_cell_text(cells, EXTRA_HINT_CELL),
            )
        )

    return raw_rows


def parse_rows(rows: Iterable[RawTableRow]) -> list[CardEntry]:
    """
    Turn raw table rows into card entries, one per (row x rarity).

    Args:
        rows: Raw rows in table order

    Returns:
        Card entries in row order, then rarity order
    """
    entries: list[CardEntry] = []
    skipped = 0

    for row in rows:
        code = collapse_whitespace(row.code)
        if not code:
            skipped += 1
            continue

        rarities = [label.strip() for label in row.rarity_labels if label.strip()]
        if not rarities:
            skipped += 1
            continue

        detection = detect_artwork(code, row.english_name_raw, row.extra_hint_raw or "")
        name_english = detection.cleaned_english_name or normalize_card_name(row.english_name_raw)
        name_localized = normalize_localized_name(row.localized_name_raw)
        card_type = collapse_whitespace(row.type_raw)

        for rarity in rarities:
            entries.append(
                CardEntry(
                    code=code,
                    name_english=name_english,
                    name_localized=name_localized,
                    rarity=rarity,
                    type=card_type,
                    artwork=detection.artwork,
                )
            )

    if skipped:
        logger.debug("Skipped %d rows without code or rarity", skipped)

    return entries


def parse_cards_from_html(html: str) -> list[CardEntry]:
    """
    Convenience function: parse card table markup directly to entries.

    Returns an empty list for empty markup or markup without a table.
    """
    if not html or not html.strip():
        return []
    return parse_rows(extract_raw_rows(HtmlTableDocument(html)))
