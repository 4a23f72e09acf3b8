"""Tests for the set card list table parser."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from cardvault.models.card import ArtworkKind, CardEntry, RawTableRow
from cardvault.parsers.card_table import (
    HtmlTableDocument,
    extract_raw_rows,
    parse_cards_from_html,
    parse_rows,
)


@dataclass
class FakeCell:
    content: str = ""
    links: list[str] = field(default_factory=list)

    def text(self) -> str:
        return self.content

    def link_labels(self) -> list[str]:
        return self.links


@dataclass
class FakeRow:
    cells: Sequence[FakeCell]


@dataclass
class FakeDocument:
    table_rows: list[FakeRow]

    def rows(self) -> list[FakeRow]:
        return self.table_rows


class TestHtmlTableDocument:
    def test_wraps_bare_table_body(self, blue_eyes_row_html: str) -> None:
        rows = HtmlTableDocument(blue_eyes_row_html).rows()

        assert len(rows) == 1
        assert len(rows[0].cells) == 6

    def test_header_rows_have_no_data_cells(self, card_list_page: str) -> None:
        rows = HtmlTableDocument(card_list_page).rows()

        assert len(rows[0].cells) == 0

    def test_link_labels_skip_empty_links(self) -> None:
        html = "<table><tr><td><a>Secret Rare</a><a> </a><a>Ultra Rare</a></td></tr></table>"

        cell = HtmlTableDocument(html).rows()[0].cells[0]

        assert cell.link_labels() == ["Secret Rare", "Ultra Rare"]

    def test_markup_without_table(self) -> None:
        assert HtmlTableDocument("<p>No cards here</p>").rows() == []


class TestExtractRawRows:
    def test_drops_short_rows(self, card_list_page: str) -> None:
        """Header and colspan rows never become raw rows."""
        raw_rows = extract_raw_rows(HtmlTableDocument(card_list_page))

        assert len(raw_rows) == 6

    def test_reads_cells_by_position(self, blue_eyes_row_html: str) -> None:
        row = extract_raw_rows(HtmlTableDocument(blue_eyes_row_html))[0]

        assert row.code == "BLMM-FR001"
        assert row.english_name_raw == '"Blue-Eyes White Dragon"'
        assert row.localized_name_raw == '"Dragon Blanc aux Yeux Bleus"'
        assert row.rarity_labels == ("Secret Rare", "Starlight Rare")
        assert row.type_raw == "Normal Monster"
        assert row.extra_hint_raw == "New artwork"

    def test_optional_cells_missing(self) -> None:
        document = FakeDocument(
            [FakeRow([FakeCell("X-EN001"), FakeCell("A"), FakeCell("B"), FakeCell(links=["R"])])]
        )

        row = extract_raw_rows(document)[0]

        assert row.type_raw == ""
        assert row.extra_hint_raw is None

    def test_works_with_any_table_document(self) -> None:
        document = FakeDocument(
            [
                FakeRow([FakeCell("header")]),
                FakeRow(
                    [
                        FakeCell("X-EN001"),
                        FakeCell("Name"),
                        FakeCell("Nom"),
                        FakeCell(links=["Common"]),
                        FakeCell("Spell"),
                    ]
                ),
            ]
        )

        entries = parse_rows(extract_raw_rows(document))

        assert entries == [CardEntry("X-EN001", "Name", "Nom", "Common", "Spell")]


class TestParseRows:
    def test_one_entry_per_rarity(self, blue_eyes_row_html: str) -> None:
        """A row with two rarities yields two entries sharing every other field."""
        entries = parse_cards_from_html(blue_eyes_row_html)

        assert entries == [
            CardEntry(
                code="BLMM-FR001",
                name_english="Blue-Eyes White Dragon",
                name_localized="Dragon Blanc aux Yeux Bleus",
                rarity="Secret Rare",
                type="Normal Monster",
                artwork=ArtworkKind.NEW,
            ),
            CardEntry(
                code="BLMM-FR001",
                name_english="Blue-Eyes White Dragon",
                name_localized="Dragon Blanc aux Yeux Bleus",
                rarity="Starlight Rare",
                type="Normal Monster",
                artwork=ArtworkKind.NEW,
            ),
        ]

    def test_three_rarities_three_entries(self) -> None:
        rows = [RawTableRow("X-EN001", "A", "B", ("Common", "Rare", "Super Rare"), "Spell")]

        entries = parse_rows(rows)

        assert [e.rarity for e in entries] == ["Common", "Rare", "Super Rare"]
        assert {(e.code, e.name_english, e.name_localized, e.type, e.artwork) for e in entries} == {
            ("X-EN001", "A", "B", "Spell", ArtworkKind.NONE)
        }

    def test_skips_row_without_code(self) -> None:
        rows = [RawTableRow("   ", '"Kuriboh"', "Kuriboh", ("Ultra Rare",))]

        assert parse_rows(rows) == []

    def test_skips_row_without_rarity(self) -> None:
        rows = [
            RawTableRow("X-EN001", "A", "B", ()),
            RawTableRow("X-EN002", "A", "B", ("  ",)),
        ]

        assert parse_rows(rows) == []

    def test_trims_rarity_labels(self) -> None:
        rows = [RawTableRow("X-EN001", "A", "B", (" Rare ",))]

        assert parse_rows(rows)[0].rarity == "Rare"

    def test_name_annotation_cleaned(self) -> None:
        rows = [RawTableRow("X-EN001", '"Dark Magician (Alternate Artwork)"', "", ("Rare",))]

        entry = parse_rows(rows)[0]

        assert entry.name_english == "Dark Magician"
        assert entry.artwork == ArtworkKind.ALTERNATIVE

    def test_code_suffix_artwork(self) -> None:
        rows = [RawTableRow(" X-EN001-NEW ", "Name", "", ("Rare",))]

        entry = parse_rows(rows)[0]

        assert entry.code == "X-EN001-NEW"
        assert entry.artwork == ArtworkKind.NEW

    def test_missing_english_name_stays_empty(self) -> None:
        """Entries are not rejected here; completeness is checked on submission."""
        rows = [RawTableRow("X-EN001", "  ", "Nom", ("Rare",))]

        entry = parse_rows(rows)[0]

        assert entry.name_english == ""
        assert not entry.is_complete


class TestParseCardsFromHtml:
    def test_full_page(self, card_list_page: str) -> None:
        entries = parse_cards_from_html(card_list_page)

        assert len(entries) == 6
        assert [e.code for e in entries] == [
            "BLMM-FR001",
            "BLMM-FR001",
            "BLMM-FR002",
            "BLMM-FR002",
            "BLMM-FR002",
            "BLMM-FR003",
        ]

    def test_extra_cell_hint(self, card_list_page: str) -> None:
        entries = parse_cards_from_html(card_list_page)

        assert entries[0].artwork == ArtworkKind.NEW
        assert entries[0].name_english == "Blue-Eyes White Dragon"

    def test_alternate_artwork_row(self, card_list_page: str) -> None:
        entries = parse_cards_from_html(card_list_page)

        alternate = entries[2]
        assert alternate.name_english == "Dark Magician"
        assert alternate.name_localized == "Magicien Sombre"
        assert alternate.artwork == ArtworkKind.ALTERNATIVE
        assert alternate.rarity == "Ultra Rare"

    def test_multiline_name(self, card_list_page: str) -> None:
        entries = parse_cards_from_html(card_list_page)

        assert entries[-1].name_english == "Pot of Greed"
        assert entries[-1].type == "Normal Spell Card"
        assert entries[-1].artwork == ArtworkKind.NONE

    def test_empty_input(self) -> None:
        assert parse_cards_from_html("") == []
        assert parse_cards_from_html("   ") == []

    def test_markup_without_rows(self) -> None:
        assert parse_cards_from_html("<tbody></tbody>") == []
