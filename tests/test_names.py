"""Tests for scraped name normalization."""

import pytest

from cardvault.parsers.names import (
    collapse_whitespace,
    normalize_card_name,
    normalize_localized_name,
)


class TestNormalizeCardName:
    def test_removes_quotes_and_normalises_spaces(self) -> None:
        """Surrounding quotes and repeated spaces are removed."""
        assert normalize_card_name('  "Blue-Eyes   White   Dragon" ') == "Blue-Eyes White Dragon"

    def test_strips_curly_quotes(self) -> None:
        assert normalize_card_name("“Dark Magician”") == "Dark Magician"

    def test_strips_only_one_quote_layer(self) -> None:
        """Nested quotes are unwrapped once."""
        assert normalize_card_name('""a""') == '"a"'

    def test_trailing_space_after_quote(self) -> None:
        assert normalize_card_name('"a" ') == "a"

    def test_collapses_newlines(self) -> None:
        assert normalize_card_name("Pot of\n   Greed") == "Pot of Greed"

    def test_quoted_multiline_name(self) -> None:
        assert normalize_card_name('"Pot of\nGreed"') == "Pot of Greed"

    def test_keeps_inner_quotes(self) -> None:
        """Quotes that do not wrap the whole name are kept."""
        assert normalize_card_name('"Dark Magician" Girl') == '"Dark Magician" Girl'

    def test_empty_input(self) -> None:
        assert normalize_card_name("") == ""
        assert normalize_card_name("   ") == ""

    def test_lone_quote_is_kept(self) -> None:
        assert normalize_card_name('"') == '"'

    @pytest.mark.parametrize(
        "name",
        [
            '  "Blue-Eyes   White   Dragon" ',
            "Pot of\n   Greed",
            "“Dark Magician”",
            "Plain",
            "",
        ],
    )
    def test_idempotent(self, name: str) -> None:
        """Normalizing twice gives the same result as once."""
        once = normalize_card_name(name)
        assert normalize_card_name(once) == once


class TestNormalizeLocalizedName:
    def test_handles_french_quotes_and_spacing(self) -> None:
        assert (
            normalize_localized_name('  "Dragon Blanc aux Yeux Bleus"  ')
            == "Dragon Blanc aux Yeux Bleus"
        )


class TestCollapseWhitespace:
    def test_collapses_tabs_and_newlines(self) -> None:
        assert collapse_whitespace(" BLMM-\tFR001 \n") == "BLMM- FR001"
