"""Tests for the series import job."""

from unittest.mock import AsyncMock, patch

import pytest

from cardvault.db.operations import SaveSeriesResult
from cardvault.jobs.import_series import build_parser, import_series, main
from cardvault.models.failure import DisallowedHostError, TableNotFoundError
from cardvault.models.language import LanguageCode
from cardvault.scrapers.yugipedia import extract_table_body

PAGE_URL = "https://yugipedia.com/wiki/Set_Card_Lists:Battles_of_Legend:_Monster_Mayhem_(TCG-FR)"


@pytest.fixture
def table_body(card_list_page: str) -> str:
    return extract_table_body(card_list_page)


@pytest.fixture
def mock_session() -> AsyncMock:
    session = AsyncMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=None)
    session.commit = AsyncMock()
    return session


def _saved(code: str = "BLMM", language: LanguageCode = LanguageCode.FR) -> SaveSeriesResult:
    return SaveSeriesResult(
        series_id=1,
        series_code=code,
        language=language,
        cards_added=4,
        rarities_processed=3,
        relations_created=6,
        original_entry_count=6,
    )


class TestImportSeries:
    @pytest.mark.asyncio
    async def test_import_saves_series(self, table_body: str, mock_session: AsyncMock):
        """Fetched cards are saved with derived code, name and language."""
        with (
            patch(
                "cardvault.jobs.import_series.fetch_card_table",
                new_callable=AsyncMock,
                return_value=table_body,
            ),
            patch("cardvault.jobs.import_series.init_db", new_callable=AsyncMock),
            patch(
                "cardvault.jobs.import_series.async_session_factory",
                return_value=mock_session,
            ),
            patch(
                "cardvault.jobs.import_series.save_series",
                new_callable=AsyncMock,
                return_value=_saved(),
            ) as mock_save,
        ):
            result = await import_series(PAGE_URL)

        assert result.cards_added == 4
        kwargs = mock_save.call_args.kwargs
        assert kwargs["series_code"] == "BLMM"
        assert kwargs["series_name"] == "Battles of Legend: Monster Mayhem"
        assert kwargs["language"] == LanguageCode.FR
        assert kwargs["source_url"] == PAGE_URL
        assert kwargs["entry_count"] == 6
        assert len(kwargs["groups"]) == 4
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_overrides(self, table_body: str, mock_session: AsyncMock):
        """Explicit code, name and language replace the derived ones."""
        with (
            patch(
                "cardvault.jobs.import_series.fetch_card_table",
                new_callable=AsyncMock,
                return_value=table_body,
            ),
            patch("cardvault.jobs.import_series.init_db", new_callable=AsyncMock),
            patch(
                "cardvault.jobs.import_series.async_session_factory",
                return_value=mock_session,
            ),
            patch(
                "cardvault.jobs.import_series.save_series",
                new_callable=AsyncMock,
                return_value=_saved("MM01", LanguageCode.DE),
            ) as mock_save,
        ):
            await import_series(PAGE_URL, series_code="mm01", series_name="Mayhem", language="de")

        kwargs = mock_save.call_args.kwargs
        assert kwargs["series_code"] == "MM01"
        assert kwargs["series_name"] == "Mayhem"
        assert kwargs["language"] == LanguageCode.DE

    @pytest.mark.asyncio
    async def test_dry_run_skips_database(self, table_body: str):
        """Dry runs never touch the database."""
        with (
            patch(
                "cardvault.jobs.import_series.fetch_card_table",
                new_callable=AsyncMock,
                return_value=table_body,
            ),
            patch("cardvault.jobs.import_series.init_db", new_callable=AsyncMock) as mock_init,
            patch("cardvault.jobs.import_series.save_series", new_callable=AsyncMock) as mock_save,
        ):
            result = await import_series(PAGE_URL, dry_run=True)

        assert result is None
        mock_init.assert_not_awaited()
        mock_save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self):
        with patch(
            "cardvault.jobs.import_series.fetch_card_table",
            new_callable=AsyncMock,
            side_effect=TableNotFoundError(PAGE_URL),
        ):
            with pytest.raises(TableNotFoundError):
                await import_series(PAGE_URL)


class TestMain:
    def test_parser_options(self):
        args = build_parser().parse_args([PAGE_URL, "--language", "FR", "--dry-run"])

        assert args.url == PAGE_URL
        assert args.language == "FR"
        assert args.dry_run is True
        assert args.series_code is None

    def test_main_success(self):
        with patch(
            "cardvault.jobs.import_series.import_series",
            new_callable=AsyncMock,
            return_value=None,
        ) as mock_import:
            assert main([PAGE_URL, "--dry-run"]) == 0

        mock_import.assert_awaited_once_with(
            PAGE_URL, series_code=None, series_name=None, language=None, dry_run=True
        )

    def test_main_known_error_exit_code(self):
        with patch(
            "cardvault.jobs.import_series.import_series",
            new_callable=AsyncMock,
            side_effect=DisallowedHostError("https://example.com/x", "example.com"),
        ):
            assert main(["https://example.com/x"]) == 1
