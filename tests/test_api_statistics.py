"""Tests for the collection statistics endpoint."""

from httpx import AsyncClient

from cardvault.api.schemas import CardEntryModel
from cardvault.models.card import CardEntry


class TestStatisticsEndpoint:
    async def test_empty_collection(self, client: AsyncClient) -> None:
        response = await client.get("/statistics")

        assert response.status_code == 200
        data = response.json()
        assert data["total_series"] == 0
        assert data["missing_versions"] == 0
        assert data["completion_rate"] == 0.0
        assert data["artwork_counts"] == {"None": 0, "New": 0, "Alternative": 0}
        assert data["top_series"] == []

    async def test_reflects_saved_series_and_ownership(
        self, client: AsyncClient, sample_entries: list[CardEntry]
    ) -> None:
        cards = [CardEntryModel.from_entry(e).model_dump(mode="json") for e in sample_entries]
        saved = (await client.post("/series", json={"cards": cards})).json()
        detail = (await client.get(f"/series/{saved['series_id']}")).json()
        printing_id = detail["cards"][0]["printings"][0]["id"]
        await client.patch(f"/card-rarities/{printing_id}", json={"owned": True})

        data = (await client.get("/statistics")).json()

        assert data["total_series"] == 1
        assert data["total_cards"] == 4
        assert data["total_versions"] == 6
        assert data["owned_versions"] == 1
        assert data["missing_versions"] == 5
        assert data["completion_rate"] == 16.7
        assert data["rarity_counts"] == {"Secret Rare": 3, "Ultra Rare": 2, "Starlight Rare": 1}
        assert data["language_counts"] == {"FR": 1}
        assert data["top_series"] == [
            {
                "id": saved["series_id"],
                "code": "BLMM",
                "name": "Series BLMM",
                "owned": 1,
                "total": 6,
                "completion": 0.1667,
            }
        ]
