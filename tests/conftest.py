from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardvault.db.database import get_session
from cardvault.main import app
from cardvault.models.card import ArtworkKind, CardEntry
from cardvault.models.db import Base

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def card_list_page() -> str:
    """Yugipedia set card list page (French edition) with edge-case rows."""
    return (FIXTURES / "set_card_list.html").read_text(encoding="utf-8")


@pytest.fixture
def blue_eyes_row_html() -> str:
    """A single table body row with two rarities and a new artwork hint."""
    return """<tbody>
<tr>
<td>BLMM-FR001</td>
<td>"Blue-Eyes White Dragon"</td>
<td>"Dragon Blanc aux Yeux Bleus"</td>
<td><a href="/wiki/Secret_Rare">Secret Rare</a><a href="/wiki/Starlight_Rare">Starlight Rare</a></td>
<td>Normal Monster</td>
<td>New artwork</td>
</tr>
</tbody>"""


@pytest.fixture
def sample_entries() -> list[CardEntry]:
    """Entries as extracted from the card list page fixture."""
    return [
        CardEntry("BLMM-FR001", "Blue-Eyes White Dragon", "Dragon Blanc", "Secret Rare",
                  "Normal Monster", ArtworkKind.NEW),
        CardEntry("BLMM-FR001", "Blue-Eyes White Dragon", "Dragon Blanc", "Starlight Rare",
                  "Normal Monster", ArtworkKind.NEW),
        CardEntry("BLMM-FR002", "Dark Magician", "Magicien Sombre", "Ultra Rare",
                  "Normal Monster", ArtworkKind.ALTERNATIVE),
        CardEntry("BLMM-FR002", "Dark Magician", "Magicien Sombre", "Secret Rare",
                  "Normal Monster", ArtworkKind.NONE),
        CardEntry("BLMM-FR002", "Dark Magician", "Magicien Sombre", "Ultra Rare",
                  "Normal Monster", ArtworkKind.NONE),
        CardEntry("BLMM-FR003", "Pot of Greed", "Pot de Cupidité", "Secret Rare",
                  "Normal Spell Card", ArtworkKind.NONE),
    ]


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Provide an async test client with overridden database session."""

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
