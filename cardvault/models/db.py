"""
SQLAlchemy ORM models for persistent storage.

A series (one language edition of a set) owns its cards. Each card is
unique per (series, code, artwork) and is linked to the rarities it was
printed in; the link row also tracks whether the printing is owned.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class LanguageDB(Base):
    """A print language (EN, FR, ...)."""

    __tablename__ = "languages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(8), unique=True, index=True)
    label: Mapped[str] = mapped_column(String(64))

    series: Mapped[list["SeriesDB"]] = relationship(back_populates="language")

    def __repr__(self) -> str:
        return f"<LanguageDB(code={self.code})>"


class SeriesDB(Base):
    """
    One language edition of a card set.

    Unique per (code, language): the same set may be imported once per language.
    """

    __tablename__ = "series"
    __table_args__ = (UniqueConstraint("code", "language_id", name="uq_series_code_language"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(32), index=True)
    name: Mapped[str] = mapped_column(String(255))
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Number of (card x rarity) entries submitted, before grouping
    total_cards: Mapped[int] = mapped_column(Integer, default=0)
    language_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("languages.id", ondelete="RESTRICT"), index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    language: Mapped["LanguageDB"] = relationship(back_populates="series")
    cards: Mapped[list["CardDB"]] = relationship(
        back_populates="series", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<SeriesDB(id={self.id}, code={self.code})>"


class CardDB(Base):
    """A card of a series, one row per (code, artwork)."""

    __tablename__ = "cards"
    __table_args__ = (
        UniqueConstraint("series_id", "code", "artwork", name="uq_card_series_code_artwork"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    series_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("series.id", ondelete="CASCADE"), index=True
    )
    code: Mapped[str] = mapped_column(String(32), index=True)
    # Display name: localized name, English name when no localized name is known
    name: Mapped[str] = mapped_column(String(255))
    name_english: Mapped[str] = mapped_column(String(255), default="")
    name_localized: Mapped[str] = mapped_column(String(255), default="")
    artwork: Mapped[str] = mapped_column(String(16), default="None")

    series: Mapped["SeriesDB"] = relationship(back_populates="cards")
    rarities: Mapped[list["CardRarityDB"]] = relationship(
        back_populates="card", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<CardDB(code={self.code}, artwork={self.artwork})>"


class RarityDB(Base):
    """Rarity reference record, shared across series."""

    __tablename__ = "rarities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<RarityDB(name={self.name})>"


class CardRarityDB(Base):
    """
    A printing: a card in one rarity.

    Tracks ownership of that printing.
    """

    __tablename__ = "card_rarities"
    __table_args__ = (UniqueConstraint("card_id", "rarity_id", name="uq_card_rarity"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    card_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cards.id", ondelete="CASCADE"), index=True
    )
    rarity_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("rarities.id", ondelete="RESTRICT"), index=True
    )
    owned: Mapped[bool] = mapped_column(Boolean, default=False)
    condition: Mapped[str] = mapped_column(String(8), default="NM")
    purchase_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    acquired_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    card: Mapped["CardDB"] = relationship(back_populates="rarities")
    rarity: Mapped["RarityDB"] = relationship()

    def __repr__(self) -> str:
        return f"<CardRarityDB(card_id={self.card_id}, rarity_id={self.rarity_id})>"
