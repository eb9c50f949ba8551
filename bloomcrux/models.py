"""Database models."""

from datetime import UTC, date, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bloomcrux.database import Base


def utc_now() -> datetime:
    return datetime.now(UTC)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class User(TimestampMixin, Base):
    """A user known to the identity provider."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    external_id: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)

    decks: Mapped[list["Deck"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, external_id='{self.external_id}')>"


class Folder(TimestampMixin, Base):
    __tablename__ = "folders"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_folder_user_name"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"


class Deck(TimestampMixin, Base):
    __tablename__ = "decks"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    folder_id: Mapped[int | None] = mapped_column(
        ForeignKey("folders.id", ondelete="SET NULL"), index=True, nullable=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped[User] = relationship(back_populates="decks")
    cards: Mapped[list["Card"]] = relationship(
        back_populates="deck",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Card.position, Card.id",
    )

    def __repr__(self) -> str:
        return f"<Deck(id={self.id}, title='{self.title}')>"


class Card(TimestampMixin, Base):
    __tablename__ = "cards"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    deck_id: Mapped[int] = mapped_column(
        ForeignKey("decks.id", ondelete="CASCADE"), index=True, nullable=False
    )
    card_type: Mapped[str] = mapped_column(String(40), nullable=False)
    bloom_level: Mapped[str | None] = mapped_column(String(20), index=True, nullable=True)
    front: Mapped[str] = mapped_column(Text, nullable=False)
    back: Mapped[str] = mapped_column(Text, default="", nullable=False)
    meta: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    starred: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    deck: Mapped[Deck] = relationship(back_populates="cards")

    def __repr__(self) -> str:
        return f"<Card(id={self.id}, deck_id={self.deck_id}, type='{self.card_type}')>"


class CardMastery(Base):
    """SM-2 state, spacing evidence and cached mastery signals of one card for one user."""

    __tablename__ = "card_masteries"
    __table_args__ = (UniqueConstraint("user_id", "card_id", name="uq_card_mastery_user_card"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    deck_id: Mapped[int] = mapped_column(
        ForeignKey("decks.id", ondelete="CASCADE"), index=True, nullable=False
    )
    card_id: Mapped[int] = mapped_column(
        ForeignKey("cards.id", ondelete="CASCADE"), index=True, nullable=False
    )
    bloom_level: Mapped[str] = mapped_column(String(20), nullable=False)
    card_type: Mapped[str | None] = mapped_column(String(40), nullable=True)

    # SM-2
    ef: Mapped[float] = mapped_column(Float, default=2.5, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    interval_days: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    next_due_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), index=True, nullable=True
    )
    history: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    lapses: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    stability: Mapped[float] = mapped_column(Float, default=1.0, nullable=False)
    difficulty: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    relearn_stage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    retention_target: Mapped[float] = mapped_column(Float, default=0.9, nullable=False)

    # Spacing evidence
    spaced_short_ok: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    spaced_long_ok: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    consecutive_spaced_successes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_gap_days: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Accuracy ring buffer and confidence EWMA
    accuracy_k: Mapped[int] = mapped_column(Integer, default=8, nullable=False)
    accuracy_ptr: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    accuracy_outcomes: Mapped[list[int]] = mapped_column(JSON, default=list, nullable=False)
    confidence_ewma: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    confidence_lambda: Mapped[float] = mapped_column(Float, default=0.6, nullable=False)

    # Cached signals
    retention: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    accuracy: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    confidence: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    mastery: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class CardPerformance(Base):
    __tablename__ = "card_performances"
    __table_args__ = (
        UniqueConstraint("user_id", "deck_id", "card_id", name="uq_card_performance"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    deck_id: Mapped[int] = mapped_column(
        ForeignKey("decks.id", ondelete="CASCADE"), index=True, nullable=False
    )
    card_id: Mapped[int] = mapped_column(
        ForeignKey("cards.id", ondelete="CASCADE"), index=True, nullable=False
    )
    attempts: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    correct: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_seen_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class BloomMastery(Base):
    __tablename__ = "bloom_masteries"
    __table_args__ = (
        UniqueConstraint("user_id", "deck_id", "bloom_level", name="uq_bloom_mastery"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    deck_id: Mapped[int] = mapped_column(
        ForeignKey("decks.id", ondelete="CASCADE"), index=True, nullable=False
    )
    bloom_level: Mapped[str] = mapped_column(String(20), nullable=False)
    correctness_ewma: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    retention_strength: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    coverage: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    mastery_pct: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class MissionAttempt(Base):
    __tablename__ = "mission_attempts"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    deck_id: Mapped[int] = mapped_column(
        ForeignKey("decks.id", ondelete="CASCADE"), index=True, nullable=False
    )
    bloom_level: Mapped[str] = mapped_column(String(20), nullable=False)
    mode: Mapped[str] = mapped_column(String(20), default="quest", nullable=False)
    score_pct: Mapped[float] = mapped_column(Float, nullable=False)
    cards_seen: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    cards_correct: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    breakdown: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    ended_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, index=True, nullable=False
    )


class QuestProgress(TimestampMixin, Base):
    __tablename__ = "quest_progress"
    __table_args__ = (UniqueConstraint("user_id", "deck_id", name="uq_quest_progress"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    deck_id: Mapped[int] = mapped_column(
        ForeignKey("decks.id", ondelete="CASCADE"), index=True, nullable=False
    )
    per_bloom: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)


class UserEconomy(Base):
    __tablename__ = "user_economy"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    tokens: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    commander_xp: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    commander_level: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class XpEvent(Base):
    __tablename__ = "xp_events"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    deck_id: Mapped[int | None] = mapped_column(
        ForeignKey("decks.id", ondelete="SET NULL"), index=True, nullable=True
    )
    bloom_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    event_type: Mapped[str] = mapped_column(String(40), index=True, nullable=False)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, index=True, nullable=False
    )


class CosmeticPurchase(Base):
    __tablename__ = "cosmetic_purchases"
    __table_args__ = (
        UniqueConstraint("user_id", "cosmetic_id", name="uq_cosmetic_purchase"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    cosmetic_id: Mapped[str] = mapped_column(String(50), nullable=False)
    price_paid: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    purchased_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )


class UserSettings(Base):
    __tablename__ = "user_settings"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    default_cover: Mapped[str | None] = mapped_column(String(50), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class UserStreak(Base):
    __tablename__ = "user_streaks"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    current_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_activity_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    three_day_chest_claimed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    seven_day_chest_claimed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
