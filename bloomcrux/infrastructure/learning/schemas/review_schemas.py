"""Pydantic schemas for card reviews and mastery."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from bloomcrux.domain.learning.bloom import BloomLevel


class ReviewItem(BaseModel):
    """One answer to one card."""

    card_id: int
    correctness: float = Field(..., description="Fraction correct; clamped to 0..1")
    response_ms: int | None = Field(None, ge=0)
    confidence: int | None = Field(None, ge=0, le=3, description="Self rating 0..3")
    guessed: bool = False


class ReviewsRequest(BaseModel):
    reviews: list[ReviewItem] = Field(..., min_length=1)


class CardMasterySchema(BaseModel):
    """Per-card mastery signals and schedule."""

    card_id: int
    bloom_level: BloomLevel
    card_type: str | None = None
    retention: float
    accuracy: float
    confidence: float
    mastery: float
    ef: float
    reps: int
    interval_days: float
    lapses: int
    next_due_at: datetime | None = None
    updated_at: datetime | None = None


class CardMasteryListResponse(BaseModel):
    kind: Literal["due", "struggle", "reviewed"]
    cards: list[CardMasterySchema]


class DeckMasteryResponse(BaseModel):
    """Rolled-up mastery percent per level the learner has played."""

    deck_id: int
    levels: dict[BloomLevel, int]


class LevelGraduationResponse(BaseModel):
    deck_id: int
    bloom_level: BloomLevel
    mean_mastery: float
    weak_share: float
    cards: int
    graduated: bool
    reasons: list[str]
