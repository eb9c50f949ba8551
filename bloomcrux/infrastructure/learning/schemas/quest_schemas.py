"""Pydantic schemas for Quest API request/response validation."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.infrastructure.library.schemas import Card


class MissionDebugInfo(BaseModel):
    """Counts explaining how a mission was assembled."""

    primary_count: int
    blasts_requested: int
    blasts_chosen: int
    review_requested: int
    review_chosen: int
    trimmed_from_blasts: int
    trimmed_from_review: int
    total: int


class MissionResponse(BaseModel):
    """A composed mission. ``cards`` follows ``mission_ids`` order."""

    deck_id: int
    bloom_level: BloomLevel
    mission_index: int
    total_missions: int
    seed_used: str
    primary_ids: list[int]
    blasts_ids: list[int]
    review_ids: list[int]
    mission_ids: list[int]
    cards: list[Card]
    debug: MissionDebugInfo


class LevelBreakdownPayload(BaseModel):
    """Score of one Bloom level inside a mixed mission."""

    model_config = ConfigDict(populate_by_name=True)

    score_pct: float = Field(..., ge=0, le=100, alias="scorePct")
    cards_seen: int = Field(..., ge=0, alias="cardsSeen")
    cards_correct: int = Field(..., ge=0, alias="cardsCorrect")


class MissionCompleteRequest(BaseModel):
    """Schema for reporting a finished mission."""

    bloom_level: BloomLevel = Field(..., description="Level the mission was played at")
    score_pct: float = Field(..., ge=0, le=100, description="Mission score in percent")
    cards_seen: int = Field(0, ge=0)
    cards_correct: int = Field(0, ge=0)
    mode: str = Field("quest", description="quest, remix, drill, study or starred")
    started_at: datetime | None = None
    breakdown: dict[BloomLevel, LevelBreakdownPayload] | None = Field(
        None, description="Per-level scores of a mixed mission"
    )


class MissionCompleteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    attempt_id: int = Field(..., serialization_alias="attemptId")
    unlocked: bool = Field(..., description="Whether the score cleared the level")


class QuestProgressResponse(BaseModel):
    """Per-level quest progress keyed by level name."""

    deck_id: int
    per_bloom: dict[str, dict[str, Any]]
    unlocked_levels: list[BloomLevel]
    mastered: bool


class QuestResetRequest(BaseModel):
    wipe_xp: bool = Field(False, description="Also delete the deck's XP events")


class QuestResetResponse(BaseModel):
    success: bool
    message: str
    attempts_cleared: int
    performance_cleared: int
    card_mastery_cleared: int
    level_mastery_cleared: int
    xp_events_cleared: int


class MissionAttemptSchema(BaseModel):
    id: int
    bloom_level: BloomLevel
    mode: str
    score_pct: float
    cards_seen: int
    cards_correct: int
    breakdown: dict[BloomLevel, LevelBreakdownPayload]
    started_at: datetime | None = None
    ended_at: datetime | None = None


class MissionAttemptsResponse(BaseModel):
    attempts: list[MissionAttemptSchema] = Field(..., description="Newest first")


class CardPerformanceSchema(BaseModel):
    card_id: int
    attempts: int = Field(..., ge=0)
    correct: int = Field(..., ge=0)
    last_seen_at: datetime | None = None


class CardPerformanceListResponse(BaseModel):
    performance: list[CardPerformanceSchema]


class CardPerformanceMergeRequest(BaseModel):
    """Running totals reported by a client; merged forward, never rolled back."""

    performance: list[CardPerformanceSchema] = Field(..., min_length=1)
