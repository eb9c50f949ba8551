"""Mission attempt entity: one finished quest mission."""

from dataclasses import dataclass, field
from datetime import datetime

from bloomcrux.domain.common.entity import Entity
from bloomcrux.domain.common.exceptions import ValidationError
from bloomcrux.domain.common.value_objects.ids import DeckId, MissionAttemptId, UserId
from bloomcrux.domain.learning.bloom import BloomLevel

MISSION_MODES = ("quest", "remix", "drill", "study", "starred")


@dataclass
class LevelBreakdown:
    score_pct: float
    cards_seen: int
    cards_correct: int


@dataclass
class MissionAttempt(Entity[MissionAttemptId]):
    """
    Record of a completed mission.

    Business Rules:
    - Score is a percentage in [0, 100]
    - Cards correct never exceeds cards seen
    - Only ``quest`` missions advance quest progress
    """

    id: MissionAttemptId
    user_id: UserId
    deck_id: DeckId
    bloom_level: BloomLevel
    score_pct: float
    cards_seen: int
    cards_correct: int
    mode: str = "quest"
    breakdown: dict[BloomLevel, LevelBreakdown] = field(default_factory=dict)
    started_at: datetime | None = None
    ended_at: datetime | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.score_pct <= 100:
            raise ValidationError(
                "Score must be between 0 and 100", field="score_pct", value=self.score_pct
            )
        if self.cards_seen < 0 or self.cards_correct < 0:
            raise ValidationError("Card counts cannot be negative", field="cards_seen")
        if self.cards_correct > self.cards_seen:
            raise ValidationError(
                "Cards correct cannot exceed cards seen",
                field="cards_correct",
                value=self.cards_correct,
            )
        if self.mode not in MISSION_MODES:
            raise ValidationError(f"Unknown mission mode '{self.mode}'", field="mode")

    @property
    def is_quest(self) -> bool:
        return self.mode == "quest"

    @classmethod
    def create(
        cls,
        user_id: UserId,
        deck_id: DeckId,
        bloom_level: BloomLevel,
        score_pct: float,
        cards_seen: int,
        cards_correct: int,
        ended_at: datetime,
        mode: str = "quest",
        breakdown: dict[BloomLevel, LevelBreakdown] | None = None,
        started_at: datetime | None = None,
    ) -> "MissionAttempt":
        return cls(
            id=MissionAttemptId.generate(),
            user_id=user_id,
            deck_id=deck_id,
            bloom_level=bloom_level,
            score_pct=score_pct,
            cards_seen=cards_seen,
            cards_correct=cards_correct,
            mode=mode,
            breakdown=breakdown or {},
            started_at=started_at,
            ended_at=ended_at,
        )
