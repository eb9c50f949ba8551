"""DTOs for quest and mastery use cases."""

from dataclasses import dataclass
from datetime import datetime

from bloomcrux.domain.learning.services.mission_composer import MissionComposition
from bloomcrux.domain.learning.value_objects.mastery import BloomLevelMastery, GraduationCheck
from bloomcrux.domain.library.entities.card import Card


@dataclass
class Mission:
    """A composed mission with its cards in play order."""

    composition: MissionComposition
    cards: list[Card]
    mission_index: int
    total_missions: int


@dataclass
class CompletionResult:
    attempt_id: int
    unlocked: bool
    progress_updated: bool


@dataclass
class PerformanceReport:
    """Running totals a client reports for one card."""

    card_id: int
    attempts: int
    correct: int
    last_seen_at: datetime | None = None


@dataclass
class ReviewInput:
    card_id: int
    correctness: float
    response_ms: int | None = None
    confidence: int | None = None
    guessed: bool = False


@dataclass
class ResetResult:
    attempts_cleared: int
    performance_cleared: int
    card_mastery_cleared: int
    level_mastery_cleared: int
    xp_events_cleared: int


@dataclass
class LevelGraduation:
    summary: BloomLevelMastery
    check: GraduationCheck
