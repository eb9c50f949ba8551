"""Rolled-up mastery of one Bloom level of a deck."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from bloomcrux.domain.common.numbers import round_half_up
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.entities.card_performance import CardPerformance

EWMA_ALPHA = 0.4
MIN_CARD_RETENTION = 0.2
WEIGHT_RETENTION = 0.6
WEIGHT_CORRECTNESS = 0.3
WEIGHT_COVERAGE = 0.1


@dataclass
class BloomMastery:
    """
    Level mastery built from mission scores and card counters.

    ``correctness_ewma`` and ``mastery_pct`` are on a 0..100 scale;
    ``retention_strength`` and ``coverage`` are fractions.
    """

    user_id: UserId
    deck_id: DeckId
    bloom_level: BloomLevel
    correctness_ewma: float = 0.0
    retention_strength: float = 0.0
    coverage: float = 0.0
    mastery_pct: int = 0
    updated_at: datetime | None = None

    def record_mission(
        self,
        score_pct: float,
        level_card_ids: Iterable[int],
        performance: Iterable[CardPerformance],
        now: datetime,
    ) -> None:
        """
        Fold a mission score into the EWMA and recompute retention and coverage.

        Retention is the mean per-card accuracy (floored at 0.2) over cards
        the learner has attempted; coverage is the attempted share of the
        level's cards.
        """
        self.correctness_ewma = EWMA_ALPHA * score_pct + (1 - EWMA_ALPHA) * self.correctness_ewma

        card_ids = set(level_card_ids)
        attempted = [
            p for p in performance if p.card_id.value in card_ids and p.attempts > 0
        ]
        if card_ids:
            self.coverage = len(attempted) / len(card_ids)
            accuracies = [max(MIN_CARD_RETENTION, min(1.0, p.accuracy)) for p in attempted]
            self.retention_strength = sum(accuracies) / len(accuracies) if accuracies else 0.0
        else:
            self.coverage = 0.0
            self.retention_strength = 0.0

        raw = (
            WEIGHT_RETENTION * self.retention_strength * 100
            + WEIGHT_CORRECTNESS * self.correctness_ewma
            + WEIGHT_COVERAGE * self.coverage * 100
        )
        self.mastery_pct = max(0, min(100, round_half_up(raw)))
        self.updated_at = now

    @classmethod
    def empty(cls, user_id: UserId, deck_id: DeckId, bloom_level: BloomLevel) -> "BloomMastery":
        return cls(user_id=user_id, deck_id=deck_id, bloom_level=bloom_level)
