"""Per-card quest performance counters."""

from dataclasses import dataclass
from datetime import datetime

from bloomcrux.domain.common.exceptions import ValidationError
from bloomcrux.domain.common.value_objects.ids import CardId, DeckId, UserId

MAX_ATTEMPT_INCREMENT_PER_CALL = 200
MAX_TOTAL_ATTEMPTS = 10_000


@dataclass
class CardPerformance:
    """
    Attempts and correct answers a learner has on one card of a deck.

    Clients report running totals. Merging only ever moves the counters
    forward, by bounded steps, and never lets ``correct`` exceed
    ``attempts``.
    """

    user_id: UserId
    deck_id: DeckId
    card_id: CardId
    attempts: int = 0
    correct: int = 0
    last_seen_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.attempts < 0 or self.correct < 0:
            raise ValidationError("Performance counters cannot be negative")
        if self.correct > self.attempts:
            self.correct = self.attempts

    @property
    def wrong(self) -> int:
        return self.attempts - self.correct

    @property
    def accuracy(self) -> float:
        return self.correct / self.attempts if self.attempts else 0.0

    def merge_reported(
        self, attempts: int, correct: int, last_seen_at: datetime | None = None
    ) -> None:
        """Fold client-reported totals into the stored counters."""
        delta_attempts = max(0, attempts - self.attempts)
        delta_correct = max(0, correct - self.correct)
        delta_attempts = min(delta_attempts, MAX_ATTEMPT_INCREMENT_PER_CALL)
        delta_correct = min(delta_correct, delta_attempts)

        self.attempts = min(MAX_TOTAL_ATTEMPTS, self.attempts + delta_attempts)
        self.correct = min(self.attempts, self.correct + delta_correct)
        if last_seen_at is not None:
            self.last_seen_at = last_seen_at

    def record_answer(self, correct: bool, at: datetime) -> None:
        self.attempts = min(MAX_TOTAL_ATTEMPTS, self.attempts + 1)
        if correct:
            self.correct = min(self.attempts, self.correct + 1)
        self.last_seen_at = at

    @classmethod
    def empty(cls, user_id: UserId, deck_id: DeckId, card_id: CardId) -> "CardPerformance":
        return cls(user_id=user_id, deck_id=deck_id, card_id=card_id)
