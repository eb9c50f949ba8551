"""Protocol for CardPerformance repository."""

from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.entities.card_performance import CardPerformance


class CardPerformanceRepositoryProtocol(Protocol):
    """Interface for per-card quest counters."""

    def find_by_deck(self, user_id: UserId, deck_id: DeckId) -> list[CardPerformance]: ...

    def save_all(self, performances: list[CardPerformance]) -> list[CardPerformance]:
        """Insert or update counters keyed by (user, deck, card)."""
        ...

    def delete_by_deck(self, user_id: UserId, deck_id: DeckId) -> int: ...
