"""Protocol for CardMastery repository."""

from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import CardId, DeckId, UserId
from bloomcrux.domain.learning.value_objects.mastery import CardMastery


class CardMasteryRepositoryProtocol(Protocol):
    """Interface for per-card mastery records (SM-2 state and cached signals)."""

    def find_by_deck(self, user_id: UserId, deck_id: DeckId) -> list[CardMastery]: ...

    def find_by_cards(self, user_id: UserId, card_ids: list[CardId]) -> dict[int, CardMastery]:
        """
        Get records for the given cards.

        Returns:
            Mapping of card id value to record; cards never reviewed are absent
        """
        ...

    def save_all(self, user_id: UserId, deck_id: DeckId, masteries: list[CardMastery]) -> None:
        """Insert or update records keyed by (user, card)."""
        ...

    def delete_by_deck(self, user_id: UserId, deck_id: DeckId) -> int: ...
