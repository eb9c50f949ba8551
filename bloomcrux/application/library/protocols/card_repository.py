"""Protocol for Card repository."""

from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import CardId, DeckId, UserId
from bloomcrux.domain.library.entities.card import Card


class CardRepositoryProtocol(Protocol):
    """Interface for card persistence. Ownership is checked through the deck."""

    def find_by_id(self, card_id: CardId, user_id: UserId) -> Card | None:
        """
        Find a card by ID with deck ownership check.

        Args:
            card_id: The card ID
            user_id: The user ID owning the card's deck

        Returns:
            Card entity if found and owned by user, None otherwise
        """
        ...

    def find_by_deck(self, deck_id: DeckId) -> list[Card]:
        """Cards of a deck ordered by position, then id."""
        ...

    def find_starred(self, deck_id: DeckId) -> list[Card]: ...

    def next_position(self, deck_id: DeckId) -> int:
        """Position after the deck's last card."""
        ...

    def save(self, card: Card) -> Card: ...

    def delete(self, card_id: CardId, user_id: UserId) -> bool: ...
