"""Protocol for Deck repository."""

from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import DeckId, FolderId, UserId
from bloomcrux.domain.library.entities.deck import Deck


class DeckRepositoryProtocol(Protocol):
    """Interface for deck persistence."""

    def find_by_id(self, deck_id: DeckId, user_id: UserId) -> Deck | None:
        """
        Find a deck by ID with user ownership check.

        Args:
            deck_id: The deck ID
            user_id: The user ID for ownership verification

        Returns:
            Deck entity if found and owned by user, None otherwise
        """
        ...

    def find_by_user(
        self, user_id: UserId, folder_id: FolderId | None = None, unfiled_only: bool = False
    ) -> list[Deck]:
        """
        List the user's decks, newest first.

        Args:
            user_id: Owner of the decks
            folder_id: Only decks in this folder
            unfiled_only: Only decks outside any folder (ignored when folder_id is set)
        """
        ...

    def count_cards_by_deck(self, user_id: UserId) -> dict[int, int]:
        """Card count per deck id for the user's decks."""
        ...

    def unfile_folder(self, folder_id: FolderId, user_id: UserId) -> int:
        """Move every deck out of a folder. Returns the number of decks moved."""
        ...

    def save(self, deck: Deck) -> Deck: ...

    def delete(self, deck_id: DeckId, user_id: UserId) -> bool: ...
