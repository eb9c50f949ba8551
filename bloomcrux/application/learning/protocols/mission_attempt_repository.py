"""Protocol for MissionAttempt repository."""

from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.entities.mission_attempt import MissionAttempt


class MissionAttemptRepositoryProtocol(Protocol):
    """Interface for mission attempt persistence."""

    def save(self, attempt: MissionAttempt) -> MissionAttempt: ...

    def find_recent(
        self, user_id: UserId, deck_id: DeckId, limit: int = 20
    ) -> list[MissionAttempt]:
        """
        Get the latest attempts on a deck.

        Args:
            user_id: The user ID
            deck_id: The deck ID
            limit: Maximum number of attempts

        Returns:
            Attempts ordered by ended_at DESC
        """
        ...

    def delete_by_deck(self, user_id: UserId, deck_id: DeckId) -> int: ...
