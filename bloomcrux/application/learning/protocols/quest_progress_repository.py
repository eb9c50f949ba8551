"""Protocol for QuestProgress repository."""

from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.entities.quest_progress import QuestProgress


class QuestProgressRepositoryProtocol(Protocol):
    """Interface for per-deck quest progress persistence."""

    def find(self, user_id: UserId, deck_id: DeckId) -> QuestProgress | None: ...

    def save(self, progress: QuestProgress) -> QuestProgress:
        """Insert or update the progress row of (user, deck)."""
        ...

    def delete(self, user_id: UserId, deck_id: DeckId) -> bool: ...
