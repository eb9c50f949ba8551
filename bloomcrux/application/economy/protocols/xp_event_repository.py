"""Protocol for XpEvent repository."""

from datetime import datetime
from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.economy.entities.xp_event import XpEvent, XpEventType


class XpEventRepositoryProtocol(Protocol):
    """Interface for the economy audit log."""

    def save(self, event: XpEvent) -> XpEvent: ...

    def find_since(
        self,
        user_id: UserId,
        event_type: XpEventType,
        since: datetime,
        deck_id: DeckId | None = None,
    ) -> list[XpEvent]:
        """
        Get events of one type logged after ``since``.

        Args:
            user_id: The user ID
            event_type: Event type to match
            since: Lower bound on created_at (inclusive)
            deck_id: Only events for this deck, when given

        Returns:
            Matching events, newest first
        """
        ...

    def delete_by_deck(self, user_id: UserId, deck_id: DeckId) -> int: ...
