"""Common value objects shared across all domain modules."""

from .ids import CardId, DeckId, FolderId, MissionAttemptId, UserId, XpEventId

__all__ = [
    "CardId",
    "DeckId",
    "FolderId",
    "MissionAttemptId",
    "UserId",
    "XpEventId",
]
