"""XP event entity: one line of the economy audit log."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from bloomcrux.domain.common.entity import Entity
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId, XpEventId
from bloomcrux.domain.learning.bloom import BloomLevel

XpEventType = Literal[
    "mission_completed",
    "xp_commander_added",
    "streak_chest",
    "cosmetic_purchased",
]


@dataclass
class XpEvent(Entity[XpEventId]):
    id: XpEventId
    user_id: UserId
    event_type: XpEventType
    deck_id: DeckId | None = None
    bloom_level: BloomLevel | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    def matches_mission(self, mode: str, correct: int, total: int) -> bool:
        """Whether this is a ``mission_completed`` event for the same result."""
        if self.event_type != "mission_completed":
            return False
        p = self.payload
        return p.get("mode") == mode and p.get("correct") == correct and p.get("total") == total

    @classmethod
    def create(
        cls,
        user_id: UserId,
        event_type: XpEventType,
        deck_id: DeckId | None = None,
        bloom_level: BloomLevel | None = None,
        payload: dict[str, Any] | None = None,
        created_at: datetime | None = None,
    ) -> "XpEvent":
        return cls(
            id=XpEventId.generate(),
            user_id=user_id,
            event_type=event_type,
            deck_id=deck_id,
            bloom_level=bloom_level,
            payload=dict(payload or {}),
            created_at=created_at,
        )
