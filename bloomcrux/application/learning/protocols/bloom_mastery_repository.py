"""Protocol for BloomMastery repository."""

from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.entities.bloom_mastery import BloomMastery


class BloomMasteryRepositoryProtocol(Protocol):
    """Interface for per-level mastery rollups."""

    def find(self, user_id: UserId, deck_id: DeckId, level: BloomLevel) -> BloomMastery | None: ...

    def find_by_deck(self, user_id: UserId, deck_id: DeckId) -> list[BloomMastery]: ...

    def save(self, mastery: BloomMastery) -> BloomMastery: ...

    def delete_by_deck(self, user_id: UserId, deck_id: DeckId) -> int: ...
