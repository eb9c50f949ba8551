"""Use case for deck mastery and level graduation."""

from bloomcrux.application.learning.protocols.bloom_mastery_repository import (
    BloomMasteryRepositoryProtocol,
)
from bloomcrux.application.learning.protocols.card_mastery_repository import (
    CardMasteryRepositoryProtocol,
)
from bloomcrux.application.learning.use_cases.dtos import LevelGraduation
from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.services.mastery_aggregator import (
    aggregate_bloom_level,
    graduation_check,
)
from bloomcrux.exceptions import DeckNotFoundError


class DeckMasteryUseCase:
    """Per-level mastery of a deck and graduation decisions."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        bloom_mastery_repository: BloomMasteryRepositoryProtocol,
        card_mastery_repository: CardMasteryRepositoryProtocol,
    ) -> None:
        self.deck_repository = deck_repository
        self.bloom_mastery_repository = bloom_mastery_repository
        self.card_mastery_repository = card_mastery_repository

    def get_level_percentages(self, deck_id: int, user_id: int) -> dict[BloomLevel, int]:
        """Rolled-up mastery percent of each level the learner has played."""
        deck_id_vo, user_id_vo = self._owned(deck_id, user_id)
        rows = self.bloom_mastery_repository.find_by_deck(user_id_vo, deck_id_vo)
        return {row.bloom_level: row.mastery_pct for row in rows}

    def evaluate_level(self, deck_id: int, user_id: int, level: BloomLevel) -> LevelGraduation:
        """Aggregate the level's card mastery records and check graduation."""
        deck_id_vo, user_id_vo = self._owned(deck_id, user_id)
        records = [
            m
            for m in self.card_mastery_repository.find_by_deck(user_id_vo, deck_id_vo)
            if m.bloom == level
        ]
        summary = aggregate_bloom_level(level, records)
        return LevelGraduation(summary=summary, check=graduation_check(summary, records))

    def _owned(self, deck_id: int, user_id: int) -> tuple[DeckId, UserId]:
        deck_id_vo = DeckId(deck_id)
        user_id_vo = UserId(user_id)
        if not self.deck_repository.find_by_id(deck_id_vo, user_id_vo):
            raise DeckNotFoundError(deck_id)
        return deck_id_vo, user_id_vo
