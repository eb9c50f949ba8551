"""Use case for the deck summary shown on deck tiles."""

from dataclasses import dataclass

from bloomcrux.application.learning.protocols.card_performance_repository import (
    CardPerformanceRepositoryProtocol,
)
from bloomcrux.application.learning.protocols.quest_progress_repository import (
    QuestProgressRepositoryProtocol,
)
from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.exceptions import DeckNotFoundError


@dataclass
class DeckSummary:
    deck_id: int
    mastered: bool
    reviewed_cards: int


class GetDeckSummaryUseCase:
    """Mastered flag and reviewed card count for a deck."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        quest_progress_repository: QuestProgressRepositoryProtocol,
        card_performance_repository: CardPerformanceRepositoryProtocol,
    ) -> None:
        self.deck_repository = deck_repository
        self.quest_progress_repository = quest_progress_repository
        self.card_performance_repository = card_performance_repository

    def get_summary(self, deck_id: int, user_id: int) -> DeckSummary:
        """
        Summarize a learner's standing on a deck.

        A deck is mastered once every Bloom level that has cards is cleared.
        Reviewed cards are the cards answered at least once.

        Raises:
            DeckNotFoundError: If deck is not found
        """
        deck_id_vo = DeckId(deck_id)
        user_id_vo = UserId(user_id)
        if not self.deck_repository.find_by_id(deck_id_vo, user_id_vo):
            raise DeckNotFoundError(deck_id)

        progress = self.quest_progress_repository.find(user_id_vo, deck_id_vo)
        performances = self.card_performance_repository.find_by_deck(user_id_vo, deck_id_vo)
        return DeckSummary(
            deck_id=deck_id,
            mastered=progress.is_deck_mastered() if progress else False,
            reviewed_cards=sum(1 for p in performances if p.attempts > 0),
        )
