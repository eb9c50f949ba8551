"""Use case for per-card quest performance counters."""

import structlog

from bloomcrux.application.learning.protocols.card_performance_repository import (
    CardPerformanceRepositoryProtocol,
)
from bloomcrux.application.learning.use_cases.dtos import PerformanceReport
from bloomcrux.application.learning.use_cases.quest_support import load_owned_cards
from bloomcrux.application.library.protocols.card_repository import CardRepositoryProtocol
from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.domain.common.value_objects.ids import CardId, DeckId, UserId
from bloomcrux.domain.learning.entities.card_performance import CardPerformance
from bloomcrux.exceptions import ValidationError

logger = structlog.get_logger(__name__)


class CardPerformanceUseCase:
    """Read and merge attempts/correct counters reported by clients."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        card_performance_repository: CardPerformanceRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.deck_repository = deck_repository
        self.card_repository = card_repository
        self.card_performance_repository = card_performance_repository

    def get_performance(self, deck_id: int, user_id: int) -> list[CardPerformance]:
        deck_id_vo = DeckId(deck_id)
        user_id_vo = UserId(user_id)
        load_owned_cards(self.deck_repository, self.card_repository, deck_id_vo, user_id_vo)
        return self.card_performance_repository.find_by_deck(user_id_vo, deck_id_vo)

    def merge_performance(
        self, deck_id: int, user_id: int, reports: list[PerformanceReport]
    ) -> list[CardPerformance]:
        """
        Merge reported running totals into stored counters.

        Counters only move forward; each call adds at most 200 attempts per
        card and totals stop at 10000.

        Raises:
            DeckNotFoundError: If deck is not found
            ValidationError: If a report names a card outside the deck
        """
        deck_id_vo = DeckId(deck_id)
        user_id_vo = UserId(user_id)
        cards = load_owned_cards(self.deck_repository, self.card_repository, deck_id_vo, user_id_vo)
        deck_card_ids = {card.id.value for card in cards}

        unknown = sorted({r.card_id for r in reports} - deck_card_ids)
        if unknown:
            raise ValidationError(f"Cards {unknown} do not belong to deck {deck_id}")

        stored = {
            p.card_id.value: p
            for p in self.card_performance_repository.find_by_deck(user_id_vo, deck_id_vo)
        }
        touched: dict[int, CardPerformance] = {}
        for report in reports:
            perf = touched.get(report.card_id) or stored.get(report.card_id)
            if perf is None:
                perf = CardPerformance.empty(user_id_vo, deck_id_vo, CardId(report.card_id))
            perf.merge_reported(report.attempts, report.correct, report.last_seen_at)
            touched[report.card_id] = perf

        saved = self.card_performance_repository.save_all(list(touched.values()))
        logger.info("merged_card_performance", deck_id=deck_id, cards=len(saved))
        return saved
