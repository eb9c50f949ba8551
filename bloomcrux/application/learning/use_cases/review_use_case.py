"""Use case for spaced-repetition reviews and review queues."""

import random
from datetime import UTC, datetime
from typing import Literal

import structlog

from bloomcrux.application.learning.protocols.card_mastery_repository import (
    CardMasteryRepositoryProtocol,
)
from bloomcrux.application.learning.protocols.card_performance_repository import (
    CardPerformanceRepositoryProtocol,
)
from bloomcrux.application.learning.use_cases.dtos import ReviewInput
from bloomcrux.application.learning.use_cases.quest_support import load_owned_cards
from bloomcrux.application.library.protocols.card_repository import CardRepositoryProtocol
from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.entities.card_performance import CardPerformance
from bloomcrux.domain.learning.services.card_mastery_updater import update_card_mastery
from bloomcrux.domain.learning.services.review_queues import due_queue, struggle_queue
from bloomcrux.domain.learning.value_objects.mastery import CardMastery, ReviewOutcome
from bloomcrux.exceptions import ValidationError

logger = structlog.get_logger(__name__)

QueueKind = Literal["due", "struggle"]


class ReviewUseCase:
    """Fold answers into per-card mastery and serve due/struggle queues."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        card_mastery_repository: CardMasteryRepositoryProtocol,
        card_performance_repository: CardPerformanceRepositoryProtocol,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.deck_repository = deck_repository
        self.card_repository = card_repository
        self.card_mastery_repository = card_mastery_repository
        self.card_performance_repository = card_performance_repository
        self.rng = rng or random.Random()

    def record_reviews(
        self, deck_id: int, user_id: int, reviews: list[ReviewInput]
    ) -> list[CardMastery]:
        """
        Record answers to cards of a deck.

        Each answer advances the card's SM-2 schedule and mastery signals and
        counts as one attempt in the card's performance counters. Answers are
        applied in order, so one card may appear more than once.

        Raises:
            DeckNotFoundError: If deck is not found
            ValidationError: If a review names a card outside the deck
        """
        deck_id_vo = DeckId(deck_id)
        user_id_vo = UserId(user_id)
        cards = {
            card.id.value: card
            for card in load_owned_cards(
                self.deck_repository, self.card_repository, deck_id_vo, user_id_vo
            )
        }
        unknown = sorted({r.card_id for r in reviews} - cards.keys())
        if unknown:
            raise ValidationError(f"Cards {unknown} do not belong to deck {deck_id}")

        now = datetime.now(UTC)
        masteries = self.card_mastery_repository.find_by_cards(
            user_id_vo, [cards[cid].id for cid in dict.fromkeys(r.card_id for r in reviews)]
        )
        performance = {
            p.card_id.value: p
            for p in self.card_performance_repository.find_by_deck(user_id_vo, deck_id_vo)
        }

        for review in reviews:
            card = cards[review.card_id]
            prev = masteries.get(review.card_id) or CardMastery.new(
                card.id, card.level, now, card_type=card.card_type.value
            )
            outcome = ReviewOutcome(
                correctness=review.correctness,
                response_ms=review.response_ms,
                confidence=review.confidence,
                guessed=review.guessed,
                card_type=card.card_type.value,
            )
            masteries[review.card_id] = update_card_mastery(prev, outcome, now, rng=self.rng)

            perf = performance.get(review.card_id) or CardPerformance.empty(
                user_id_vo, deck_id_vo, card.id
            )
            perf.record_answer(outcome.is_correct, now)
            performance[review.card_id] = perf

        updated = [masteries[cid] for cid in dict.fromkeys(r.card_id for r in reviews)]
        self.card_mastery_repository.save_all(user_id_vo, deck_id_vo, updated)
        self.card_performance_repository.save_all(
            [performance[cid] for cid in dict.fromkeys(r.card_id for r in reviews)]
        )
        logger.info("recorded_reviews", deck_id=deck_id, reviews=len(reviews))
        return updated

    def review_queue(
        self, deck_id: int, user_id: int, kind: QueueKind = "due", limit: int = 20
    ) -> list[CardMastery]:
        """
        Cards to review next.

        ``due`` lists cards whose next review is due, most overdue first;
        ``struggle`` lists weak cards, weakest first. Both interleave card types.
        """
        deck_id_vo = DeckId(deck_id)
        user_id_vo = UserId(user_id)
        load_owned_cards(self.deck_repository, self.card_repository, deck_id_vo, user_id_vo)

        records = self.card_mastery_repository.find_by_deck(user_id_vo, deck_id_vo)
        if kind == "due":
            queue = due_queue(records, datetime.now(UTC))
        else:
            queue = struggle_queue(records)
        return queue[: max(0, limit)]
