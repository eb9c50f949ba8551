"""Use case for reading and resetting quest progress."""

import structlog

from bloomcrux.application.economy.protocols.xp_event_repository import (
    XpEventRepositoryProtocol,
)
from bloomcrux.application.learning.protocols.bloom_mastery_repository import (
    BloomMasteryRepositoryProtocol,
)
from bloomcrux.application.learning.protocols.card_mastery_repository import (
    CardMasteryRepositoryProtocol,
)
from bloomcrux.application.learning.protocols.card_performance_repository import (
    CardPerformanceRepositoryProtocol,
)
from bloomcrux.application.learning.protocols.mission_attempt_repository import (
    MissionAttemptRepositoryProtocol,
)
from bloomcrux.application.learning.protocols.quest_progress_repository import (
    QuestProgressRepositoryProtocol,
)
from bloomcrux.application.learning.use_cases.dtos import ResetResult
from bloomcrux.application.learning.use_cases.quest_support import (
    card_counts,
    load_owned_cards,
    quest_settings,
)
from bloomcrux.application.library.protocols.card_repository import CardRepositoryProtocol
from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.entities.mission_attempt import MissionAttempt
from bloomcrux.domain.learning.entities.quest_progress import QuestProgress
from bloomcrux.exceptions import DeckNotFoundError

logger = structlog.get_logger(__name__)

MAX_ATTEMPTS_LISTED = 20


class QuestProgressUseCase:
    """Quest progress, attempt history and reset for a deck."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        quest_progress_repository: QuestProgressRepositoryProtocol,
        mission_attempt_repository: MissionAttemptRepositoryProtocol,
        card_performance_repository: CardPerformanceRepositoryProtocol,
        card_mastery_repository: CardMasteryRepositoryProtocol,
        bloom_mastery_repository: BloomMasteryRepositoryProtocol,
        xp_event_repository: XpEventRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.deck_repository = deck_repository
        self.card_repository = card_repository
        self.quest_progress_repository = quest_progress_repository
        self.mission_attempt_repository = mission_attempt_repository
        self.card_performance_repository = card_performance_repository
        self.card_mastery_repository = card_mastery_repository
        self.bloom_mastery_repository = bloom_mastery_repository
        self.xp_event_repository = xp_event_repository

    def get_progress(self, deck_id: int, user_id: int) -> QuestProgress:
        """
        Get progress with per-level totals synced to the deck's current cards.

        A learner who never played the deck gets fresh, unsaved progress.
        """
        deck_id_vo = DeckId(deck_id)
        user_id_vo = UserId(user_id)
        cards = load_owned_cards(self.deck_repository, self.card_repository, deck_id_vo, user_id_vo)
        cap = quest_settings().mission_cap

        progress = self.quest_progress_repository.find(user_id_vo, deck_id_vo)
        if progress is None:
            return QuestProgress.fresh(user_id_vo, deck_id_vo, card_counts(cards), cap)
        progress.refresh_totals(card_counts(cards), cap)
        return progress

    def list_attempts(
        self, deck_id: int, user_id: int, limit: int = MAX_ATTEMPTS_LISTED
    ) -> list[MissionAttempt]:
        deck_id_vo = DeckId(deck_id)
        user_id_vo = UserId(user_id)
        if not self.deck_repository.find_by_id(deck_id_vo, user_id_vo):
            raise DeckNotFoundError(deck_id)
        return self.mission_attempt_repository.find_recent(
            user_id_vo, deck_id_vo, limit=min(limit, MAX_ATTEMPTS_LISTED)
        )

    def reset(self, deck_id: int, user_id: int, wipe_xp: bool = False) -> ResetResult:
        """
        Clear a learner's quest state on a deck and reseed progress totals.

        Args:
            deck_id: ID of the deck
            user_id: ID of the user
            wipe_xp: Also delete the deck's XP events (the wallet is untouched)

        Raises:
            DeckNotFoundError: If deck is not found
        """
        deck_id_vo = DeckId(deck_id)
        user_id_vo = UserId(user_id)
        cards = load_owned_cards(self.deck_repository, self.card_repository, deck_id_vo, user_id_vo)

        result = ResetResult(
            attempts_cleared=self.mission_attempt_repository.delete_by_deck(
                user_id_vo, deck_id_vo
            ),
            performance_cleared=self.card_performance_repository.delete_by_deck(
                user_id_vo, deck_id_vo
            ),
            card_mastery_cleared=self.card_mastery_repository.delete_by_deck(
                user_id_vo, deck_id_vo
            ),
            level_mastery_cleared=self.bloom_mastery_repository.delete_by_deck(
                user_id_vo, deck_id_vo
            ),
            xp_events_cleared=(
                self.xp_event_repository.delete_by_deck(user_id_vo, deck_id_vo) if wipe_xp else 0
            ),
        )

        self.quest_progress_repository.delete(user_id_vo, deck_id_vo)
        cap = quest_settings().mission_cap
        self.quest_progress_repository.save(
            QuestProgress.fresh(user_id_vo, deck_id_vo, card_counts(cards), cap)
        )
        logger.info("quest_reset", deck_id=deck_id, user_id=user_id, wipe_xp=wipe_xp)
        return result
