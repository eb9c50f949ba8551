"""Use case for recording a finished mission."""

from datetime import UTC, datetime

import structlog

from bloomcrux.application.learning.protocols.bloom_mastery_repository import (
    BloomMasteryRepositoryProtocol,
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
from bloomcrux.application.learning.use_cases.dtos import CompletionResult
from bloomcrux.application.learning.use_cases.quest_support import (
    card_counts,
    load_owned_cards,
    quest_settings,
)
from bloomcrux.application.library.protocols.card_repository import CardRepositoryProtocol
from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.config import get_settings
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.entities.bloom_mastery import BloomMastery
from bloomcrux.domain.learning.entities.mission_attempt import LevelBreakdown, MissionAttempt
from bloomcrux.domain.learning.entities.quest_progress import QuestProgress
from bloomcrux.domain.library.entities.card import Card

logger = structlog.get_logger(__name__)

LEVEL_MASTERED_PCT = 80


class CompleteMissionUseCase:
    """Store a mission attempt and, for quest missions, advance progress and level mastery."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        mission_attempt_repository: MissionAttemptRepositoryProtocol,
        quest_progress_repository: QuestProgressRepositoryProtocol,
        bloom_mastery_repository: BloomMasteryRepositoryProtocol,
        card_performance_repository: CardPerformanceRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.deck_repository = deck_repository
        self.card_repository = card_repository
        self.mission_attempt_repository = mission_attempt_repository
        self.quest_progress_repository = quest_progress_repository
        self.bloom_mastery_repository = bloom_mastery_repository
        self.card_performance_repository = card_performance_repository

    def complete_mission(
        self,
        deck_id: int,
        user_id: int,
        bloom_level: BloomLevel,
        score_pct: float,
        cards_seen: int,
        cards_correct: int,
        mode: str = "quest",
        breakdown: dict[BloomLevel, LevelBreakdown] | None = None,
        started_at: datetime | None = None,
    ) -> CompletionResult:
        """
        Record a completed mission.

        Every mode is stored as an attempt. Only ``quest`` missions update
        quest progress and the per-level mastery rollup: each level of the
        breakdown with cards seen is rolled up with its own score, or the
        mission's level when no breakdown is given.

        Returns:
            The attempt id and whether the score unlocks the next level

        Raises:
            DeckNotFoundError: If deck is not found
            ValidationError: If the score or counts are out of range
        """
        deck_id_vo = DeckId(deck_id)
        user_id_vo = UserId(user_id)
        cards = load_owned_cards(self.deck_repository, self.card_repository, deck_id_vo, user_id_vo)
        now = datetime.now(UTC)

        attempt = MissionAttempt.create(
            user_id=user_id_vo,
            deck_id=deck_id_vo,
            bloom_level=bloom_level,
            score_pct=score_pct,
            cards_seen=cards_seen,
            cards_correct=cards_correct,
            ended_at=now,
            mode=mode,
            breakdown=breakdown,
            started_at=started_at,
        )
        attempt = self.mission_attempt_repository.save(attempt)

        unlock_threshold = get_settings().QUEST_UNLOCK_THRESHOLD
        if attempt.is_quest:
            self._advance_quest(attempt, cards, now, unlock_threshold)

        logger.info(
            "mission_completed",
            attempt_id=attempt.id.value,
            deck_id=deck_id,
            bloom_level=bloom_level.value,
            mode=mode,
            score_pct=score_pct,
        )
        return CompletionResult(
            attempt_id=attempt.id.value,
            unlocked=score_pct >= unlock_threshold,
            progress_updated=attempt.is_quest,
        )

    def _advance_quest(
        self, attempt: MissionAttempt, cards: list[Card], now: datetime, unlock_threshold: float
    ) -> None:
        settings = quest_settings()
        counts = card_counts(cards)
        progress = self.quest_progress_repository.find(attempt.user_id, attempt.deck_id)
        if progress is None:
            progress = QuestProgress.fresh(
                attempt.user_id, attempt.deck_id, counts, settings.mission_cap
            )
        progress.record_completion(
            attempt.bloom_level,
            attempt.score_pct,
            attempt.cards_seen,
            now,
            counts,
            settings.mission_cap,
            clear_threshold=unlock_threshold,
        )

        if attempt.breakdown:
            level_scores = {
                level: part.score_pct
                for level, part in attempt.breakdown.items()
                if part.cards_seen > 0
            }
        elif attempt.cards_seen > 0:
            level_scores = {attempt.bloom_level: attempt.score_pct}
        else:
            level_scores = {}

        if level_scores:
            performance = self.card_performance_repository.find_by_deck(
                attempt.user_id, attempt.deck_id
            )
            for level, score in level_scores.items():
                mastery = self.bloom_mastery_repository.find(
                    attempt.user_id, attempt.deck_id, level
                ) or BloomMastery.empty(attempt.user_id, attempt.deck_id, level)
                mastery.record_mission(
                    score,
                    [c.id.value for c in cards if c.level == level],
                    performance,
                    now,
                )
                mastery = self.bloom_mastery_repository.save(mastery)
                progress.apply_mastery(
                    level, mastery.mastery_pct, mastery.mastery_pct >= LEVEL_MASTERED_PCT
                )

        self.quest_progress_repository.save(progress)
