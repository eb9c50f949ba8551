"""Use case for crediting XP and tokens for a finished mission."""

from datetime import UTC, datetime, timedelta

import structlog

from bloomcrux.application.economy.protocols.streak_repository import StreakRepositoryProtocol
from bloomcrux.application.economy.protocols.wallet_repository import WalletRepositoryProtocol
from bloomcrux.application.economy.protocols.xp_event_repository import (
    XpEventRepositoryProtocol,
)
from bloomcrux.application.economy.use_cases.dtos import FinalizeResult
from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.config import get_settings
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.economy.entities.streak import Streak
from bloomcrux.domain.economy.entities.wallet import Wallet
from bloomcrux.domain.economy.entities.xp_event import XpEvent
from bloomcrux.domain.economy.services.cosmetics_catalog import unlocks_between
from bloomcrux.domain.economy.services.xp_model import (
    LevelTally,
    award_for_breakdown,
    award_for_mission,
    tokens_from_xp,
)
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.entities.mission_attempt import MISSION_MODES
from bloomcrux.exceptions import DeckNotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class FinalizeMissionUseCase:
    """Turn a mission result into commander XP and tokens, at most once."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        wallet_repository: WalletRepositoryProtocol,
        xp_event_repository: XpEventRepositoryProtocol,
        streak_repository: StreakRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.deck_repository = deck_repository
        self.wallet_repository = wallet_repository
        self.xp_event_repository = xp_event_repository
        self.streak_repository = streak_repository

    def finalize(
        self,
        user_id: int,
        deck_id: int,
        mode: str,
        correct: int,
        total: int,
        bloom_level: BloomLevel | None = None,
        breakdown: dict[BloomLevel, LevelTally] | None = None,
    ) -> FinalizeResult:
        """
        Credit a finished mission.

        XP comes from the per-level breakdown when given, else from the
        correct count attributed to Remember; ``bloom_level`` only labels
        the audit events. A repeat of the same (deck, mode, correct, total)
        inside the idempotency window credits nothing and returns the current wallet.

        Raises:
            DeckNotFoundError: If deck is not found
            ValidationError: If counts or mode are invalid
        """
        if total < 0 or correct < 0 or correct > total:
            raise ValidationError("correct must be between 0 and total")
        if mode not in MISSION_MODES:
            raise ValidationError(f"Unknown mission mode '{mode}'")

        user_id_vo = UserId(user_id)
        deck_id_vo = DeckId(deck_id)
        if not self.deck_repository.find_by_id(deck_id_vo, user_id_vo):
            raise DeckNotFoundError(deck_id)

        now = datetime.now(UTC)
        wallet = self.wallet_repository.find(user_id_vo) or Wallet.empty(user_id_vo)

        window = timedelta(minutes=get_settings().FINALIZE_IDEMPOTENCY_MINUTES)
        recent = self.xp_event_repository.find_since(
            user_id_vo, "mission_completed", now - window, deck_id=deck_id_vo
        )
        if any(event.matches_mission(mode, correct, total) for event in recent):
            logger.info("finalize_duplicate_ignored", deck_id=deck_id, mode=mode)
            return FinalizeResult(wallet=wallet, xp_delta=0, tokens_delta=0, duplicate=True)

        if breakdown:
            xp = award_for_breakdown(breakdown)
        else:
            xp = award_for_mission(correct, BloomLevel.REMEMBER)
        tokens = tokens_from_xp(xp)

        self.xp_event_repository.save(
            XpEvent.create(
                user_id=user_id_vo,
                event_type="mission_completed",
                deck_id=deck_id_vo,
                bloom_level=bloom_level,
                payload={
                    "mode": mode,
                    "correct": correct,
                    "total": total,
                    "xp": xp,
                    "tokens": tokens,
                },
                created_at=now,
            )
        )

        previous_level = wallet.credit(xp, tokens)
        wallet = self.wallet_repository.save(wallet)
        if xp > 0:
            self.xp_event_repository.save(
                XpEvent.create(
                    user_id=user_id_vo,
                    event_type="xp_commander_added",
                    deck_id=deck_id_vo,
                    bloom_level=bloom_level,
                    payload={
                        "xp": xp,
                        "tokens": tokens,
                        "level_before": previous_level,
                        "level_after": wallet.commander_level,
                    },
                    created_at=now,
                )
            )

        streak = self.streak_repository.find(user_id_vo) or Streak.empty(user_id_vo)
        streak.record_activity(now.date())
        self.streak_repository.save(streak)

        logger.info(
            "mission_finalized",
            deck_id=deck_id,
            mode=mode,
            xp_delta=xp,
            tokens_delta=tokens,
            commander_level=wallet.commander_level,
        )
        return FinalizeResult(
            wallet=wallet,
            xp_delta=xp,
            tokens_delta=tokens,
            new_unlocks=unlocks_between(previous_level, wallet.commander_level),
        )
