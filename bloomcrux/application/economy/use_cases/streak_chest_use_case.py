"""Use case for claiming streak reward chests."""

from datetime import UTC, datetime

import structlog

from bloomcrux.application.economy.protocols.streak_repository import StreakRepositoryProtocol
from bloomcrux.application.economy.protocols.wallet_repository import WalletRepositoryProtocol
from bloomcrux.application.economy.protocols.xp_event_repository import (
    XpEventRepositoryProtocol,
)
from bloomcrux.application.economy.use_cases.dtos import ChestClaim
from bloomcrux.domain.common.value_objects.ids import UserId
from bloomcrux.domain.economy.entities.streak import Streak
from bloomcrux.domain.economy.entities.wallet import Wallet
from bloomcrux.domain.economy.entities.xp_event import XpEvent

logger = structlog.get_logger(__name__)


class StreakChestUseCase:
    def __init__(
        self,
        streak_repository: StreakRepositoryProtocol,
        wallet_repository: WalletRepositoryProtocol,
        xp_event_repository: XpEventRepositoryProtocol,
    ) -> None:
        self.streak_repository = streak_repository
        self.wallet_repository = wallet_repository
        self.xp_event_repository = xp_event_repository

    def claim(self, user_id: int) -> ChestClaim:
        """
        Claim the best chest the current streak allows.

        Raises:
            BusinessRuleViolationError: ``no_available_chests`` when nothing is claimable
        """
        user_id_vo = UserId(user_id)
        streak = self.streak_repository.find(user_id_vo) or Streak.empty(user_id_vo)
        chest, tokens = streak.claim_chest()

        wallet = self.wallet_repository.find(user_id_vo) or Wallet.empty(user_id_vo)
        wallet.add_tokens(tokens)
        wallet = self.wallet_repository.save(wallet)
        streak = self.streak_repository.save(streak)
        self.xp_event_repository.save(
            XpEvent.create(
                user_id=user_id_vo,
                event_type="streak_chest",
                payload={"chest": chest, "tokens": tokens, "streak": streak.current_streak},
                created_at=datetime.now(UTC),
            )
        )

        logger.info("streak_chest_claimed", user_id=user_id, chest=chest, tokens=tokens)
        return ChestClaim(
            chest=chest,
            tokens_awarded=tokens,
            wallet=wallet,
            current_streak=streak.current_streak,
        )
