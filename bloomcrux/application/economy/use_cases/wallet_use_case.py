"""Use case for reading the wallet and commander unlocks."""

from bloomcrux.application.economy.protocols.wallet_repository import WalletRepositoryProtocol
from bloomcrux.application.economy.use_cases.dtos import UnlockStatus, WalletSnapshot
from bloomcrux.domain.common.value_objects.ids import UserId
from bloomcrux.domain.economy.entities.wallet import Wallet
from bloomcrux.domain.economy.services.cosmetics_catalog import next_unlock, unlocks_at_or_below
from bloomcrux.domain.economy.services.xp_model import progress_for


class WalletUseCase:
    """Server-side token and XP balances."""

    def __init__(self, wallet_repository: WalletRepositoryProtocol) -> None:
        self.wallet_repository = wallet_repository

    def get_wallet(self, user_id: int) -> WalletSnapshot:
        """A user without an economy row has an empty wallet."""
        user_id_vo = UserId(user_id)
        wallet = self.wallet_repository.find(user_id_vo) or Wallet.empty(user_id_vo)
        return WalletSnapshot(wallet=wallet, progress=progress_for(wallet.commander_xp))

    def get_unlocks(self, user_id: int) -> UnlockStatus:
        level = self.get_wallet(user_id).wallet.commander_level
        return UnlockStatus(
            commander_level=level,
            unlocked=unlocks_at_or_below(level),
            next_unlock=next_unlock(level),
        )
