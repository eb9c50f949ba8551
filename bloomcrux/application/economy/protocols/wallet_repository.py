"""Protocol for Wallet repository."""

from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import UserId
from bloomcrux.domain.economy.entities.wallet import Wallet


class WalletRepositoryProtocol(Protocol):
    """Interface for the server-owned token/XP balance."""

    def find(self, user_id: UserId) -> Wallet | None: ...

    def save(self, wallet: Wallet) -> Wallet:
        """Insert or update the user's economy row."""
        ...
