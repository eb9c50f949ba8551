"""DTOs for economy use cases."""

from dataclasses import dataclass, field

from bloomcrux.domain.economy.entities.streak import ChestType
from bloomcrux.domain.economy.entities.wallet import Wallet
from bloomcrux.domain.economy.services.cosmetics_catalog import Cosmetic, Unlock
from bloomcrux.domain.economy.services.xp_model import LevelProgress


@dataclass
class WalletSnapshot:
    wallet: Wallet
    progress: LevelProgress


@dataclass
class FinalizeResult:
    """Wallet after a mission was finalized and what the mission added."""

    wallet: Wallet
    xp_delta: int
    tokens_delta: int
    duplicate: bool = False
    new_unlocks: list[Unlock] = field(default_factory=list)


@dataclass
class ChestClaim:
    chest: ChestType
    tokens_awarded: int
    wallet: Wallet
    current_streak: int


@dataclass
class UnlockStatus:
    commander_level: int
    unlocked: list[Unlock]
    next_unlock: Unlock | None


@dataclass
class CosmeticListing:
    cosmetic: Cosmetic
    unlocked: bool
    owned: bool


@dataclass
class PurchaseResult:
    cosmetic: Cosmetic
    wallet: Wallet
    already_owned: bool
