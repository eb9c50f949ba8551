"""DTOs for economy use cases."""

from bloomcrux.application.economy.use_cases.dtos.economy_dtos import (
    ChestClaim,
    CosmeticListing,
    FinalizeResult,
    PurchaseResult,
    UnlockStatus,
    WalletSnapshot,
)

__all__ = [
    "ChestClaim",
    "CosmeticListing",
    "FinalizeResult",
    "PurchaseResult",
    "UnlockStatus",
    "WalletSnapshot",
]
