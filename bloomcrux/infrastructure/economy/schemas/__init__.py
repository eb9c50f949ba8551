"""Economy context schemas."""

from bloomcrux.infrastructure.economy.schemas.economy_schemas import (
    CosmeticSchema,
    CosmeticsListResponse,
    DefaultCoverRequest,
    DefaultCoverResponse,
    FinalizeRequest,
    FinalizeResponse,
    LevelProgressSchema,
    LevelTallyPayload,
    PurchasedResponse,
    PurchaseRequest,
    PurchaseResponse,
    StreakChestResponse,
    UnlockSchema,
    UnlocksResponse,
    WalletDetailsResponse,
    WalletResponse,
)

__all__ = [
    "CosmeticSchema",
    "CosmeticsListResponse",
    "DefaultCoverRequest",
    "DefaultCoverResponse",
    "FinalizeRequest",
    "FinalizeResponse",
    "LevelProgressSchema",
    "LevelTallyPayload",
    "PurchaseRequest",
    "PurchaseResponse",
    "PurchasedResponse",
    "StreakChestResponse",
    "UnlockSchema",
    "UnlocksResponse",
    "WalletDetailsResponse",
    "WalletResponse",
]
