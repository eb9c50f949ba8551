"""Pydantic schemas for the token and XP economy."""

from pydantic import BaseModel, ConfigDict, Field

from bloomcrux.domain.economy.entities.streak import ChestType
from bloomcrux.domain.economy.services.cosmetics_catalog import CosmeticCategory
from bloomcrux.domain.learning.bloom import BloomLevel


class WalletResponse(BaseModel):
    """Server-owned balance of the current user."""

    tokens: int
    commander_xp: int
    commander_level: int


class LevelProgressSchema(BaseModel):
    level: int
    current: int = Field(..., description="XP earned inside the current level")
    next_level: int = Field(..., description="Next commander level")
    to_next: int = Field(..., description="XP left until the next level")


class WalletDetailsResponse(WalletResponse):
    progress: LevelProgressSchema


class LevelTallyPayload(BaseModel):
    correct: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class FinalizeRequest(BaseModel):
    """Schema for crediting a finished mission."""

    model_config = ConfigDict(populate_by_name=True)

    deck_id: int = Field(..., gt=0, alias="deckId")
    mode: str = Field("remix", description="quest, remix, drill, study or starred")
    correct: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    bloom_level: BloomLevel | None = Field(
        None, alias="bloomLevel", description="Level recorded on the audit events"
    )
    breakdown: dict[BloomLevel, LevelTallyPayload] | None = Field(
        None, description="Correct/total per Bloom level"
    )


class UnlockSchema(BaseModel):
    id: str
    name: str
    level: int
    kind: str
    category: CosmeticCategory | None = None


class FinalizeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    tokens: int
    commander_xp: int
    commander_level: int
    xp_delta: int = Field(..., serialization_alias="xpDelta")
    tokens_delta: int = Field(..., serialization_alias="tokensDelta")
    duplicate: bool = False
    new_unlocks: list[UnlockSchema] = Field(default_factory=list, serialization_alias="newUnlocks")


class StreakChestResponse(BaseModel):
    ok: bool = True
    chest: ChestType
    tokens_awarded: int
    current_streak: int
    tokens: int


class UnlocksResponse(BaseModel):
    commander_level: int
    unlocked: list[UnlockSchema]
    next_unlock: UnlockSchema | None = None


class CosmeticSchema(BaseModel):
    id: str
    name: str
    category: CosmeticCategory
    unlock_level: int
    price: int
    unlocked: bool
    owned: bool


class CosmeticsListResponse(BaseModel):
    cosmetics: list[CosmeticSchema]


class PurchaseRequest(BaseModel):
    cosmetic_id: str = Field(..., min_length=1, alias="cosmeticId")

    model_config = ConfigDict(populate_by_name=True)


class PurchaseResponse(BaseModel):
    ok: bool = True
    cosmetic_id: str
    already_owned: bool
    tokens: int


class PurchasedResponse(BaseModel):
    cosmetic_id: str
    purchased: bool


class DefaultCoverRequest(BaseModel):
    cosmetic_id: str | None = Field(None, description="Owned deck cover, or null for the stock cover")


class DefaultCoverResponse(BaseModel):
    cosmetic_id: str | None
