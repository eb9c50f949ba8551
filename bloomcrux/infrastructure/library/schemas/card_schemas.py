"""Pydantic schemas for Card API request/response validation."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.library.value_objects.card_type import CardType


class Card(BaseModel):
    """Schema for Card response."""

    id: int
    deck_id: int
    card_type: CardType
    bloom_level: BloomLevel
    front: str
    back: str
    meta: dict[str, Any]
    position: int
    starred: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CardCreateRequest(BaseModel):
    """Schema for creating a card. The Bloom level defaults from the card type."""

    card_type: CardType = Field(..., description="Card format")
    front: str = Field(..., min_length=1, description="Prompt shown to the learner")
    back: str = Field("", description="Answer or explanation")
    bloom_level: BloomLevel | None = Field(None, description="Override the default Bloom level")
    meta: dict[str, Any] | None = Field(None, description="Format-specific payload")


class CardUpdateRequest(BaseModel):
    """Schema for updating a card. Omitted fields are left unchanged."""

    card_type: CardType | None = None
    front: str | None = Field(None, min_length=1)
    back: str | None = None
    bloom_level: BloomLevel | None = None
    meta: dict[str, Any] | None = None
    position: int | None = Field(None, ge=0)


class CardStarRequest(BaseModel):
    starred: bool = Field(..., description="Whether the card is starred")


class CardResponse(BaseModel):
    """Schema for card create/update response."""

    success: bool = Field(..., description="Whether the operation was successful")
    message: str = Field(..., description="Response message")
    card: Card = Field(..., description="The card")


class CardsListResponse(BaseModel):
    cards: list[Card] = Field(..., description="List of cards")
