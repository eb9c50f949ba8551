"""Pydantic schemas for Deck API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from bloomcrux.infrastructure.library.schemas.card_schemas import Card


class DeckBase(BaseModel):
    id: int
    title: str
    description: str | None = None
    folder_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DeckWithCardCount(DeckBase):
    """Deck tile in the deck list."""

    card_count: int = Field(..., ge=0, description="Number of cards in the deck")


class DeckDetails(DeckBase):
    """Deck with its cards in position order."""

    cards: list[Card] = Field(default_factory=list)


class DeckCreateRequest(BaseModel):
    """Schema for creating a deck."""

    title: str = Field(..., min_length=1, max_length=200, description="Deck title")
    description: str | None = Field(None, description="Optional description")
    folder_id: int | None = Field(None, description="Folder to file the deck in")


class DeckUpdateRequest(BaseModel):
    """Schema for updating a deck. Omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    folder_id: int | None = Field(None, description="Move the deck into this folder")
    unfile: bool = Field(False, description="Move the deck out of its folder")


class DeckResponse(BaseModel):
    """Schema for deck create/update response."""

    success: bool = Field(..., description="Whether the operation was successful")
    message: str = Field(..., description="Response message")
    deck: DeckBase = Field(..., description="The deck")


class DecksListResponse(BaseModel):
    decks: list[DeckWithCardCount] = Field(..., description="List of decks")


class DeckSummaryResponse(BaseModel):
    """Deck tile summary for the learner."""

    deck_id: int
    mastered: bool = Field(..., description="Every level that has cards is cleared")
    reviewed_cards: int = Field(..., ge=0, description="Cards answered at least once")
