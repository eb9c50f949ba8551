"""Library context schemas."""

from bloomcrux.infrastructure.library.schemas.card_schemas import (
    Card,
    CardCreateRequest,
    CardResponse,
    CardsListResponse,
    CardStarRequest,
    CardUpdateRequest,
)
from bloomcrux.infrastructure.library.schemas.deck_schemas import (
    DeckBase,
    DeckCreateRequest,
    DeckDetails,
    DeckResponse,
    DecksListResponse,
    DeckSummaryResponse,
    DeckUpdateRequest,
    DeckWithCardCount,
)
from bloomcrux.infrastructure.library.schemas.folder_schemas import (
    Folder,
    FolderRequest,
    FolderResponse,
    FoldersListResponse,
)

__all__ = [
    "Card",
    "CardCreateRequest",
    "CardResponse",
    "CardStarRequest",
    "CardUpdateRequest",
    "CardsListResponse",
    "DeckBase",
    "DeckCreateRequest",
    "DeckDetails",
    "DeckResponse",
    "DeckSummaryResponse",
    "DeckUpdateRequest",
    "DeckWithCardCount",
    "DecksListResponse",
    "Folder",
    "FolderRequest",
    "FolderResponse",
    "FoldersListResponse",
]
