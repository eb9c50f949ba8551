"""API routes for deck management."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from bloomcrux.application.library.use_cases.deck_summary_use_case import GetDeckSummaryUseCase
from bloomcrux.application.library.use_cases.deck_use_case import DeckUseCase
from bloomcrux.core import container
from bloomcrux.domain.common.exceptions import DomainError
from bloomcrux.domain.identity.entities.user import User
from bloomcrux.domain.library.entities.deck import Deck
from bloomcrux.exceptions import BloomCruxError
from bloomcrux.infrastructure.common.di import inject_use_case
from bloomcrux.infrastructure.common.schemas import SuccessResponse
from bloomcrux.infrastructure.identity.dependencies import get_current_user
from bloomcrux.infrastructure.library.routers.cards import to_card_schema
from bloomcrux.infrastructure.library.schemas import (
    DeckBase,
    DeckCreateRequest,
    DeckDetails,
    DeckResponse,
    DecksListResponse,
    DeckSummaryResponse,
    DeckUpdateRequest,
    DeckWithCardCount,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decks", tags=["decks"])


def _to_schema(deck: Deck) -> DeckBase:
    return DeckBase(
        id=deck.id.value,
        title=deck.title,
        description=deck.description,
        folder_id=deck.folder_id.value if deck.folder_id else None,
        created_at=deck.created_at,
        updated_at=deck.updated_at,
    )


@router.get("", response_model=DecksListResponse, status_code=status.HTTP_200_OK)
def list_decks(
    current_user: Annotated[User, Depends(get_current_user)],
    folder_id: int | None = Query(None, description="Only decks in this folder"),
    unfiled: bool = Query(False, description="Only decks outside any folder"),
    use_case: DeckUseCase = Depends(inject_use_case(container.deck_use_case)),
) -> DecksListResponse:
    """
    List the user's decks, newest first, with card counts.

    Args:
        folder_id: Optional folder filter
        unfiled: Only decks that are not in a folder
        use_case: DeckUseCase injected via dependency container

    Returns:
        List of decks with card counts
    """
    try:
        rows = use_case.list_decks(
            current_user.id.value, folder_id=folder_id, unfiled_only=unfiled
        )
        return DecksListResponse(
            decks=[
                DeckWithCardCount(**_to_schema(row.deck).model_dump(), card_count=row.card_count)
                for row in rows
            ]
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to list decks: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
def create_deck(
    request: DeckCreateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: DeckUseCase = Depends(inject_use_case(container.deck_use_case)),
) -> DeckResponse:
    try:
        deck = use_case.create_deck(
            user_id=current_user.id.value,
            title=request.title,
            description=request.description,
            folder_id=request.folder_id,
        )
        return DeckResponse(success=True, message="Deck created successfully", deck=_to_schema(deck))
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to create deck: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/{deck_id}", response_model=DeckDetails, status_code=status.HTTP_200_OK)
def get_deck(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: DeckUseCase = Depends(inject_use_case(container.deck_use_case)),
) -> DeckDetails:
    """Get a deck with its cards in position order."""
    try:
        result = use_case.get_deck(deck_id, current_user.id.value)
        return DeckDetails(
            **_to_schema(result.deck).model_dump(),
            cards=[to_card_schema(c) for c in result.cards],
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to get deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.patch("/{deck_id}", response_model=DeckResponse, status_code=status.HTTP_200_OK)
def update_deck(
    deck_id: int,
    request: DeckUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: DeckUseCase = Depends(inject_use_case(container.deck_use_case)),
) -> DeckResponse:
    """
    Update deck details or move it between folders.

    Raises:
        HTTPException: 404 if the deck or target folder is not found
    """
    try:
        deck = use_case.update_deck(
            deck_id=deck_id,
            user_id=current_user.id.value,
            title=request.title,
            description=request.description,
            folder_id=request.folder_id,
            unfile=request.unfile,
        )
        return DeckResponse(success=True, message="Deck updated successfully", deck=_to_schema(deck))
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to update deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.delete("/{deck_id}", response_model=SuccessResponse, status_code=status.HTTP_200_OK)
def delete_deck(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: DeckUseCase = Depends(inject_use_case(container.deck_use_case)),
) -> SuccessResponse:
    """Delete a deck along with its cards and quest state."""
    try:
        use_case.delete_deck(deck_id, current_user.id.value)
        return SuccessResponse(success=True, message="Deck deleted successfully")
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to delete deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/{deck_id}/summary", response_model=DeckSummaryResponse, status_code=status.HTTP_200_OK
)
def get_deck_summary(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: GetDeckSummaryUseCase = Depends(inject_use_case(container.deck_summary_use_case)),
) -> DeckSummaryResponse:
    try:
        summary = use_case.get_summary(deck_id, current_user.id.value)
        return DeckSummaryResponse(
            deck_id=summary.deck_id,
            mastered=summary.mastered,
            reviewed_cards=summary.reviewed_cards,
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to summarize deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
