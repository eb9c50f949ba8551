"""API routes for card management."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from bloomcrux.application.library.use_cases.card_use_case import CardUseCase
from bloomcrux.core import container
from bloomcrux.domain.common.exceptions import DomainError
from bloomcrux.domain.identity.entities.user import User
from bloomcrux.domain.library.entities.card import Card as CardEntity
from bloomcrux.exceptions import BloomCruxError
from bloomcrux.infrastructure.common.di import inject_use_case
from bloomcrux.infrastructure.common.schemas import SuccessResponse
from bloomcrux.infrastructure.identity.dependencies import get_current_user
from bloomcrux.infrastructure.library.schemas import (
    Card,
    CardCreateRequest,
    CardResponse,
    CardsListResponse,
    CardStarRequest,
    CardUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cards"])


def to_card_schema(card: CardEntity) -> Card:
    return Card(
        id=card.id.value,
        deck_id=card.deck_id.value,
        card_type=card.card_type,
        bloom_level=card.level,
        front=card.front,
        back=card.back,
        meta=card.meta,
        position=card.position,
        starred=card.starred,
        created_at=card.created_at,
        updated_at=card.updated_at,
    )


@router.get(
    "/decks/{deck_id}/cards", response_model=CardsListResponse, status_code=status.HTTP_200_OK
)
def list_cards(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CardUseCase = Depends(inject_use_case(container.card_use_case)),
) -> CardsListResponse:
    try:
        cards = use_case.list_cards(deck_id, current_user.id.value)
        return CardsListResponse(cards=[to_card_schema(c) for c in cards])
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to list cards for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/decks/{deck_id}/cards", response_model=CardResponse, status_code=status.HTTP_201_CREATED
)
def create_card(
    deck_id: int,
    request: CardCreateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CardUseCase = Depends(inject_use_case(container.card_use_case)),
) -> CardResponse:
    """
    Append a card to a deck.

    Args:
        deck_id: ID of the deck
        request: Card content; the Bloom level defaults from the card type

    Raises:
        HTTPException: 404 if the deck is not found
    """
    try:
        card = use_case.create_card(
            deck_id=deck_id,
            user_id=current_user.id.value,
            card_type=request.card_type,
            front=request.front,
            back=request.back,
            bloom_level=request.bloom_level,
            meta=request.meta,
        )
        return CardResponse(
            success=True, message="Card created successfully", card=to_card_schema(card)
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to create card in deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/decks/{deck_id}/starred", response_model=CardsListResponse, status_code=status.HTTP_200_OK
)
def list_starred_cards(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CardUseCase = Depends(inject_use_case(container.card_use_case)),
) -> CardsListResponse:
    try:
        cards = use_case.list_starred(deck_id, current_user.id.value)
        return CardsListResponse(cards=[to_card_schema(c) for c in cards])
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to list starred cards for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.patch("/cards/{card_id}", response_model=CardResponse, status_code=status.HTTP_200_OK)
def update_card(
    card_id: int,
    request: CardUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CardUseCase = Depends(inject_use_case(container.card_use_case)),
) -> CardResponse:
    """
    Update a card.

    Changing the card type without a Bloom level resets the level to the
    new type's default.
    """
    try:
        card = use_case.update_card(
            card_id=card_id,
            user_id=current_user.id.value,
            front=request.front,
            back=request.back,
            meta=request.meta,
            card_type=request.card_type,
            bloom_level=request.bloom_level,
            position=request.position,
        )
        return CardResponse(
            success=True, message="Card updated successfully", card=to_card_schema(card)
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to update card {card_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.put("/cards/{card_id}/star", response_model=CardResponse, status_code=status.HTTP_200_OK)
def star_card(
    card_id: int,
    request: CardStarRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CardUseCase = Depends(inject_use_case(container.card_use_case)),
) -> CardResponse:
    try:
        card = use_case.set_starred(card_id, current_user.id.value, request.starred)
        message = "Card starred" if card.starred else "Card unstarred"
        return CardResponse(success=True, message=message, card=to_card_schema(card))
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to star card {card_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.delete("/cards/{card_id}", response_model=SuccessResponse, status_code=status.HTTP_200_OK)
def delete_card(
    card_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CardUseCase = Depends(inject_use_case(container.card_use_case)),
) -> SuccessResponse:
    try:
        use_case.delete_card(card_id, current_user.id.value)
        return SuccessResponse(success=True, message="Card deleted successfully")
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to delete card {card_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
