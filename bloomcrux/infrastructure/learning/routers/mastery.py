"""API routes for deck mastery and level graduation."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from bloomcrux.application.learning.use_cases.deck_mastery_use_case import DeckMasteryUseCase
from bloomcrux.core import container
from bloomcrux.domain.common.exceptions import DomainError
from bloomcrux.domain.identity.entities.user import User
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.exceptions import BloomCruxError
from bloomcrux.infrastructure.common.di import inject_use_case
from bloomcrux.infrastructure.identity.dependencies import get_current_user
from bloomcrux.infrastructure.learning.schemas import DeckMasteryResponse, LevelGraduationResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decks", tags=["mastery"])


@router.get(
    "/{deck_id}/mastery", response_model=DeckMasteryResponse, status_code=status.HTTP_200_OK
)
def get_deck_mastery(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: DeckMasteryUseCase = Depends(inject_use_case(container.deck_mastery_use_case)),
) -> DeckMasteryResponse:
    """Get the rolled-up mastery percent of each level the learner has played."""
    try:
        levels = use_case.get_level_percentages(deck_id, current_user.id.value)
        return DeckMasteryResponse(deck_id=deck_id, levels=levels)
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to get mastery for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/{deck_id}/mastery/{bloom_level}",
    response_model=LevelGraduationResponse,
    status_code=status.HTTP_200_OK,
)
def get_level_graduation(
    deck_id: int,
    bloom_level: BloomLevel,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: DeckMasteryUseCase = Depends(inject_use_case(container.deck_mastery_use_case)),
) -> LevelGraduationResponse:
    """
    Aggregate a level's card mastery and decide whether it graduates.

    Args:
        deck_id: ID of the deck
        bloom_level: Level to evaluate

    Returns:
        Mean mastery, weak share and the graduation decision with reasons
    """
    try:
        result = use_case.evaluate_level(deck_id, current_user.id.value, bloom_level)
        return LevelGraduationResponse(
            deck_id=deck_id,
            bloom_level=bloom_level,
            mean_mastery=result.summary.mean_mastery,
            weak_share=result.summary.weak_share,
            cards=result.summary.cards,
            graduated=result.check.ok,
            reasons=list(result.check.reasons),
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(
            f"Failed to evaluate {bloom_level} for deck {deck_id}: {e!s}", exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
