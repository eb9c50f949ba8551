"""API routes for the token and commander XP economy."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from bloomcrux.application.economy.use_cases.finalize_mission_use_case import (
    FinalizeMissionUseCase,
)
from bloomcrux.application.economy.use_cases.streak_chest_use_case import StreakChestUseCase
from bloomcrux.application.economy.use_cases.wallet_use_case import WalletUseCase
from bloomcrux.core import container
from bloomcrux.domain.common.exceptions import DomainError
from bloomcrux.domain.economy.services.cosmetics_catalog import Unlock
from bloomcrux.domain.economy.services.xp_model import LevelTally
from bloomcrux.domain.identity.entities.user import User
from bloomcrux.exceptions import BloomCruxError
from bloomcrux.infrastructure.common.di import inject_use_case
from bloomcrux.infrastructure.economy.schemas import (
    FinalizeRequest,
    FinalizeResponse,
    LevelProgressSchema,
    StreakChestResponse,
    UnlockSchema,
    UnlocksResponse,
    WalletDetailsResponse,
)
from bloomcrux.infrastructure.identity.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/economy", tags=["economy"])


def _unlock_schema(unlock: Unlock) -> UnlockSchema:
    return UnlockSchema(
        id=unlock.id,
        name=unlock.name,
        level=unlock.level,
        kind=unlock.kind,
        category=unlock.category,
    )


@router.get("/wallet", response_model=WalletDetailsResponse, status_code=status.HTTP_200_OK)
def get_wallet(
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: WalletUseCase = Depends(inject_use_case(container.wallet_use_case)),
) -> WalletDetailsResponse:
    """
    Get the current user's tokens and commander XP.

    A user who never earned anything gets an empty wallet at level 1.
    """
    try:
        snapshot = use_case.get_wallet(current_user.id.value)
        wallet = snapshot.wallet
        return WalletDetailsResponse(
            tokens=wallet.tokens,
            commander_xp=wallet.commander_xp,
            commander_level=wallet.commander_level,
            progress=LevelProgressSchema(
                level=snapshot.progress.level,
                current=snapshot.progress.current,
                next_level=snapshot.progress.next_level,
                to_next=snapshot.progress.to_next,
            ),
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to get wallet: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/finalize", response_model=FinalizeResponse, status_code=status.HTTP_200_OK)
def finalize_mission(
    request: FinalizeRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: FinalizeMissionUseCase = Depends(
        inject_use_case(container.finalize_mission_use_case)
    ),
) -> FinalizeResponse:
    """
    Mint commander XP and tokens for a finished mission.

    Repeating the same (deck, mode, correct, total) inside the idempotency
    window credits nothing and reports zero deltas.
    """
    try:
        breakdown = (
            {
                level: LevelTally(correct=tally.correct, total=tally.total)
                for level, tally in request.breakdown.items()
            }
            if request.breakdown
            else None
        )
        result = use_case.finalize(
            user_id=current_user.id.value,
            deck_id=request.deck_id,
            mode=request.mode,
            correct=request.correct,
            total=request.total,
            bloom_level=request.bloom_level,
            breakdown=breakdown,
        )
        return FinalizeResponse(
            ok=True,
            tokens=result.wallet.tokens,
            commander_xp=result.wallet.commander_xp,
            commander_level=result.wallet.commander_level,
            xp_delta=result.xp_delta,
            tokens_delta=result.tokens_delta,
            duplicate=result.duplicate,
            new_unlocks=[_unlock_schema(u) for u in result.new_unlocks],
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to finalize mission: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/streak-chest", response_model=StreakChestResponse, status_code=status.HTTP_200_OK)
def claim_streak_chest(
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: StreakChestUseCase = Depends(inject_use_case(container.streak_chest_use_case)),
) -> StreakChestResponse:
    """
    Claim the best available streak chest.

    Raises:
        HTTPException: 400 ``no_available_chests`` when nothing can be claimed
    """
    try:
        claim = use_case.claim(current_user.id.value)
        return StreakChestResponse(
            ok=True,
            chest=claim.chest,
            tokens_awarded=claim.tokens_awarded,
            current_streak=claim.current_streak,
            tokens=claim.wallet.tokens,
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to claim streak chest: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/unlocks", response_model=UnlocksResponse, status_code=status.HTTP_200_OK)
def get_unlocks(
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: WalletUseCase = Depends(inject_use_case(container.wallet_use_case)),
) -> UnlocksResponse:
    try:
        result = use_case.get_unlocks(current_user.id.value)
        return UnlocksResponse(
            commander_level=result.commander_level,
            unlocked=[_unlock_schema(u) for u in result.unlocked],
            next_unlock=_unlock_schema(result.next_unlock) if result.next_unlock else None,
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to get unlocks: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
