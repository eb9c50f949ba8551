"""API routes for cosmetics: catalog, purchases and the default deck cover."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from bloomcrux.application.economy.use_cases.cosmetics_use_case import CosmeticsUseCase
from bloomcrux.core import container
from bloomcrux.domain.common.exceptions import DomainError
from bloomcrux.domain.identity.entities.user import User
from bloomcrux.exceptions import BloomCruxError
from bloomcrux.infrastructure.common.di import inject_use_case
from bloomcrux.infrastructure.economy.schemas import (
    CosmeticSchema,
    CosmeticsListResponse,
    DefaultCoverRequest,
    DefaultCoverResponse,
    PurchasedResponse,
    PurchaseRequest,
    PurchaseResponse,
)
from bloomcrux.infrastructure.identity.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cosmetics", tags=["cosmetics"])


@router.get("", response_model=CosmeticsListResponse, status_code=status.HTTP_200_OK)
def list_cosmetics(
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CosmeticsUseCase = Depends(inject_use_case(container.cosmetics_use_case)),
) -> CosmeticsListResponse:
    """List the catalog with unlock and ownership flags for the current user."""
    try:
        listings = use_case.list_catalog(current_user.id.value)
        return CosmeticsListResponse(
            cosmetics=[
                CosmeticSchema(
                    id=row.cosmetic.id,
                    name=row.cosmetic.name,
                    category=row.cosmetic.category,
                    unlock_level=row.cosmetic.unlock_level,
                    price=row.cosmetic.price,
                    unlocked=row.unlocked,
                    owned=row.owned,
                )
                for row in listings
            ]
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to list cosmetics: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/purchase", response_model=PurchaseResponse, status_code=status.HTTP_200_OK)
def purchase_cosmetic(
    request: PurchaseRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CosmeticsUseCase = Depends(inject_use_case(container.cosmetics_use_case)),
) -> PurchaseResponse:
    """
    Buy a cosmetic with tokens.

    Buying an owned cosmetic again charges nothing.

    Raises:
        HTTPException: 403 if not unlocked yet, 400 if tokens are short,
            404 if the cosmetic does not exist
    """
    try:
        result = use_case.purchase(current_user.id.value, request.cosmetic_id)
        return PurchaseResponse(
            ok=True,
            cosmetic_id=result.cosmetic.id,
            already_owned=result.already_owned,
            tokens=result.wallet.tokens,
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to purchase cosmetic {request.cosmetic_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/default-cover", response_model=DefaultCoverResponse, status_code=status.HTTP_200_OK
)
def get_default_cover(
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CosmeticsUseCase = Depends(inject_use_case(container.cosmetics_use_case)),
) -> DefaultCoverResponse:
    try:
        return DefaultCoverResponse(cosmetic_id=use_case.get_default_cover(current_user.id.value))
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to get default cover: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.put(
    "/default-cover", response_model=DefaultCoverResponse, status_code=status.HTTP_200_OK
)
def set_default_cover(
    request: DefaultCoverRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CosmeticsUseCase = Depends(inject_use_case(container.cosmetics_use_case)),
) -> DefaultCoverResponse:
    """Set the cover new decks show. The cover must be an owned deck cover."""
    try:
        cosmetic_id = use_case.set_default_cover(current_user.id.value, request.cosmetic_id)
        return DefaultCoverResponse(cosmetic_id=cosmetic_id)
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to set default cover: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/{cosmetic_id}/purchased", response_model=PurchasedResponse, status_code=status.HTTP_200_OK
)
def is_purchased(
    cosmetic_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CosmeticsUseCase = Depends(inject_use_case(container.cosmetics_use_case)),
) -> PurchasedResponse:
    try:
        purchased = use_case.is_purchased(current_user.id.value, cosmetic_id)
        return PurchasedResponse(cosmetic_id=cosmetic_id, purchased=purchased)
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to check cosmetic {cosmetic_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
