from typing import Annotated

from fastapi import APIRouter, Depends

from bloomcrux.domain.identity.entities.user import User
from bloomcrux.infrastructure.identity.dependencies import get_current_user
from bloomcrux.infrastructure.identity.schemas import UserDetailsResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me")
def get_me(current_user: Annotated[User, Depends(get_current_user)]) -> UserDetailsResponse:
    """Get the current user's profile information."""
    return UserDetailsResponse(
        id=current_user.id.value,
        external_id=current_user.external_id,
        email=current_user.email,
        created_at=current_user.created_at,
    )
