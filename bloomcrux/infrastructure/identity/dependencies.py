"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bloomcrux.core import container
from bloomcrux.database import DatabaseSession
from bloomcrux.domain.common.exceptions import DomainError
from bloomcrux.domain.identity.entities.user import User
from bloomcrux.exceptions import CredentialsException
from bloomcrux.infrastructure.common.di import build_use_case
from bloomcrux.infrastructure.identity.services.token_service import verify_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: DatabaseSession,
) -> User:
    """
    Get the current authenticated user from the provider's access token.

    Args:
        credentials: Bearer credentials from the Authorization header
        db: Database session

    Returns:
        User domain entity, provisioned on first sight

    Raises:
        CredentialsException: If the token is missing or invalid
    """
    if credentials is None:
        raise CredentialsException

    claims = verify_access_token(credentials.credentials)
    if claims is None:
        raise CredentialsException

    use_case = build_use_case(container.provision_user_use_case, db)
    try:
        return use_case.get_or_provision(claims.subject, claims.email)
    except DomainError:
        raise CredentialsException from None
