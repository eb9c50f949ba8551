"""Verification of access tokens issued by the identity provider."""

from dataclasses import dataclass

import jwt
from jwt import InvalidTokenError

from bloomcrux.config import get_settings


@dataclass(frozen=True)
class TokenClaims:
    """Claims BloomCrux reads from a verified token."""

    subject: str
    email: str | None = None


def verify_access_token(token: str) -> TokenClaims | None:
    """Verify a provider token and return its claims if valid."""
    settings = get_settings()
    if not settings.AUTH_JWT_SECRET:
        return None

    options = {"verify_aud": settings.AUTH_JWT_AUDIENCE is not None}
    try:
        payload = jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE,
            options=options,
        )
    except InvalidTokenError:
        return None

    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        return None
    email = payload.get("email")
    return TokenClaims(subject=subject, email=email if isinstance(email, str) else None)
