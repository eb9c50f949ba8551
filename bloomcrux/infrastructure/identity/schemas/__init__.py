"""Identity context schemas."""

from bloomcrux.infrastructure.identity.schemas.user_schemas import UserDetailsResponse

__all__ = ["UserDetailsResponse"]
