"""User entity for identity management."""

from dataclasses import dataclass
from datetime import datetime

from bloomcrux.domain.common.entity import Entity
from bloomcrux.domain.common.exceptions import ValidationError
from bloomcrux.domain.common.value_objects.ids import UserId

MAX_EXTERNAL_ID_LENGTH = 255
MAX_EMAIL_LENGTH = 320


@dataclass
class User(Entity[UserId]):
    """
    A person known to the identity provider.

    Business Rules:
    - external_id is the provider's subject claim and never changes
    - email is optional; the provider may not share it
    - Credentials live with the provider, never here
    """

    id: UserId
    external_id: str
    email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.external_id or not self.external_id.strip():
            raise ValidationError("External id cannot be empty", field="external_id")
        if len(self.external_id) > MAX_EXTERNAL_ID_LENGTH:
            raise ValidationError(
                f"External id cannot exceed {MAX_EXTERNAL_ID_LENGTH} characters",
                field="external_id",
            )
        if self.email is not None and len(self.email) > MAX_EMAIL_LENGTH:
            raise ValidationError(
                f"Email cannot exceed {MAX_EMAIL_LENGTH} characters",
                field="email",
                value=self.email,
            )

    def sync_email(self, email: str | None) -> bool:
        """Adopt the email carried by a fresh token. Returns True when it changed."""
        if not email or email == self.email:
            return False
        if len(email) > MAX_EMAIL_LENGTH:
            raise ValidationError(
                f"Email cannot exceed {MAX_EMAIL_LENGTH} characters", field="email", value=email
            )
        self.email = email
        return True

    @classmethod
    def create(cls, external_id: str, email: str | None = None) -> "User":
        """Provision a user seen for the first time (ID is 0 until persisted)."""
        return cls(id=UserId.generate(), external_id=external_id.strip(), email=email)

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        external_id: str,
        email: str | None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "User":
        """Reconstitute a user from persistence."""
        return cls(
            id=id,
            external_id=external_id,
            email=email,
            created_at=created_at,
            updated_at=updated_at,
        )
