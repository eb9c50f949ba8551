"""Protocol for User repository."""

from typing import Protocol

from bloomcrux.domain.identity.entities.user import User


class UserRepositoryProtocol(Protocol):
    """Interface for user persistence."""

    def find_by_external_id(self, external_id: str) -> User | None:
        """Find the user provisioned for an identity provider subject."""
        ...

    def save(self, user: User) -> User:
        """Persist a user (create or update)."""
        ...
