"""Use case for resolving identity provider subjects to local users."""

import structlog

from bloomcrux.application.identity.protocols.user_repository import UserRepositoryProtocol
from bloomcrux.domain.identity.entities.user import User

logger = structlog.get_logger(__name__)


class ProvisionUserUseCase:
    """Map verified token subjects onto user rows, creating them on first sight."""

    def __init__(self, user_repository: UserRepositoryProtocol) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository

    def get_or_provision(self, external_id: str, email: str | None = None) -> User:
        """
        Return the user for a token subject.

        Args:
            external_id: The provider's ``sub`` claim
            email: Email claim carried by the token, if any

        Returns:
            The existing or newly provisioned user
        """
        user = self.user_repository.find_by_external_id(external_id)
        if user is None:
            user = self.user_repository.save(User.create(external_id=external_id, email=email))
            logger.info("user_provisioned", user_id=user.id.value)
            return user

        if user.sync_email(email):
            user = self.user_repository.save(user)
            logger.info("user_email_synced", user_id=user.id.value)
        return user
