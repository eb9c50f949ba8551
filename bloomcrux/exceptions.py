"""Application exception hierarchy for BloomCrux."""

from fastapi import HTTPException
from starlette import status


class BloomCruxError(Exception):
    """Base exception for all BloomCrux application errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(BloomCruxError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class DeckNotFoundError(NotFoundError):
    """Deck not found (or not owned by the caller)."""

    def __init__(self, deck_id: int | None = None, *, message: str | None = None) -> None:
        """Initialize with deck ID or custom message."""
        self.deck_id = deck_id
        if message:
            super().__init__(message)
        elif deck_id is not None:
            super().__init__(f"Deck with id {deck_id} not found")
        else:
            super().__init__("Deck not found")


class CardNotFoundError(NotFoundError):
    """Card not found error."""

    def __init__(self, card_id: int) -> None:
        self.card_id = card_id
        super().__init__(f"Card with id {card_id} not found")


class FolderNotFoundError(NotFoundError):
    """Folder not found error."""

    def __init__(self, folder_id: int) -> None:
        self.folder_id = folder_id
        super().__init__(f"Folder with id {folder_id} not found")


class ValidationError(BloomCruxError):
    """Request passed schema validation but is semantically invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


class InsufficientTokensError(BloomCruxError):
    """The wallet cannot cover a purchase."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            f"insufficient_tokens: need {required}, have {available}", status_code=400
        )


class CosmeticLockedError(BloomCruxError):
    """The cosmetic is not unlocked at the user's commander level."""

    def __init__(self, cosmetic_id: str, required_level: int) -> None:
        self.cosmetic_id = cosmetic_id
        self.required_level = required_level
        super().__init__(
            f"Cosmetic '{cosmetic_id}' unlocks at commander level {required_level}",
            status_code=403,
        )


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
