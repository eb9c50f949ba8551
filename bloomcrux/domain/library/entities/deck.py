"""Deck entity."""

from dataclasses import dataclass
from datetime import datetime

from bloomcrux.domain.common.entity import Entity
from bloomcrux.domain.common.exceptions import ValidationError
from bloomcrux.domain.common.value_objects.ids import DeckId, FolderId, UserId

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000


@dataclass
class Deck(Entity[DeckId]):
    """
    A named set of cards owned by one user.

    Business Rules:
    - Title cannot be empty
    - A deck sits in at most one folder, or none
    """

    id: DeckId
    user_id: UserId
    title: str
    description: str | None = None
    folder_id: FolderId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.title = self._validate_title(self.title)
        self.description = self._validate_description(self.description)

    @staticmethod
    def _validate_title(title: str) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            raise ValidationError("Deck title cannot be empty", field="title")
        if len(cleaned) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"Deck title cannot exceed {MAX_TITLE_LENGTH} characters", field="title"
            )
        return cleaned

    @staticmethod
    def _validate_description(description: str | None) -> str | None:
        if description is None:
            return None
        cleaned = description.strip()
        if len(cleaned) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Deck description cannot exceed {MAX_DESCRIPTION_LENGTH} characters",
                field="description",
            )
        return cleaned or None

    def update_details(self, title: str | None = None, description: str | None = None) -> None:
        if title is not None:
            self.title = self._validate_title(title)
        if description is not None:
            self.description = self._validate_description(description)

    def move_to_folder(self, folder_id: FolderId | None) -> None:
        """Move into ``folder_id``; ``None`` unfiles the deck."""
        self.folder_id = folder_id

    @classmethod
    def create(
        cls,
        user_id: UserId,
        title: str,
        description: str | None = None,
        folder_id: FolderId | None = None,
    ) -> "Deck":
        """Create a new deck (ID will be 0 until persisted)."""
        return cls(
            id=DeckId.generate(),
            user_id=user_id,
            title=title,
            description=description,
            folder_id=folder_id,
        )

    @classmethod
    def create_with_id(
        cls,
        id: DeckId,
        user_id: UserId,
        title: str,
        description: str | None,
        folder_id: FolderId | None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "Deck":
        """Reconstitute a deck from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            title=title,
            description=description,
            folder_id=folder_id,
            created_at=created_at,
            updated_at=updated_at,
        )
