"""Folder entity for grouping decks."""

from dataclasses import dataclass
from datetime import datetime

from bloomcrux.domain.common.entity import Entity
from bloomcrux.domain.common.exceptions import ValidationError
from bloomcrux.domain.common.value_objects.ids import FolderId, UserId

MAX_FOLDER_NAME_LENGTH = 100


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Folder name cannot be empty", field="name")
    if len(cleaned) > MAX_FOLDER_NAME_LENGTH:
        raise ValidationError(
            f"Folder name cannot exceed {MAX_FOLDER_NAME_LENGTH} characters", field="name"
        )
    return cleaned


@dataclass
class Folder(Entity[FolderId]):
    """
    A user's folder of decks.

    Business Rules:
    - Name is non-empty and unique per user (uniqueness enforced by the repository)
    - Deleting a folder keeps its decks, which become unfiled
    """

    id: FolderId
    user_id: UserId
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.name = _clean_name(self.name)

    def rename(self, name: str) -> None:
        self.name = _clean_name(name)

    @classmethod
    def create(cls, user_id: UserId, name: str) -> "Folder":
        return cls(id=FolderId.generate(), user_id=user_id, name=name)

    @classmethod
    def create_with_id(
        cls,
        id: FolderId,
        user_id: UserId,
        name: str,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "Folder":
        return cls(id=id, user_id=user_id, name=name, created_at=created_at, updated_at=updated_at)
