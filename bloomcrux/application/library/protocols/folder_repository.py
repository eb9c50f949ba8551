"""Protocol for Folder repository."""

from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import FolderId, UserId
from bloomcrux.domain.library.entities.folder import Folder


class FolderRepositoryProtocol(Protocol):
    """Interface for folder persistence."""

    def find_by_id(self, folder_id: FolderId, user_id: UserId) -> Folder | None:
        """
        Find a folder by ID with user ownership check.

        Args:
            folder_id: The folder ID
            user_id: The user ID for ownership verification

        Returns:
            Folder entity if found and owned by user, None otherwise
        """
        ...

    def find_by_name(self, name: str, user_id: UserId) -> Folder | None: ...

    def find_by_user(self, user_id: UserId) -> list[Folder]:
        """Get the user's folders ordered by name."""
        ...

    def save(self, folder: Folder) -> Folder: ...

    def delete(self, folder_id: FolderId, user_id: UserId) -> bool:
        """
        Delete a folder.

        Returns:
            True if deleted, False if not found
        """
        ...
