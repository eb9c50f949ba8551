"""Use case for folder management."""

import structlog

from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.application.library.protocols.folder_repository import FolderRepositoryProtocol
from bloomcrux.domain.common.value_objects.ids import FolderId, UserId
from bloomcrux.domain.library.entities.folder import Folder
from bloomcrux.exceptions import FolderNotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class FolderUseCase:
    """Create, rename, list and delete deck folders."""

    def __init__(
        self,
        folder_repository: FolderRepositoryProtocol,
        deck_repository: DeckRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.folder_repository = folder_repository
        self.deck_repository = deck_repository

    def list_folders(self, user_id: int) -> list[Folder]:
        return self.folder_repository.find_by_user(UserId(user_id))

    def create_folder(self, user_id: int, name: str) -> Folder:
        """
        Create a folder.

        Raises:
            ValidationError: If the user already has a folder with this name
        """
        user_id_vo = UserId(user_id)
        folder = Folder.create(user_id=user_id_vo, name=name)
        self._ensure_unique(folder.name, user_id_vo)

        folder = self.folder_repository.save(folder)
        logger.info("created_folder", folder_id=folder.id.value, user_id=user_id)
        return folder

    def rename_folder(self, folder_id: int, user_id: int, name: str) -> Folder:
        user_id_vo = UserId(user_id)
        folder = self.folder_repository.find_by_id(FolderId(folder_id), user_id_vo)
        if not folder:
            raise FolderNotFoundError(folder_id)

        folder.rename(name)
        self._ensure_unique(folder.name, user_id_vo, exclude=folder.id)
        folder = self.folder_repository.save(folder)
        logger.info("renamed_folder", folder_id=folder_id)
        return folder

    def delete_folder(self, folder_id: int, user_id: int) -> None:
        """
        Delete a folder. Its decks are kept and become unfiled.

        Raises:
            FolderNotFoundError: If folder is not found
        """
        folder_id_vo = FolderId(folder_id)
        user_id_vo = UserId(user_id)
        if not self.folder_repository.find_by_id(folder_id_vo, user_id_vo):
            raise FolderNotFoundError(folder_id)

        moved = self.deck_repository.unfile_folder(folder_id_vo, user_id_vo)
        self.folder_repository.delete(folder_id_vo, user_id_vo)
        logger.info("deleted_folder", folder_id=folder_id, unfiled_decks=moved)

    def _ensure_unique(self, name: str, user_id: UserId, exclude: FolderId | None = None) -> None:
        existing = self.folder_repository.find_by_name(name, user_id)
        if existing and existing.id != exclude:
            raise ValidationError(f"A folder named '{name}' already exists")
