"""API routes for deck folders."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from bloomcrux.application.library.use_cases.folder_use_case import FolderUseCase
from bloomcrux.core import container
from bloomcrux.domain.common.exceptions import DomainError
from bloomcrux.domain.identity.entities.user import User
from bloomcrux.domain.library.entities.folder import Folder as FolderEntity
from bloomcrux.exceptions import BloomCruxError
from bloomcrux.infrastructure.common.di import inject_use_case
from bloomcrux.infrastructure.common.schemas import SuccessResponse
from bloomcrux.infrastructure.identity.dependencies import get_current_user
from bloomcrux.infrastructure.library.schemas import (
    Folder,
    FolderRequest,
    FolderResponse,
    FoldersListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/folders", tags=["folders"])


def _to_schema(folder: FolderEntity) -> Folder:
    return Folder(
        id=folder.id.value,
        name=folder.name,
        created_at=folder.created_at,
        updated_at=folder.updated_at,
    )


@router.get("", response_model=FoldersListResponse, status_code=status.HTTP_200_OK)
def list_folders(
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: FolderUseCase = Depends(inject_use_case(container.folder_use_case)),
) -> FoldersListResponse:
    """List the user's folders alphabetically."""
    try:
        folders = use_case.list_folders(current_user.id.value)
        return FoldersListResponse(folders=[_to_schema(f) for f in folders])
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to list folders: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
def create_folder(
    request: FolderRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: FolderUseCase = Depends(inject_use_case(container.folder_use_case)),
) -> FolderResponse:
    """
    Create a folder.

    Raises:
        HTTPException: 400 if the user already has a folder with that name
    """
    try:
        folder = use_case.create_folder(current_user.id.value, request.name)
        return FolderResponse(
            success=True, message="Folder created successfully", folder=_to_schema(folder)
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to create folder: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.patch("/{folder_id}", response_model=FolderResponse, status_code=status.HTTP_200_OK)
def rename_folder(
    folder_id: int,
    request: FolderRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: FolderUseCase = Depends(inject_use_case(container.folder_use_case)),
) -> FolderResponse:
    try:
        folder = use_case.rename_folder(folder_id, current_user.id.value, request.name)
        return FolderResponse(
            success=True, message="Folder renamed successfully", folder=_to_schema(folder)
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to rename folder {folder_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.delete("/{folder_id}", response_model=SuccessResponse, status_code=status.HTTP_200_OK)
def delete_folder(
    folder_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: FolderUseCase = Depends(inject_use_case(container.folder_use_case)),
) -> SuccessResponse:
    """
    Delete a folder. Its decks are kept and become unfiled.

    Args:
        folder_id: ID of the folder to delete
        use_case: FolderUseCase injected via dependency container
    """
    try:
        use_case.delete_folder(folder_id, current_user.id.value)
        return SuccessResponse(success=True, message="Folder deleted successfully")
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to delete folder {folder_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
