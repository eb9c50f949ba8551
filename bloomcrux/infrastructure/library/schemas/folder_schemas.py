"""Pydantic schemas for Folder API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field


class FolderRequest(BaseModel):
    """Schema for creating or renaming a folder."""

    name: str = Field(..., min_length=1, max_length=100, description="Folder name")


class Folder(BaseModel):
    """Schema for Folder response."""

    id: int
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FolderResponse(BaseModel):
    """Schema for folder create/rename response."""

    success: bool = Field(..., description="Whether the operation was successful")
    message: str = Field(..., description="Response message")
    folder: Folder = Field(..., description="The folder")


class FoldersListResponse(BaseModel):
    folders: list[Folder] = Field(..., description="List of folders")
