"""Repository for Folder domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import FolderId, UserId
from bloomcrux.domain.library.entities.folder import Folder
from bloomcrux.infrastructure.library.mappers.folder_mapper import FolderMapper
from bloomcrux.models import Folder as FolderORM


class FolderRepository:
    """Repository for Folder domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = FolderMapper()

    def _find_orm(self, folder_id: FolderId, user_id: UserId) -> FolderORM | None:
        stmt = select(FolderORM).where(
            FolderORM.id == folder_id.value,
            FolderORM.user_id == user_id.value,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_id(self, folder_id: FolderId, user_id: UserId) -> Folder | None:
        orm_model = self._find_orm(folder_id, user_id)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_name(self, name: str, user_id: UserId) -> Folder | None:
        stmt = select(FolderORM).where(
            FolderORM.name == name,
            FolderORM.user_id == user_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user(self, user_id: UserId) -> list[Folder]:
        stmt = (
            select(FolderORM)
            .where(FolderORM.user_id == user_id.value)
            .order_by(FolderORM.name, FolderORM.id)
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def save(self, folder: Folder) -> Folder:
        if folder.id.value == 0:
            orm_model = self.mapper.to_orm(folder)
            self.db.add(orm_model)
        else:
            existing = self._find_orm(folder.id, folder.user_id)
            if not existing:
                raise ValueError(f"Folder {folder.id.value} not found")
            orm_model = self.mapper.to_orm(folder, existing)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, folder_id: FolderId, user_id: UserId) -> bool:
        orm_model = self._find_orm(folder_id, user_id)
        if not orm_model:
            return False
        self.db.delete(orm_model)
        self.db.commit()
        return True
