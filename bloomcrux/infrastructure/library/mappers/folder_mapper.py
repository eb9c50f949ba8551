"""Mapper for Folder ORM ↔ Domain conversion."""

from bloomcrux.domain.common.value_objects.ids import FolderId, UserId
from bloomcrux.domain.library.entities.folder import Folder
from bloomcrux.infrastructure.common.time import as_utc
from bloomcrux.models import Folder as FolderORM


class FolderMapper:
    """Mapper for Folder ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: FolderORM) -> Folder:
        return Folder.create_with_id(
            id=FolderId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            name=orm_model.name,
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Folder, orm_model: FolderORM | None = None) -> FolderORM:
        if orm_model:
            orm_model.name = domain_entity.name
            return orm_model

        return FolderORM(user_id=domain_entity.user_id.value, name=domain_entity.name)
