"""Mapper for Deck ORM ↔ Domain conversion."""

from bloomcrux.domain.common.value_objects.ids import DeckId, FolderId, UserId
from bloomcrux.domain.library.entities.deck import Deck
from bloomcrux.infrastructure.common.time import as_utc
from bloomcrux.models import Deck as DeckORM


class DeckMapper:
    """Mapper for Deck ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: DeckORM) -> Deck:
        return Deck.create_with_id(
            id=DeckId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            title=orm_model.title,
            description=orm_model.description,
            folder_id=FolderId(orm_model.folder_id) if orm_model.folder_id else None,
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Deck, orm_model: DeckORM | None = None) -> DeckORM:
        folder_id = domain_entity.folder_id.value if domain_entity.folder_id else None
        if orm_model:
            orm_model.title = domain_entity.title
            orm_model.description = domain_entity.description
            orm_model.folder_id = folder_id
            return orm_model

        return DeckORM(
            user_id=domain_entity.user_id.value,
            title=domain_entity.title,
            description=domain_entity.description,
            folder_id=folder_id,
        )
