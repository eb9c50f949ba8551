"""Mapper for Card ORM ↔ Domain conversion."""

from bloomcrux.domain.common.value_objects.ids import CardId, DeckId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.library.entities.card import Card
from bloomcrux.domain.library.value_objects.card_type import CardType
from bloomcrux.infrastructure.common.time import as_utc
from bloomcrux.models import Card as CardORM


class CardMapper:
    """Mapper for Card ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: CardORM) -> Card:
        return Card.create_with_id(
            id=CardId(orm_model.id),
            deck_id=DeckId(orm_model.deck_id),
            card_type=CardType(orm_model.card_type),
            front=orm_model.front,
            back=orm_model.back,
            bloom_level=BloomLevel.from_string(orm_model.bloom_level)
            if orm_model.bloom_level
            else None,
            meta=dict(orm_model.meta or {}),
            position=orm_model.position,
            starred=orm_model.starred,
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Card, orm_model: CardORM | None = None) -> CardORM:
        if orm_model is None:
            orm_model = CardORM(deck_id=domain_entity.deck_id.value)
        orm_model.card_type = domain_entity.card_type.value
        orm_model.bloom_level = domain_entity.level.value
        orm_model.front = domain_entity.front
        orm_model.back = domain_entity.back
        orm_model.meta = dict(domain_entity.meta)
        orm_model.position = domain_entity.position
        orm_model.starred = domain_entity.starred
        return orm_model
