"""Repository for Card domain entities."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import CardId, DeckId, UserId
from bloomcrux.domain.library.entities.card import Card
from bloomcrux.infrastructure.library.mappers.card_mapper import CardMapper
from bloomcrux.models import Card as CardORM
from bloomcrux.models import Deck as DeckORM


class CardRepository:
    """Repository for Card domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CardMapper()

    def _find_orm(self, card_id: CardId, user_id: UserId) -> CardORM | None:
        stmt = (
            select(CardORM)
            .join(DeckORM, DeckORM.id == CardORM.deck_id)
            .where(CardORM.id == card_id.value, DeckORM.user_id == user_id.value)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_id(self, card_id: CardId, user_id: UserId) -> Card | None:
        orm_model = self._find_orm(card_id, user_id)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_deck(self, deck_id: DeckId) -> list[Card]:
        stmt = (
            select(CardORM)
            .where(CardORM.deck_id == deck_id.value)
            .order_by(CardORM.position, CardORM.id)
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def find_starred(self, deck_id: DeckId) -> list[Card]:
        stmt = (
            select(CardORM)
            .where(CardORM.deck_id == deck_id.value, CardORM.starred.is_(True))
            .order_by(CardORM.position, CardORM.id)
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def next_position(self, deck_id: DeckId) -> int:
        stmt = select(func.max(CardORM.position)).where(CardORM.deck_id == deck_id.value)
        last = self.db.execute(stmt).scalar()
        return 0 if last is None else last + 1

    def save(self, card: Card) -> Card:
        if card.id.value == 0:
            orm_model = self.mapper.to_orm(card)
            self.db.add(orm_model)
        else:
            existing = self.db.get(CardORM, card.id.value)
            if not existing:
                raise ValueError(f"Card {card.id.value} not found")
            orm_model = self.mapper.to_orm(card, existing)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, card_id: CardId, user_id: UserId) -> bool:
        orm_model = self._find_orm(card_id, user_id)
        if not orm_model:
            return False
        self.db.delete(orm_model)
        self.db.commit()
        return True
