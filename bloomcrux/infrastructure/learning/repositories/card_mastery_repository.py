"""Repository for per-card mastery records."""

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import CardId, DeckId, UserId
from bloomcrux.domain.learning.value_objects.mastery import CardMastery
from bloomcrux.infrastructure.learning.mappers.card_mastery_mapper import CardMasteryMapper
from bloomcrux.models import CardMastery as CardMasteryORM


class CardMasteryRepository:
    """Repository for per-card mastery records, keyed by (user, card)."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CardMasteryMapper()

    def find_by_deck(self, user_id: UserId, deck_id: DeckId) -> list[CardMastery]:
        stmt = (
            select(CardMasteryORM)
            .where(
                CardMasteryORM.user_id == user_id.value,
                CardMasteryORM.deck_id == deck_id.value,
            )
            .order_by(CardMasteryORM.card_id)
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def find_by_cards(self, user_id: UserId, card_ids: list[CardId]) -> dict[int, CardMastery]:
        if not card_ids:
            return {}
        stmt = select(CardMasteryORM).where(
            CardMasteryORM.user_id == user_id.value,
            CardMasteryORM.card_id.in_([c.value for c in card_ids]),
        )
        return {
            orm.card_id: self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()
        }

    def save_all(self, user_id: UserId, deck_id: DeckId, masteries: list[CardMastery]) -> None:
        if not masteries:
            return
        stmt = select(CardMasteryORM).where(
            CardMasteryORM.user_id == user_id.value,
            CardMasteryORM.card_id.in_([m.card_id.value for m in masteries]),
        )
        existing = {orm.card_id: orm for orm in self.db.execute(stmt).scalars().all()}
        for mastery in masteries:
            orm_model = self.mapper.to_orm(
                mastery, user_id, deck_id, existing.get(mastery.card_id.value)
            )
            self.db.add(orm_model)
        self.db.commit()

    def delete_by_deck(self, user_id: UserId, deck_id: DeckId) -> int:
        stmt = delete(CardMasteryORM).where(
            CardMasteryORM.user_id == user_id.value,
            CardMasteryORM.deck_id == deck_id.value,
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount or 0
