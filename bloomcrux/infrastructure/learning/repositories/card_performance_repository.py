"""Repository for per-card quest performance counters."""

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.entities.card_performance import CardPerformance
from bloomcrux.infrastructure.learning.mappers.quest_mappers import CardPerformanceMapper
from bloomcrux.models import CardPerformance as CardPerformanceORM


class CardPerformanceRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CardPerformanceMapper()

    def _find_deck_orm(self, user_id: UserId, deck_id: DeckId) -> list[CardPerformanceORM]:
        stmt = (
            select(CardPerformanceORM)
            .where(
                CardPerformanceORM.user_id == user_id.value,
                CardPerformanceORM.deck_id == deck_id.value,
            )
            .order_by(CardPerformanceORM.card_id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def find_by_deck(self, user_id: UserId, deck_id: DeckId) -> list[CardPerformance]:
        return [self.mapper.to_domain(orm) for orm in self._find_deck_orm(user_id, deck_id)]

    def save_all(self, performances: list[CardPerformance]) -> list[CardPerformance]:
        """
        Insert or update counters.

        All performances must belong to one (user, deck).
        """
        if not performances:
            return []
        first = performances[0]
        existing = {
            orm.card_id: orm for orm in self._find_deck_orm(first.user_id, first.deck_id)
        }
        orm_models = []
        for perf in performances:
            orm_model = self.mapper.to_orm(perf, existing.get(perf.card_id.value))
            self.db.add(orm_model)
            orm_models.append(orm_model)
        self.db.commit()
        for orm_model in orm_models:
            self.db.refresh(orm_model)
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def delete_by_deck(self, user_id: UserId, deck_id: DeckId) -> int:
        stmt = delete(CardPerformanceORM).where(
            CardPerformanceORM.user_id == user_id.value,
            CardPerformanceORM.deck_id == deck_id.value,
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount or 0
