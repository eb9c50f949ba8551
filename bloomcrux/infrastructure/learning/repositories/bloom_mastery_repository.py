"""Repository for per-level mastery rollups."""

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.entities.bloom_mastery import BloomMastery
from bloomcrux.infrastructure.learning.mappers.quest_mappers import BloomMasteryMapper
from bloomcrux.models import BloomMastery as BloomMasteryORM


class BloomMasteryRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = BloomMasteryMapper()

    def _find_orm(
        self, user_id: UserId, deck_id: DeckId, level: BloomLevel
    ) -> BloomMasteryORM | None:
        stmt = select(BloomMasteryORM).where(
            BloomMasteryORM.user_id == user_id.value,
            BloomMasteryORM.deck_id == deck_id.value,
            BloomMasteryORM.bloom_level == level.value,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def find(self, user_id: UserId, deck_id: DeckId, level: BloomLevel) -> BloomMastery | None:
        orm_model = self._find_orm(user_id, deck_id, level)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_deck(self, user_id: UserId, deck_id: DeckId) -> list[BloomMastery]:
        stmt = select(BloomMasteryORM).where(
            BloomMasteryORM.user_id == user_id.value,
            BloomMasteryORM.deck_id == deck_id.value,
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def save(self, mastery: BloomMastery) -> BloomMastery:
        existing = self._find_orm(mastery.user_id, mastery.deck_id, mastery.bloom_level)
        orm_model = self.mapper.to_orm(mastery, existing)
        self.db.add(orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete_by_deck(self, user_id: UserId, deck_id: DeckId) -> int:
        stmt = delete(BloomMasteryORM).where(
            BloomMasteryORM.user_id == user_id.value,
            BloomMasteryORM.deck_id == deck_id.value,
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount or 0
