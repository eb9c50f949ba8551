"""Repository for per-deck quest progress."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.entities.quest_progress import QuestProgress
from bloomcrux.infrastructure.learning.mappers.quest_mappers import QuestProgressMapper
from bloomcrux.models import QuestProgress as QuestProgressORM


class QuestProgressRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = QuestProgressMapper()

    def _find_orm(self, user_id: UserId, deck_id: DeckId) -> QuestProgressORM | None:
        stmt = select(QuestProgressORM).where(
            QuestProgressORM.user_id == user_id.value,
            QuestProgressORM.deck_id == deck_id.value,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def find(self, user_id: UserId, deck_id: DeckId) -> QuestProgress | None:
        orm_model = self._find_orm(user_id, deck_id)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, progress: QuestProgress) -> QuestProgress:
        orm_model = self.mapper.to_orm(
            progress, self._find_orm(progress.user_id, progress.deck_id)
        )
        self.db.add(orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, user_id: UserId, deck_id: DeckId) -> bool:
        orm_model = self._find_orm(user_id, deck_id)
        if not orm_model:
            return False
        self.db.delete(orm_model)
        self.db.commit()
        return True
