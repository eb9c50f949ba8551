"""Repository for MissionAttempt domain entities."""

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.entities.mission_attempt import MissionAttempt
from bloomcrux.infrastructure.learning.mappers.quest_mappers import MissionAttemptMapper
from bloomcrux.models import MissionAttempt as MissionAttemptORM


class MissionAttemptRepository:
    """Repository for MissionAttempt domain entities. Attempts are append-only."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = MissionAttemptMapper()

    def save(self, attempt: MissionAttempt) -> MissionAttempt:
        if attempt.id.value != 0:
            raise ValueError("Mission attempts cannot be modified")
        orm_model = self.mapper.to_orm(attempt)
        self.db.add(orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def find_recent(
        self, user_id: UserId, deck_id: DeckId, limit: int = 20
    ) -> list[MissionAttempt]:
        stmt = (
            select(MissionAttemptORM)
            .where(
                MissionAttemptORM.user_id == user_id.value,
                MissionAttemptORM.deck_id == deck_id.value,
            )
            .order_by(MissionAttemptORM.ended_at.desc(), MissionAttemptORM.id.desc())
            .limit(limit)
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def delete_by_deck(self, user_id: UserId, deck_id: DeckId) -> int:
        stmt = delete(MissionAttemptORM).where(
            MissionAttemptORM.user_id == user_id.value,
            MissionAttemptORM.deck_id == deck_id.value,
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount or 0
