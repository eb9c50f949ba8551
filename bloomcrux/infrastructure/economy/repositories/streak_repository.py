"""Repository for daily activity streaks."""

from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import UserId
from bloomcrux.domain.economy.entities.streak import Streak
from bloomcrux.infrastructure.economy.mappers.economy_mappers import StreakMapper
from bloomcrux.models import UserStreak as UserStreakORM


class StreakRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = StreakMapper()

    def find(self, user_id: UserId) -> Streak | None:
        orm_model = self.db.get(UserStreakORM, user_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, streak: Streak) -> Streak:
        existing = self.db.get(UserStreakORM, streak.user_id.value)
        orm_model = self.mapper.to_orm(streak, existing)
        self.db.add(orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
