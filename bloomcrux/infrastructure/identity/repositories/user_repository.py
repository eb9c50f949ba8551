"""Repository for User domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from bloomcrux.domain.identity.entities.user import User
from bloomcrux.infrastructure.identity.mappers.user_mapper import UserMapper
from bloomcrux.models import User as UserORM


class UserRepository:
    """Repository for User domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_external_id(self, external_id: str) -> User | None:
        stmt = select(UserORM).where(UserORM.external_id == external_id)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, user: User) -> User:
        if user.id.value == 0:
            orm_model = self.mapper.to_orm(user)
            self.db.add(orm_model)
        else:
            existing = self.db.get(UserORM, user.id.value)
            if not existing:
                raise ValueError(f"User {user.id.value} not found")
            orm_model = self.mapper.to_orm(user, existing)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
