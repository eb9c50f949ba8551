"""Mapper for User ORM ↔ Domain conversion."""

from bloomcrux.domain.common.value_objects.ids import UserId
from bloomcrux.domain.identity.entities.user import User
from bloomcrux.infrastructure.common.time import as_utc
from bloomcrux.models import User as UserORM


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        return User.create_with_id(
            id=UserId(orm_model.id),
            external_id=orm_model.external_id,
            email=orm_model.email,
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: User, orm_model: UserORM | None = None) -> UserORM:
        if orm_model:
            orm_model.email = domain_entity.email
            return orm_model

        return UserORM(external_id=domain_entity.external_id, email=domain_entity.email)
