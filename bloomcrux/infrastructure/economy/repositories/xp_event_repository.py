"""Repository for the economy audit log."""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.economy.entities.xp_event import XpEvent, XpEventType
from bloomcrux.infrastructure.economy.mappers.economy_mappers import XpEventMapper
from bloomcrux.models import XpEvent as XpEventORM


class XpEventRepository:
    """Repository for XpEvent domain entities. Events are append-only."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = XpEventMapper()

    def save(self, event: XpEvent) -> XpEvent:
        orm_model = self.mapper.to_orm(event)
        self.db.add(orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def find_since(
        self,
        user_id: UserId,
        event_type: XpEventType,
        since: datetime,
        deck_id: DeckId | None = None,
    ) -> list[XpEvent]:
        stmt = select(XpEventORM).where(
            XpEventORM.user_id == user_id.value,
            XpEventORM.event_type == event_type,
            XpEventORM.created_at >= since,
        )
        if deck_id is not None:
            stmt = stmt.where(XpEventORM.deck_id == deck_id.value)
        stmt = stmt.order_by(XpEventORM.created_at.desc(), XpEventORM.id.desc())
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def delete_by_deck(self, user_id: UserId, deck_id: DeckId) -> int:
        stmt = delete(XpEventORM).where(
            XpEventORM.user_id == user_id.value,
            XpEventORM.deck_id == deck_id.value,
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount or 0
