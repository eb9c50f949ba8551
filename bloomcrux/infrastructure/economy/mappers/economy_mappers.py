"""Mappers for economy ORM ↔ Domain conversion."""

from bloomcrux.domain.common.value_objects.ids import DeckId, UserId, XpEventId
from bloomcrux.domain.economy.entities.streak import Streak
from bloomcrux.domain.economy.entities.wallet import Wallet
from bloomcrux.domain.economy.entities.xp_event import XpEvent
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.infrastructure.common.time import as_utc
from bloomcrux.models import UserEconomy as UserEconomyORM
from bloomcrux.models import UserStreak as UserStreakORM
from bloomcrux.models import XpEvent as XpEventORM


class WalletMapper:
    def to_domain(self, orm_model: UserEconomyORM) -> Wallet:
        return Wallet(
            user_id=UserId(orm_model.user_id),
            tokens=orm_model.tokens,
            commander_xp=orm_model.commander_xp,
            commander_level=orm_model.commander_level,
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(self, domain: Wallet, orm_model: UserEconomyORM | None = None) -> UserEconomyORM:
        if orm_model is None:
            orm_model = UserEconomyORM(user_id=domain.user_id.value)
        orm_model.tokens = domain.tokens
        orm_model.commander_xp = domain.commander_xp
        orm_model.commander_level = domain.commander_level
        return orm_model


class XpEventMapper:
    def to_domain(self, orm_model: XpEventORM) -> XpEvent:
        return XpEvent(
            id=XpEventId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            event_type=orm_model.event_type,  # type: ignore[arg-type]
            deck_id=DeckId(orm_model.deck_id) if orm_model.deck_id else None,
            bloom_level=BloomLevel.from_string(orm_model.bloom_level)
            if orm_model.bloom_level
            else None,
            payload=dict(orm_model.payload or {}),
            created_at=as_utc(orm_model.created_at),
        )

    def to_orm(self, domain: XpEvent) -> XpEventORM:
        orm_model = XpEventORM(
            user_id=domain.user_id.value,
            deck_id=domain.deck_id.value if domain.deck_id else None,
            bloom_level=domain.bloom_level.value if domain.bloom_level else None,
            event_type=domain.event_type,
            payload=dict(domain.payload),
        )
        if domain.created_at is not None:
            orm_model.created_at = domain.created_at
        return orm_model


class StreakMapper:
    def to_domain(self, orm_model: UserStreakORM) -> Streak:
        return Streak(
            user_id=UserId(orm_model.user_id),
            current_streak=orm_model.current_streak,
            last_activity_date=orm_model.last_activity_date,
            three_day_chest_claimed=orm_model.three_day_chest_claimed,
            seven_day_chest_claimed=orm_model.seven_day_chest_claimed,
        )

    def to_orm(self, domain: Streak, orm_model: UserStreakORM | None = None) -> UserStreakORM:
        if orm_model is None:
            orm_model = UserStreakORM(user_id=domain.user_id.value)
        orm_model.current_streak = domain.current_streak
        orm_model.last_activity_date = domain.last_activity_date
        orm_model.three_day_chest_claimed = domain.three_day_chest_claimed
        orm_model.seven_day_chest_claimed = domain.seven_day_chest_claimed
        return orm_model
