"""Repository for the user's token and commander XP balance."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import UserId
from bloomcrux.domain.economy.entities.wallet import Wallet
from bloomcrux.infrastructure.economy.mappers.economy_mappers import WalletMapper
from bloomcrux.models import UserEconomy as UserEconomyORM


class WalletRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = WalletMapper()

    def find(self, user_id: UserId) -> Wallet | None:
        orm_model = self.db.get(UserEconomyORM, user_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, wallet: Wallet) -> Wallet:
        stmt = select(UserEconomyORM).where(UserEconomyORM.user_id == wallet.user_id.value)
        existing = self.db.execute(stmt).scalar_one_or_none()
        orm_model = self.mapper.to_orm(wallet, existing)
        self.db.add(orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
