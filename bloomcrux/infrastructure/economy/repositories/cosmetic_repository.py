"""Repository for owned cosmetics and the default deck cover."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import UserId
from bloomcrux.models import CosmeticPurchase, UserSettings


class CosmeticRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def purchased_ids(self, user_id: UserId) -> set[str]:
        stmt = select(CosmeticPurchase.cosmetic_id).where(
            CosmeticPurchase.user_id == user_id.value
        )
        return set(self.db.execute(stmt).scalars().all())

    def is_purchased(self, user_id: UserId, cosmetic_id: str) -> bool:
        stmt = select(CosmeticPurchase.id).where(
            CosmeticPurchase.user_id == user_id.value,
            CosmeticPurchase.cosmetic_id == cosmetic_id,
        )
        return self.db.execute(stmt).first() is not None

    def add_purchase(self, user_id: UserId, cosmetic_id: str, price_paid: int) -> None:
        # Committed together with the wallet debit.
        self.db.add(
            CosmeticPurchase(user_id=user_id.value, cosmetic_id=cosmetic_id, price_paid=price_paid)
        )

    def get_default_cover(self, user_id: UserId) -> str | None:
        settings = self.db.get(UserSettings, user_id.value)
        return settings.default_cover if settings else None

    def set_default_cover(self, user_id: UserId, cosmetic_id: str | None) -> None:
        settings = self.db.get(UserSettings, user_id.value)
        if settings is None:
            settings = UserSettings(user_id=user_id.value)
            self.db.add(settings)
        settings.default_cover = cosmetic_id
        self.db.commit()
