"""Protocol for cosmetic purchases and the default cover setting."""

from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import UserId


class CosmeticRepositoryProtocol(Protocol):
    """Interface for owned cosmetics and cover preferences."""

    def purchased_ids(self, user_id: UserId) -> set[str]: ...

    def is_purchased(self, user_id: UserId, cosmetic_id: str) -> bool: ...

    def add_purchase(self, user_id: UserId, cosmetic_id: str, price_paid: int) -> None:
        """Record ownership. Does not commit; the caller commits with the debit."""
        ...

    def get_default_cover(self, user_id: UserId) -> str | None: ...

    def set_default_cover(self, user_id: UserId, cosmetic_id: str | None) -> None: ...
