"""Use case for the cosmetics shop and the default deck cover."""

from datetime import UTC, datetime

import structlog

from bloomcrux.application.economy.protocols.cosmetic_repository import (
    CosmeticRepositoryProtocol,
)
from bloomcrux.application.economy.protocols.wallet_repository import WalletRepositoryProtocol
from bloomcrux.application.economy.protocols.xp_event_repository import (
    XpEventRepositoryProtocol,
)
from bloomcrux.application.economy.use_cases.dtos import CosmeticListing, PurchaseResult
from bloomcrux.domain.common.value_objects.ids import UserId
from bloomcrux.domain.economy.entities.wallet import Wallet
from bloomcrux.domain.economy.entities.xp_event import XpEvent
from bloomcrux.domain.economy.services.cosmetics_catalog import (
    CATALOG,
    Cosmetic,
    get_cosmetic,
    is_unlocked,
)
from bloomcrux.exceptions import (
    CosmeticLockedError,
    InsufficientTokensError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


class CosmeticsUseCase:
    """Browse, buy and equip cosmetics."""

    def __init__(
        self,
        cosmetic_repository: CosmeticRepositoryProtocol,
        wallet_repository: WalletRepositoryProtocol,
        xp_event_repository: XpEventRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.cosmetic_repository = cosmetic_repository
        self.wallet_repository = wallet_repository
        self.xp_event_repository = xp_event_repository

    def list_catalog(self, user_id: int) -> list[CosmeticListing]:
        user_id_vo = UserId(user_id)
        level = self._wallet(user_id_vo).commander_level
        owned = self.cosmetic_repository.purchased_ids(user_id_vo)
        return [
            CosmeticListing(
                cosmetic=item, unlocked=is_unlocked(item, level), owned=item.id in owned
            )
            for item in CATALOG
        ]

    def purchase(self, user_id: int, cosmetic_id: str) -> PurchaseResult:
        """
        Buy a cosmetic.

        Buying something already owned charges nothing.

        Raises:
            NotFoundError: If the cosmetic does not exist
            CosmeticLockedError: If the commander level is too low
            InsufficientTokensError: If the wallet cannot cover the price
        """
        user_id_vo = UserId(user_id)
        cosmetic = self._get(cosmetic_id)
        wallet = self._wallet(user_id_vo)

        if self.cosmetic_repository.is_purchased(user_id_vo, cosmetic.id):
            return PurchaseResult(cosmetic=cosmetic, wallet=wallet, already_owned=True)
        if not is_unlocked(cosmetic, wallet.commander_level):
            raise CosmeticLockedError(cosmetic.id, cosmetic.unlock_level)
        if wallet.tokens < cosmetic.price:
            raise InsufficientTokensError(required=cosmetic.price, available=wallet.tokens)

        wallet.debit_tokens(cosmetic.price)
        self.cosmetic_repository.add_purchase(user_id_vo, cosmetic.id, cosmetic.price)
        wallet = self.wallet_repository.save(wallet)
        self.xp_event_repository.save(
            XpEvent.create(
                user_id=user_id_vo,
                event_type="cosmetic_purchased",
                payload={"cosmetic_id": cosmetic.id, "price": cosmetic.price},
                created_at=datetime.now(UTC),
            )
        )

        logger.info("cosmetic_purchased", user_id=user_id, cosmetic_id=cosmetic.id)
        return PurchaseResult(cosmetic=cosmetic, wallet=wallet, already_owned=False)

    def is_purchased(self, user_id: int, cosmetic_id: str) -> bool:
        cosmetic = self._get(cosmetic_id)
        return self.cosmetic_repository.is_purchased(UserId(user_id), cosmetic.id)

    def get_default_cover(self, user_id: int) -> str | None:
        return self.cosmetic_repository.get_default_cover(UserId(user_id))

    def set_default_cover(self, user_id: int, cosmetic_id: str | None) -> str | None:
        """
        Choose the cover new decks show; ``None`` restores the stock cover.

        Raises:
            NotFoundError: If the cosmetic does not exist
            ValidationError: If it is not a deck cover or not owned
        """
        user_id_vo = UserId(user_id)
        if cosmetic_id is not None:
            cosmetic = self._get(cosmetic_id)
            if cosmetic.category != "DeckCovers":
                raise ValidationError(f"Cosmetic '{cosmetic_id}' is not a deck cover")
            if not self.cosmetic_repository.is_purchased(user_id_vo, cosmetic.id):
                raise ValidationError(f"Cosmetic '{cosmetic_id}' is not owned")

        self.cosmetic_repository.set_default_cover(user_id_vo, cosmetic_id)
        logger.info("default_cover_set", user_id=user_id, cosmetic_id=cosmetic_id)
        return cosmetic_id

    def _get(self, cosmetic_id: str) -> Cosmetic:
        cosmetic = get_cosmetic(cosmetic_id)
        if cosmetic is None:
            raise NotFoundError(f"Cosmetic '{cosmetic_id}' not found")
        return cosmetic

    def _wallet(self, user_id: UserId) -> Wallet:
        return self.wallet_repository.find(user_id) or Wallet.empty(user_id)
