"""Wallet entity: a learner's tokens and commander XP."""

from dataclasses import dataclass
from datetime import datetime

from bloomcrux.domain.common.exceptions import ValidationError
from bloomcrux.domain.common.value_objects.ids import UserId
from bloomcrux.domain.economy.services.xp_model import progress_for


class InsufficientFundsError(ValidationError):
    """Raised when a debit exceeds the token balance."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            f"insufficient_tokens: need {required}, have {available}", field="tokens"
        )
        self.required = required
        self.available = available


@dataclass
class Wallet:
    """
    Server-owned economy state of one user.

    Business Rules:
    - Balances never go negative
    - commander_level always matches commander_xp on the level curve
    """

    user_id: UserId
    tokens: int = 0
    commander_xp: int = 0
    commander_level: int = 1
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.tokens < 0 or self.commander_xp < 0:
            raise ValidationError("Wallet balances cannot be negative")

    def credit(self, xp: int, tokens: int) -> int:
        """Add XP and tokens; returns the commander level before the credit."""
        if xp < 0 or tokens < 0:
            raise ValidationError("Credits cannot be negative")
        previous_level = self.commander_level
        self.commander_xp += xp
        self.tokens += tokens
        self.commander_level = progress_for(self.commander_xp).level
        return previous_level

    def add_tokens(self, tokens: int) -> None:
        if tokens < 0:
            raise ValidationError("Credits cannot be negative")
        self.tokens += tokens

    def debit_tokens(self, amount: int) -> None:
        if amount < 0:
            raise ValidationError("Debit cannot be negative")
        if amount > self.tokens:
            raise InsufficientFundsError(required=amount, available=self.tokens)
        self.tokens -= amount

    @classmethod
    def empty(cls, user_id: UserId) -> "Wallet":
        return cls(user_id=user_id)
