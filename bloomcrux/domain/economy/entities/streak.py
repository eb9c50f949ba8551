"""Daily study streak and its reward chests."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

from bloomcrux.domain.common.exceptions import BusinessRuleViolationError
from bloomcrux.domain.common.value_objects.ids import UserId

ChestType = Literal["seven_day", "three_day"]

SEVEN_DAY_CHEST_TOKENS = 75
THREE_DAY_CHEST_TOKENS = 30


@dataclass
class Streak:
    """
    Consecutive active days.

    Business Rules:
    - Activity twice on the same day counts once
    - A missed day resets the streak to 1
    - Each chest can be claimed once; the seven day chest is offered first
    """

    user_id: UserId
    current_streak: int = 0
    last_activity_date: date | None = None
    three_day_chest_claimed: bool = False
    seven_day_chest_claimed: bool = False

    def record_activity(self, today: date) -> None:
        last = self.last_activity_date
        if last == today:
            return
        if last is not None and (today - last).days == 1:
            self.current_streak += 1
        else:
            self.current_streak = 1
        self.last_activity_date = today

    def claim_chest(self) -> tuple[ChestType, int]:
        """Claim the best available chest; returns its type and token reward."""
        if self.current_streak >= 7 and not self.seven_day_chest_claimed:
            self.seven_day_chest_claimed = True
            return "seven_day", SEVEN_DAY_CHEST_TOKENS
        if self.current_streak >= 3 and not self.three_day_chest_claimed:
            self.three_day_chest_claimed = True
            return "three_day", THREE_DAY_CHEST_TOKENS
        raise BusinessRuleViolationError("no_available_chests", "no_available_chests")

    @classmethod
    def empty(cls, user_id: UserId) -> "Streak":
        return cls(user_id=user_id)
