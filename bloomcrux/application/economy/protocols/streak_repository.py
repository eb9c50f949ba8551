"""Protocol for Streak repository."""

from typing import Protocol

from bloomcrux.domain.common.value_objects.ids import UserId
from bloomcrux.domain.economy.entities.streak import Streak


class StreakRepositoryProtocol(Protocol):
    def find(self, user_id: UserId) -> Streak | None: ...

    def save(self, streak: Streak) -> Streak: ...
