from collections.abc import Callable
from threading import Lock
from typing import TypeVar

from dependency_injector.providers import Provider
from sqlalchemy.orm import Session

from bloomcrux.core import container
from bloomcrux.database import DatabaseSession

T = TypeVar("T")

# container.db is shared by every request; sync handlers run in a threadpool
_override_lock = Lock()


def build_use_case(provider: Provider[T], db: Session) -> T:
    """Build a use case whose repositories are bound to ``db``."""
    with _override_lock:
        container.db.override(db)
        try:
            return provider()
        finally:
            container.db.reset_override()


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    Automatically handles container.db override with request-scoped database session.
    """

    def dependency(db: DatabaseSession) -> T:
        return build_use_case(provider, db)

    return dependency
