"""Repository for Deck domain entities."""

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from bloomcrux.domain.common.value_objects.ids import DeckId, FolderId, UserId
from bloomcrux.domain.library.entities.deck import Deck
from bloomcrux.infrastructure.library.mappers.deck_mapper import DeckMapper
from bloomcrux.models import Card as CardORM
from bloomcrux.models import Deck as DeckORM


class DeckRepository:
    """Repository for Deck domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = DeckMapper()

    def _find_orm(self, deck_id: DeckId, user_id: UserId) -> DeckORM | None:
        stmt = select(DeckORM).where(
            DeckORM.id == deck_id.value,
            DeckORM.user_id == user_id.value,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_id(self, deck_id: DeckId, user_id: UserId) -> Deck | None:
        """
        Find a deck by ID with user ownership check.

        Args:
            deck_id: The deck ID
            user_id: The user ID for ownership verification

        Returns:
            Deck entity if found and owned by user, None otherwise
        """
        orm_model = self._find_orm(deck_id, user_id)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user(
        self, user_id: UserId, folder_id: FolderId | None = None, unfiled_only: bool = False
    ) -> list[Deck]:
        stmt = select(DeckORM).where(DeckORM.user_id == user_id.value)
        if folder_id is not None:
            stmt = stmt.where(DeckORM.folder_id == folder_id.value)
        elif unfiled_only:
            stmt = stmt.where(DeckORM.folder_id.is_(None))
        stmt = stmt.order_by(DeckORM.created_at.desc(), DeckORM.id.desc())
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def count_cards_by_deck(self, user_id: UserId) -> dict[int, int]:
        stmt = (
            select(CardORM.deck_id, func.count(CardORM.id))
            .join(DeckORM, DeckORM.id == CardORM.deck_id)
            .where(DeckORM.user_id == user_id.value)
            .group_by(CardORM.deck_id)
        )
        return {deck_id: count for deck_id, count in self.db.execute(stmt).all()}

    def unfile_folder(self, folder_id: FolderId, user_id: UserId) -> int:
        stmt = (
            update(DeckORM)
            .where(DeckORM.folder_id == folder_id.value, DeckORM.user_id == user_id.value)
            .values(folder_id=None)
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount or 0

    def save(self, deck: Deck) -> Deck:
        """
        Save a deck entity (create or update).

        Args:
            deck: The deck entity to save

        Returns:
            Saved deck entity with database-generated values
        """
        if deck.id.value == 0:
            orm_model = self.mapper.to_orm(deck)
            self.db.add(orm_model)
        else:
            existing = self._find_orm(deck.id, deck.user_id)
            if not existing:
                raise ValueError(f"Deck {deck.id.value} not found")
            orm_model = self.mapper.to_orm(deck, existing)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, deck_id: DeckId, user_id: UserId) -> bool:
        """Delete a deck; its cards and quest state go with it."""
        orm_model = self._find_orm(deck_id, user_id)
        if not orm_model:
            return False
        self.db.delete(orm_model)
        self.db.commit()
        return True
