"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable, Generator
from typing import Any

# Settings are read once at import time, so the environment goes first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["AUTH_JWT_SECRET"] = "bloomcrux-test-secret-with-at-least-32-bytes"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from bloomcrux import models  # noqa: E402
from bloomcrux.database import Base, build_engine, get_db  # noqa: E402
from bloomcrux.domain.common.value_objects.ids import UserId  # noqa: E402
from bloomcrux.domain.identity.entities.user import User  # noqa: E402
from bloomcrux.infrastructure.identity.dependencies import get_current_user  # noqa: E402
from bloomcrux.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite://"

test_engine = build_engine(TEST_DATABASE_URL)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def test_user(db_session: Session) -> models.User:
    user = models.User(external_id="provider|test-user", email="learner@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def _override_db(db_session: Session) -> Callable[[], Generator[Session, None, None]]:
    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    return override_get_db


@pytest.fixture
def client(db_session: Session, test_user: models.User) -> Generator[TestClient, Any, None]:
    """Create a test client authenticated as ``test_user``."""

    def override_get_current_user() -> User:
        return User.create_with_id(
            id=UserId(test_user.id),
            external_id=test_user.external_id,
            email=test_user.email,
            created_at=test_user.created_at,
            updated_at=test_user.updated_at,
        )

    app.dependency_overrides[get_db] = _override_db(db_session)
    app.dependency_overrides[get_current_user] = override_get_current_user

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def unauth_client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client that goes through real token verification."""
    app.dependency_overrides[get_db] = _override_db(db_session)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_folder(db_session: Session, test_user: models.User) -> models.Folder:
    folder = models.Folder(user_id=test_user.id, name="Biology")
    db_session.add(folder)
    db_session.commit()
    db_session.refresh(folder)
    return folder


@pytest.fixture
def test_deck(db_session: Session, test_user: models.User) -> models.Deck:
    deck = models.Deck(user_id=test_user.id, title="Cell Biology", description="Organelles")
    db_session.add(deck)
    db_session.commit()
    db_session.refresh(deck)
    return deck


@pytest.fixture
def test_cards(db_session: Session, test_deck: models.Deck) -> list[models.Card]:
    """Four Remember cards, three Understand cards and two Apply cards."""
    specs = [
        ("Standard MCQ", "Remember"),
        ("Standard MCQ", "Remember"),
        ("Fill in the Blank", "Remember"),
        ("Fill in the Blank", "Remember"),
        ("Short Answer", "Understand"),
        ("Sorting", "Understand"),
        ("Sequencing", "Understand"),
        ("Two-Tier MCQ", "Apply"),
        ("Two-Tier MCQ", "Apply"),
    ]
    cards = [
        models.Card(
            deck_id=test_deck.id,
            card_type=card_type,
            bloom_level=level,
            front=f"Question {i}",
            back=f"Answer {i}",
            meta={},
            position=i,
        )
        for i, (card_type, level) in enumerate(specs)
    ]
    db_session.add_all(cards)
    db_session.commit()
    for card in cards:
        db_session.refresh(card)
    return cards


@pytest.fixture
def other_user_deck(db_session: Session) -> models.Deck:
    """A deck owned by somebody else."""
    other = models.User(external_id="provider|someone-else")
    db_session.add(other)
    db_session.commit()
    deck = models.Deck(user_id=other.id, title="Private deck")
    db_session.add(deck)
    db_session.commit()
    db_session.refresh(deck)
    return deck
