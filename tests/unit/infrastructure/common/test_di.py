"""Tests for request-scoped use case construction."""

from concurrent.futures import ThreadPoolExecutor

from sqlalchemy.orm import Session

from bloomcrux.core import container
from bloomcrux.infrastructure.common.di import build_use_case, inject_use_case


class TestBuildUseCase:
    def test_binds_repositories_to_given_session(self) -> None:
        session = Session()
        try:
            use_case = build_use_case(container.deck_use_case, session)
            assert use_case.deck_repository.db is session
        finally:
            session.close()

    def test_concurrent_requests_keep_their_own_session(self) -> None:
        dependency = inject_use_case(container.deck_use_case)
        sessions = [Session() for _ in range(8)]

        def build(session: Session) -> bool:
            return dependency(session).deck_repository.db is session

        try:
            with ThreadPoolExecutor(max_workers=8) as pool:
                results = list(pool.map(build, sessions * 25))
        finally:
            for session in sessions:
                session.close()

        assert all(results)
        assert len(results) == 200
