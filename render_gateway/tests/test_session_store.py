from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session as OrmSession
from sqlalchemy.orm import sessionmaker

from render_gateway.domain.sessions import StorageError
from render_gateway.infrastructure.db import build_engine, build_session_factory, init_db
from render_gateway.infrastructure.db.models import SessionRecord
from render_gateway.infrastructure.repositories.sessions.sqlalchemy_session_store import (
    SqlAlchemySessionStore,
)
from render_gateway.shared.config import DatabaseConfig


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture()
def engine() -> Iterator[Engine]:
    built = build_engine(DatabaseConfig(url="sqlite://"))
    init_db(built)
    yield built
    built.dispose()


@pytest.fixture()
def factory(engine: Engine) -> sessionmaker[OrmSession]:
    return build_session_factory(engine)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(factory: sessionmaker[OrmSession], clock: FakeClock) -> SqlAlchemySessionStore:
    return SqlAlchemySessionStore(factory, namespace="test", clock=clock)


def _rows(factory: sessionmaker[OrmSession]) -> list[SessionRecord]:
    with factory() as db:
        return list(db.query(SessionRecord).all())


def test_created_session_is_valid_until_invalidated(store: SqlAlchemySessionStore) -> None:
    session_id = store.create("operator")

    session = store.verify(session_id)
    assert session is not None
    assert session.username == "operator"
    assert session.expires_at - session.created_at == timedelta(hours=24)

    store.invalidate(session_id)
    assert store.verify(session_id) is None


def test_tokens_are_long_and_unique(store: SqlAlchemySessionStore) -> None:
    first = store.create("operator")
    second = store.create("operator")

    assert first != second
    assert len(first) == 64
    assert store.verify(first) is not None
    assert store.verify(second) is not None


def test_records_are_keyed_by_namespace(
    store: SqlAlchemySessionStore, factory: sessionmaker[OrmSession]
) -> None:
    session_id = store.create("operator")

    assert [row.key for row in _rows(factory)] == [f"test:{session_id}"]
    other = SqlAlchemySessionStore(factory, namespace="other")
    assert other.verify(session_id) is None


def test_session_expires_and_is_removed(
    store: SqlAlchemySessionStore, clock: FakeClock, factory: sessionmaker[OrmSession]
) -> None:
    session_id = store.create("operator")

    clock.advance(timedelta(hours=23, minutes=59))
    assert store.verify(session_id) is not None

    clock.advance(timedelta(minutes=1))
    assert store.verify(session_id) is None
    assert _rows(factory) == []


@pytest.mark.parametrize("session_id", [None, "", "not-a-real-token"])
def test_verify_fails_closed_on_unknown_tokens(
    store: SqlAlchemySessionStore, session_id: str | None
) -> None:
    assert store.verify(session_id) is None


def test_invalidate_is_idempotent(store: SqlAlchemySessionStore) -> None:
    session_id = store.create("operator")

    store.invalidate(session_id)
    store.invalidate(session_id)
    store.invalidate("missing")

    assert store.verify(session_id) is None


def test_storage_failures(engine: Engine, store: SqlAlchemySessionStore) -> None:
    session_id = store.create("operator")
    SessionRecord.__table__.drop(engine)

    assert store.verify(session_id) is None
    with pytest.raises(StorageError):
        store.create("operator")
    with pytest.raises(StorageError):
        store.invalidate(session_id)
