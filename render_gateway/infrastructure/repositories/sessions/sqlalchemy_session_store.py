# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as OrmSession
from sqlalchemy.orm import sessionmaker

from render_gateway.domain.sessions.entities import Session
from render_gateway.domain.sessions.exceptions import StorageError
from render_gateway.domain.sessions.repositories import SessionStore
from render_gateway.infrastructure.db.models import SessionRecord
from render_gateway.infrastructure.db.session import session_scope
from render_gateway.shared.logging import logger

DEFAULT_SESSION_TTL = timedelta(hours=24)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SqlAlchemySessionStore(SessionStore):
    def __init__(
        self,
        factory: sessionmaker[OrmSession],
        *,
        namespace: str = "session",
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._factory = factory
        self._namespace = namespace
        self._ttl = ttl
        self._clock = clock

    def _key(self, session_id: str) -> str:
        return f"{self._namespace}:{session_id}"

    def create(self, username: str) -> str:
        session_id = secrets.token_hex(32)
        now = self._clock()
        record = SessionRecord(
            key=self._key(session_id),
            username=username,
            created_at=now,
            expires_at=now + self._ttl,
        )
        try:
            with session_scope(self._factory) as db:
                db.add(record)
        except SQLAlchemyError as exc:
            logger.opt(exception=exc).error("sessions.create: storage failure")
            raise StorageError("create") from exc

        logger.info(
            f"sessions.create: ok user={username} exp={record.expires_at.isoformat()} "
            f"sid={session_id[:8]}…"
        )
        return session_id

    def verify(self, session_id: str | None) -> Session | None:
        if not session_id:
            return None

        key = self._key(session_id)
        try:
            with session_scope(self._factory) as db:
                row = db.get(SessionRecord, key)
                if row is None:
                    logger.debug(f"sessions.verify: miss sid={session_id[:8]}…")
                    return None

                session = Session(
                    session_id=session_id,
                    username=row.username,
                    created_at=_aware(row.created_at),
                    expires_at=_aware(row.expires_at),
                )
                if not session.is_valid_at(self._clock()):
                    db.delete(row)
                    logger.info(f"sessions.verify: expired, removed sid={session_id[:8]}…")
                    return None
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            logger.opt(exception=exc).warning("sessions.verify: failed closed")
            return None

        return session

    def invalidate(self, session_id: str) -> None:
        if not session_id:
            return
        try:
            with session_scope(self._factory) as db:
                deleted = (
                    db.query(SessionRecord)
                    .filter(SessionRecord.key == self._key(session_id))
                    .delete()
                )
        except SQLAlchemyError as exc:
            logger.opt(exception=exc).error("sessions.invalidate: storage failure")
            raise StorageError("invalidate") from exc
        logger.info(f"sessions.invalidate: sid={session_id[:8]}… removed={deleted}")


__all__ = ["DEFAULT_SESSION_TTL", "SqlAlchemySessionStore"]
