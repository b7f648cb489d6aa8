"""Use-case for ending an operator session."""

from __future__ import annotations

from render_gateway.domain.sessions.repositories import SessionStore


class LogoutOperatorUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def execute(self, session_id: str | None) -> None:
        if session_id:
            self._sessions.invalidate(session_id)
