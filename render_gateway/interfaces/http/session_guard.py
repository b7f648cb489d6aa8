# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Response, g, request
from werkzeug.http import parse_cookie

from render_gateway.domain.sessions.entities import Session
from render_gateway.domain.sessions.repositories import SessionStore
from render_gateway.shared.errors import UnauthorizedError
from render_gateway.shared.logging import logger

SESSION_COOKIE = "session"


def extract_session_id(cookie_header: str | None) -> str | None:
    """Return the session token carried in a raw ``Cookie`` header, if any."""
    if not cookie_header:
        return None
    value = parse_cookie(cookie_header).get(SESSION_COOKIE, "")
    return value.strip() or None


def set_session_cookie(
    response: Response, session_id: str, *, max_age: int, secure: bool = False
) -> Response:
    response.set_cookie(
        SESSION_COOKIE,
        session_id,
        max_age=max_age,
        path="/",
        httponly=True,
        samesite="Strict",
        secure=secure,
    )
    return response


def clear_session_cookie(response: Response, *, secure: bool = False) -> Response:
    response.set_cookie(
        SESSION_COOKIE,
        "",
        max_age=0,
        path="/",
        httponly=True,
        samesite="Strict",
        secure=secure,
    )
    return response


class SessionGuard:
    """Looks up the caller's session on every request; nothing is cached."""

    def __init__(self, sessions: SessionStore) -> None:
        self._sessions = sessions

    def current_session(self) -> Session | None:
        session_id = extract_session_id(request.headers.get("Cookie"))
        session = self._sessions.verify(session_id)
        if session is not None:
            g.username = session.username
        return session

    def require(self, view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def inner(*args: Any, **kwargs: Any) -> Any:
            if self.current_session() is None:
                ip = request.headers.get("X-Forwarded-For", request.remote_addr)
                logger.warning(
                    f"No valid session on {request.method} {request.path} from {ip}"
                )
                raise UnauthorizedError()
            return view(*args, **kwargs)

        return inner


__all__ = [
    "SESSION_COOKIE",
    "SessionGuard",
    "clear_session_cookie",
    "extract_session_id",
    "set_session_cookie",
]
