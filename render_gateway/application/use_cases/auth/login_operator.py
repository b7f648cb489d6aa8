# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from render_gateway.domain.sessions.exceptions import InvalidCredentialsError
from render_gateway.domain.sessions.repositories import SessionStore
from render_gateway.shared.logging import logger


def _same(left: str, right: str) -> bool:
    return secrets.compare_digest(left.encode("utf-8"), right.encode("utf-8"))


class LoginOperatorUseCase:
    """Checks credentials against the single configured operator identity."""

    def __init__(
        self,
        *,
        operator_username: str,
        operator_password: str,
        sessions: SessionStore,
    ) -> None:
        self._operator_username = operator_username
        self._operator_password = operator_password
        self._sessions = sessions

    def execute(self, username: str, password: str) -> str:
        if not self._operator_password:
            logger.warning("auth.login: operator password not configured, login disabled")
            raise InvalidCredentialsError()

        # Evaluate both comparisons so timing does not reveal which one failed.
        username_ok = _same(username, self._operator_username)
        password_ok = _same(password, self._operator_password)
        if not (username_ok and password_ok):
            raise InvalidCredentialsError()

        return self._sessions.create(username)
