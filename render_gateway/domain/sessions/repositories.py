# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Session


class SessionStore(Protocol):
    def create(self, username: str) -> str: ...
    def verify(self, session_id: str | None) -> Session | None: ...
    def invalidate(self, session_id: str) -> None: ...
