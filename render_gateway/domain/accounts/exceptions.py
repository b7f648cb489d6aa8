# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from render_gateway.domain.exceptions import InvariantViolationError


class DuplicateAccountError(InvariantViolationError):
    def __init__(self, value: str, *, field: str) -> None:
        super().__init__(f"duplicate account {field} '{value}'", field=field)
        self.value = value
