# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from render_gateway.shared.errors.base import DomainError, InfrastructureError


class InvalidCredentialsError(DomainError):
    code = "Invalid username or password"
    status = HTTPStatus.UNAUTHORIZED


class StorageError(InfrastructureError):
    def __init__(self, operation: str) -> None:
        super().__init__("Session storage unavailable", context={"operation": operation})
