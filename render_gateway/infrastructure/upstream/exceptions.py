# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from render_gateway.shared.errors.base import InfrastructureError


class UpstreamError(InfrastructureError):
    """Non-2xx answer, transport failure or malformed payload from the hosting API.

    Every upstream failure surfaces as a 500 from the gateway; the original
    status code is kept in ``status_code`` and reported in the error context.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        context = {"upstream_status": status_code} if status_code is not None else None
        super().__init__(message, status=HTTPStatus.INTERNAL_SERVER_ERROR, context=context)
        self.status_code = status_code
        self.message = message
