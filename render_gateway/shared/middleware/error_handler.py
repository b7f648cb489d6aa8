# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from render_gateway.shared.errors import register_error_handler
from render_gateway.shared.logging import logger


def configure_error_handling(app: Flask, *, debug_mode: bool = False) -> None:
    """Every failure leaves the app as a JSON ``{"error": ...}`` body."""
    register_error_handler(app, debug_mode=debug_mode)
    logger.debug(f"errors: JSON error handlers installed (debug={debug_mode})")
