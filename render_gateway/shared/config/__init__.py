# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    AccountConfig,
    AppConfig,
    DatabaseConfig,
    SecurityConfig,
    UpstreamConfig,
    load_config,
)

__all__ = [
    "AccountConfig",
    "AppConfig",
    "DatabaseConfig",
    "SecurityConfig",
    "UpstreamConfig",
    "load_config",
]
