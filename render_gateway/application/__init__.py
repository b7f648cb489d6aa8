# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interfaces import HostingApiPort
from .use_cases.auth.login_operator import LoginOperatorUseCase
from .use_cases.auth.logout_operator import LogoutOperatorUseCase

__all__ = [
    "HostingApiPort",
    "LoginOperatorUseCase",
    "LogoutOperatorUseCase",
]
