# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Session
from .exceptions import InvalidCredentialsError, StorageError
from .repositories import SessionStore

__all__ = ["InvalidCredentialsError", "Session", "SessionStore", "StorageError"]
