# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .accounts import Account, AccountRegistry, DuplicateAccountError
from .exceptions import InvariantViolation, InvariantViolationError
from .sessions import InvalidCredentialsError, Session, SessionStore, StorageError

__all__ = [
    "Account",
    "AccountRegistry",
    "DuplicateAccountError",
    "InvalidCredentialsError",
    "InvariantViolation",
    "InvariantViolationError",
    "Session",
    "SessionStore",
    "StorageError",
]
