# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Account
from .exceptions import DuplicateAccountError
from .registry import AccountRegistry

__all__ = ["Account", "AccountRegistry", "DuplicateAccountError"]
