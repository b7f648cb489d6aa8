# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Read-only lookup table of the configured hosting accounts."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from render_gateway.shared.errors import AccountNotFoundError

from .entities import Account
from .exceptions import DuplicateAccountError


class AccountRegistry:
    """Resolves a human supplied reference to a configured account.

    An exact id match always wins; otherwise the reference is compared with
    account names case-insensitively. Duplicate ids and names that collide
    case-insensitively are rejected when the registry is built, so a name
    lookup can never be ambiguous.
    """

    def __init__(self, accounts: Iterable[Account]) -> None:
        self._accounts: tuple[Account, ...] = tuple(accounts)
        self._by_id: dict[str, Account] = {}
        self._by_name: dict[str, Account] = {}
        for account in self._accounts:
            if account.id in self._by_id:
                raise DuplicateAccountError(account.id, field="id")
            name_key = account.name.casefold()
            if name_key in self._by_name:
                raise DuplicateAccountError(account.name, field="name")
            self._by_id[account.id] = account
            self._by_name[name_key] = account

    @property
    def accounts(self) -> tuple[Account, ...]:
        return self._accounts

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)

    def find(self, reference: str) -> Account | None:
        if not reference:
            return None
        account = self._by_id.get(reference)
        if account is not None:
            return account
        return self._by_name.get(reference.casefold())

    def resolve(self, reference: str) -> Account:
        account = self.find(reference)
        if account is None:
            raise AccountNotFoundError(reference)
        return account


__all__ = ["AccountRegistry"]
