# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from render_gateway.domain.accounts import Account
from render_gateway.infrastructure.upstream.models import (
    DeployHandle,
    EnvVar,
    EnvVarEntry,
    EnvVarInput,
    EventEntry,
    ServiceSummary,
)


class HostingApiPort(Protocol):
    async def list_services(self, account: Account) -> list[ServiceSummary]: ...

    async def list_services_for_accounts(
        self, accounts: Sequence[Account]
    ) -> list[ServiceSummary]: ...

    async def trigger_deploy(self, account: Account, service_id: str) -> DeployHandle: ...

    async def list_events(self, account: Account, service_id: str) -> list[EventEntry]: ...

    async def list_env_vars(self, account: Account, service_id: str) -> list[EnvVarEntry]: ...

    async def replace_all_env_vars(
        self, account: Account, service_id: str, env_vars: Sequence[EnvVarInput]
    ) -> list[EnvVarEntry]: ...

    async def upsert_env_var(
        self, account: Account, service_id: str, key: str, value: str
    ) -> EnvVar: ...

    async def delete_env_var(self, account: Account, service_id: str, key: str) -> None: ...
