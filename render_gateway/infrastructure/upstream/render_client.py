# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from time import perf_counter
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from render_gateway.domain.accounts import Account
from render_gateway.shared.logging import logger

from .exceptions import UpstreamError
from .models import (
    DeployHandle,
    EnvVar,
    EnvVarEntry,
    EnvVarInput,
    EventEntry,
    ServiceEnvelope,
    ServiceSummary,
)

T = TypeVar("T")

SERVICES_PAGE_SIZE = 20
ENV_VARS_PAGE_SIZE = 20
EVENTS_LIMIT = 5

_SERVICES = TypeAdapter(list[ServiceEnvelope])
_ENV_VARS = TypeAdapter(list[EnvVarEntry])
_EVENTS = TypeAdapter(list[EventEntry])
_ENV_VAR = TypeAdapter(EnvVar)
_DEPLOY = TypeAdapter(DeployHandle)


def _segment(value: str) -> str:
    return quote(value, safe="")


class RenderApiClient:
    """Async client for the subset of the Render REST API the gateway uses.

    Every call authenticates with the account's API key as a bearer token and
    is attempted exactly once. Failures of any kind are raised as
    :class:`UpstreamError`.
    """

    def __init__(
        self,
        base_url: str = "https://api.render.com/v1",
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        )

    @staticmethod
    def _headers(account: Account) -> dict[str, str]:
        return {
            "accept": "application/json",
            "authorization": f"Bearer {account.credential}",
        }

    async def _request(
        self,
        http: httpx.AsyncClient,
        account: Account,
        method: str,
        path: str,
        *,
        action: str,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        try:
            response = await http.request(
                method, path, params=params, json=json, headers=self._headers(account)
            )
        except httpx.HTTPError as exc:
            logger.error(
                f"upstream: {method} {path} transport error account={account.name}: "
                f"{type(exc).__name__}"
            )
            raise UpstreamError(f"{action} failed: {type(exc).__name__}") from exc

        if response.is_success:
            return response

        reason = response.reason_phrase or str(response.status_code)
        logger.warning(
            f"upstream: {method} {path} -> {response.status_code} {reason} "
            f"account={account.name} body={response.text[:200]}"
        )
        raise UpstreamError(f"{action} failed: {reason}", status_code=response.status_code)

    @staticmethod
    def _parse(adapter: TypeAdapter[T], response: httpx.Response, action: str) -> T:
        try:
            return adapter.validate_json(response.content)
        except PydanticValidationError as exc:
            logger.warning(f"upstream: unexpected payload for '{action}': {exc.error_count()} errors")
            raise UpstreamError(
                f"{action} failed: unexpected response", status_code=response.status_code
            ) from exc

    async def _list_services(
        self, http: httpx.AsyncClient, account: Account
    ) -> list[ServiceSummary]:
        t0 = perf_counter()
        action = f"List services for account {account.name}"
        response = await self._request(
            http,
            account,
            "GET",
            "/services",
            action=action,
            params={"includePreviews": "true", "limit": SERVICES_PAGE_SIZE},
        )
        envelopes = self._parse(_SERVICES, response, action)
        services = [ServiceSummary.from_service(item.service, account) for item in envelopes]
        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"upstream.services: ok (account={account.name}, count={len(services)}, dt_ms={dt:.0f})"
        )
        return services

    async def list_services(self, account: Account) -> list[ServiceSummary]:
        async with self._http() as http:
            return await self._list_services(http, account)

    async def list_services_for_accounts(
        self, accounts: Sequence[Account]
    ) -> list[ServiceSummary]:
        """Fetch every account concurrently and concatenate in the given order.

        The first failing account fails the whole listing at once; calls still
        in flight for the other accounts are cancelled.
        """
        async with self._http() as http:
            tasks = [
                asyncio.create_task(self._list_services(http, account)) for account in accounts
            ]
            try:
                results = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        return [service for result in results for service in result]

    async def trigger_deploy(self, account: Account, service_id: str) -> DeployHandle:
        action = "Trigger deploy"
        async with self._http() as http:
            response = await self._request(
                http,
                account,
                "POST",
                f"/services/{_segment(service_id)}/deploys",
                action=action,
                json={"clearCache": "do_not_clear"},
            )
        deploy = self._parse(_DEPLOY, response, action)
        logger.info(
            f"upstream.deploy: triggered (account={account.name}, service={service_id}, "
            f"deploy={deploy.id})"
        )
        return deploy

    async def list_events(self, account: Account, service_id: str) -> list[EventEntry]:
        action = "List events"
        async with self._http() as http:
            response = await self._request(
                http,
                account,
                "GET",
                f"/services/{_segment(service_id)}/events",
                action=action,
                params={"limit": EVENTS_LIMIT},
            )
        return self._parse(_EVENTS, response, action)

    async def list_env_vars(self, account: Account, service_id: str) -> list[EnvVarEntry]:
        action = "List environment variables"
        async with self._http() as http:
            response = await self._request(
                http,
                account,
                "GET",
                f"/services/{_segment(service_id)}/env-vars",
                action=action,
                params={"limit": ENV_VARS_PAGE_SIZE},
            )
        return self._parse(_ENV_VARS, response, action)

    async def replace_all_env_vars(
        self, account: Account, service_id: str, env_vars: Sequence[EnvVarInput]
    ) -> list[EnvVarEntry]:
        """Make ``env_vars`` the complete variable set of the service."""
        action = "Update environment variables"
        async with self._http() as http:
            response = await self._request(
                http,
                account,
                "PUT",
                f"/services/{_segment(service_id)}/env-vars",
                action=action,
                json=[item.to_upstream() for item in env_vars],
            )
        result = self._parse(_ENV_VARS, response, action)
        logger.info(
            f"upstream.env_vars: replaced (account={account.name}, service={service_id}, "
            f"count={len(result)})"
        )
        return result

    async def upsert_env_var(
        self, account: Account, service_id: str, key: str, value: str
    ) -> EnvVar:
        action = "Update environment variable"
        async with self._http() as http:
            response = await self._request(
                http,
                account,
                "PUT",
                f"/services/{_segment(service_id)}/env-vars/{_segment(key)}",
                action=action,
                json={"value": value},
            )
        env_var = self._parse(_ENV_VAR, response, action)
        logger.info(
            f"upstream.env_vars: upserted (account={account.name}, service={service_id}, key={key})"
        )
        return env_var

    async def delete_env_var(self, account: Account, service_id: str, key: str) -> None:
        async with self._http() as http:
            await self._request(
                http,
                account,
                "DELETE",
                f"/services/{_segment(service_id)}/env-vars/{_segment(key)}",
                action="Delete environment variable",
            )
        logger.info(
            f"upstream.env_vars: deleted (account={account.name}, service={service_id}, key={key})"
        )


__all__ = ["RenderApiClient"]
