# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Shapes of the hosting API payloads the gateway reads or forwards.

Models accept unknown fields so opaque entities (events, env vars, deploys)
reach the caller unchanged; only the fields the gateway relies on are typed.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from render_gateway.domain.accounts import Account


class UpstreamModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        extra="allow",
    )

    def to_json(self) -> dict[str, Any]:
        # Only what upstream actually sent, so pass-through payloads stay unchanged.
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ServiceDetails(UpstreamModel):
    url: str | None = None
    region: str | None = None
    plan: str | None = None
    env: str | None = None


class RenderService(UpstreamModel):
    id: str
    name: str
    type: str | None = None
    auto_deploy: str | bool | None = None
    auto_deploy_trigger: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    suspended: str | bool | None = None
    dashboard_url: str | None = None
    image_path: str | None = None
    owner_id: str | None = None
    service_details: ServiceDetails | None = None


class ServiceEnvelope(UpstreamModel):
    service: RenderService
    cursor: str | None = None


class ServiceSummary(BaseModel):
    """Fixed projection of a service, tagged with the account it came from."""

    model_config = ConfigDict(
        alias_generator=to_camel, validate_by_name=True, validate_by_alias=True, frozen=True
    )

    id: str
    name: str
    type: str | None = None
    auto_deploy: str | bool | None = None
    auto_deploy_trigger: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    suspended: str | bool | None = None
    dashboard_url: str | None = None
    url: str | None = None
    region: str | None = None
    plan: str | None = None
    env: str | None = None
    image_path: str | None = None
    owner_id: str | None = None
    account_id: str
    account_name: str

    @classmethod
    def from_service(cls, service: RenderService, account: Account) -> ServiceSummary:
        details = service.service_details or ServiceDetails()
        return cls(
            id=service.id,
            name=service.name,
            type=service.type,
            auto_deploy=service.auto_deploy,
            auto_deploy_trigger=service.auto_deploy_trigger,
            created_at=service.created_at,
            updated_at=service.updated_at,
            suspended=service.suspended,
            dashboard_url=service.dashboard_url,
            url=details.url,
            region=details.region,
            plan=details.plan,
            env=details.env,
            image_path=service.image_path,
            owner_id=service.owner_id,
            account_id=account.id,
            account_name=account.name,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class EnvVar(UpstreamModel):
    key: str
    value: str | None = None


class EnvVarEntry(UpstreamModel):
    env_var: EnvVar
    cursor: str | None = None


class Event(UpstreamModel):
    id: str
    timestamp: str | None = None
    service_id: str | None = None
    type: str | None = None
    details: Any = None


class EventEntry(UpstreamModel):
    event: Event
    cursor: str | None = None


class DeployHandle(UpstreamModel):
    id: str
    status: str | None = None
    trigger: str | None = None
    created_at: str | None = None
    commit: Any = None


class EnvVarInput(BaseModel):
    """One element of a full-replace request, as sent upstream.

    Carries either a literal ``value`` or ``generateValue: true``, which asks
    the hosting API to generate a random value for the key.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        extra="allow",
        frozen=True,
    )

    key: str = Field(min_length=1, max_length=256)
    value: str | None = None
    generate_value: bool | None = None

    @model_validator(mode="after")
    def _value_or_generated(self) -> EnvVarInput:
        if self.generate_value:
            if self.value is not None:
                raise ValueError("value and generateValue are mutually exclusive")
        elif self.value is None:
            raise ValueError("value is required unless generateValue is true")
        return self

    def to_upstream(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "DeployHandle",
    "EnvVar",
    "EnvVarEntry",
    "EnvVarInput",
    "Event",
    "EventEntry",
    "RenderService",
    "ServiceDetails",
    "ServiceEnvelope",
    "ServiceSummary",
]
