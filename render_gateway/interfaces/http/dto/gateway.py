from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, RootModel

from render_gateway.infrastructure.upstream.models import EnvVarInput


class DeployRequestDTO(BaseModel):
    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    account_id: str = Field(min_length=1, alias="accountId")
    service_id: str = Field(min_length=1, alias="serviceId")


class EnvVarValueDTO(BaseModel):
    value: str


class ReplaceEnvVarsRequestDTO(RootModel[list[EnvVarInput]]):
    pass
