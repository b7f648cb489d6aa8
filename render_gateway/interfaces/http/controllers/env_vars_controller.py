# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from render_gateway.application.interfaces import HostingApiPort
from render_gateway.domain.accounts import AccountRegistry
from render_gateway.interfaces.http.dto.gateway import EnvVarValueDTO, ReplaceEnvVarsRequestDTO
from render_gateway.interfaces.http.session_guard import SessionGuard
from render_gateway.shared.errors.validation import raise_validation_error
from render_gateway.shared.logging import logger
from render_gateway.utils import run_async


class EnvVarsController:
    """Environment variable CRUD for a single service of a configured account."""

    def __init__(
        self,
        *,
        registry: AccountRegistry,
        upstream: HostingApiPort,
        guard: SessionGuard,
    ) -> None:
        self._registry = registry
        self._upstream = upstream
        self._guard = guard

    def list_env_vars(self, account_ref: str, service_id: str) -> Response:
        account = self._registry.resolve(account_ref)
        entries = run_async(self._upstream.list_env_vars(account, service_id))
        return jsonify([entry.to_json() for entry in entries])

    def replace_env_vars(self, account_ref: str, service_id: str) -> Response:
        try:
            dto = ReplaceEnvVarsRequestDTO.model_validate(request.get_json(silent=True))
        except ValidationError as exc:
            raise_validation_error(exc)

        account = self._registry.resolve(account_ref)
        entries = run_async(
            self._upstream.replace_all_env_vars(account, service_id, dto.root)
        )
        logger.info(
            f"env_vars.replace: ok (account={account.name}, service={service_id}, "
            f"count={len(entries)})"
        )
        return jsonify([entry.to_json() for entry in entries])

    def upsert_env_var(self, account_ref: str, service_id: str, key: str) -> Response:
        try:
            dto = EnvVarValueDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        account = self._registry.resolve(account_ref)
        env_var = run_async(self._upstream.upsert_env_var(account, service_id, key, dto.value))
        logger.info(f"env_vars.upsert: ok (account={account.name}, service={service_id}, key={key})")
        return jsonify(env_var.to_json())

    def delete_env_var(self, account_ref: str, service_id: str, key: str) -> tuple[str, int]:
        account = self._registry.resolve(account_ref)
        run_async(self._upstream.delete_env_var(account, service_id, key))
        logger.info(f"env_vars.delete: ok (account={account.name}, service={service_id}, key={key})")
        return "", 204

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("env_vars", __name__, url_prefix="/api/env-vars")
        bp.add_url_rule(
            "/<account_ref>/<service_id>",
            endpoint="list",
            view_func=self._guard.require(self.list_env_vars),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/<account_ref>/<service_id>",
            endpoint="replace",
            view_func=self._guard.require(self.replace_env_vars),
            methods=["PUT"],
        )
        bp.add_url_rule(
            "/<account_ref>/<service_id>/<key>",
            endpoint="upsert",
            view_func=self._guard.require(self.upsert_env_var),
            methods=["PUT"],
        )
        bp.add_url_rule(
            "/<account_ref>/<service_id>/<key>",
            endpoint="delete",
            view_func=self._guard.require(self.delete_env_var),
            methods=["DELETE"],
        )
        return bp
