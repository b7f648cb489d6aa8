# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from render_gateway.application.interfaces import HostingApiPort
from render_gateway.domain.accounts import AccountRegistry
from render_gateway.interfaces.http.dto.gateway import DeployRequestDTO
from render_gateway.interfaces.http.session_guard import SessionGuard
from render_gateway.shared.errors.validation import raise_validation_error
from render_gateway.shared.logging import logger
from render_gateway.utils import run_async


class ServicesController:
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

    def list_services(self) -> Response:
        t0 = perf_counter()
        services = run_async(self._upstream.list_services_for_accounts(self._registry.accounts))
        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"services.list: ok (accounts={len(self._registry)}, count={len(services)}, "
            f"dt_ms={dt:.0f})"
        )
        return jsonify([service.to_json() for service in services])

    def deploy(self) -> Response:
        try:
            dto = DeployRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        account = self._registry.resolve(dto.account_id)
        handle = run_async(self._upstream.trigger_deploy(account, dto.service_id))
        logger.info(
            f"services.deploy: ok (account={account.name}, service={dto.service_id}, "
            f"deploy={handle.id})"
        )
        return jsonify(handle.to_json())

    def events(self, account_ref: str, service_id: str) -> Response:
        account = self._registry.resolve(account_ref)
        entries = run_async(self._upstream.list_events(account, service_id))
        return jsonify([entry.to_json() for entry in entries])

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("services", __name__, url_prefix="/api")
        bp.add_url_rule(
            "/services",
            endpoint="list_services",
            view_func=self._guard.require(self.list_services),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/deploy",
            endpoint="deploy",
            view_func=self._guard.require(self.deploy),
            methods=["POST"],
        )
        bp.add_url_rule(
            "/events/<account_ref>/<service_id>",
            endpoint="events",
            view_func=self._guard.require(self.events),
            methods=["GET"],
        )
        return bp
