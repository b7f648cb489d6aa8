# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

import httpx
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from render_gateway.application.use_cases.auth.login_operator import LoginOperatorUseCase
from render_gateway.application.use_cases.auth.logout_operator import LogoutOperatorUseCase
from render_gateway.domain.accounts import Account, AccountRegistry
from render_gateway.infrastructure.db import build_engine, build_session_factory, init_db
from render_gateway.infrastructure.repositories.sessions.sqlalchemy_session_store import (
    SqlAlchemySessionStore,
)
from render_gateway.infrastructure.upstream import RenderApiClient
from render_gateway.interfaces.http.controllers.auth_controller import AuthController
from render_gateway.interfaces.http.controllers.dashboard_controller import (
    DashboardController,
)
from render_gateway.interfaces.http.controllers.env_vars_controller import EnvVarsController
from render_gateway.interfaces.http.controllers.misc_controller import MiscController
from render_gateway.interfaces.http.controllers.services_controller import (
    ServicesController,
)
from render_gateway.interfaces.http.session_guard import SessionGuard
from render_gateway.shared.config import AppConfig


class Container:
    def __init__(
        self,
        config: AppConfig,
        *,
        upstream_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._upstream_transport = upstream_transport

    # Storage

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        init_db(self.engine)
        return build_session_factory(self.engine)

    @cached_property
    def session_store(self) -> SqlAlchemySessionStore:
        return SqlAlchemySessionStore(
            self.session_factory,
            namespace=self.config.session_namespace,
            ttl=timedelta(seconds=self.config.session_ttl),
        )

    # Accounts and upstream

    @cached_property
    def account_registry(self) -> AccountRegistry:
        return AccountRegistry(
            Account(
                id=item.id,
                name=item.name,
                credential=item.api_key.get_secret_value(),
            )
            for item in self.config.render_accounts
        )

    @cached_property
    def upstream_client(self) -> RenderApiClient:
        return RenderApiClient(
            self.config.upstream.base_url,
            timeout=self.config.upstream.timeout,
            transport=self._upstream_transport,
        )

    # Use cases

    @cached_property
    def login_operator_use_case(self) -> LoginOperatorUseCase:
        return LoginOperatorUseCase(
            operator_username=self.config.admin_username,
            operator_password=self.config.admin_password.get_secret_value(),
            sessions=self.session_store,
        )

    @cached_property
    def logout_operator_use_case(self) -> LogoutOperatorUseCase:
        return LogoutOperatorUseCase(sessions=self.session_store)

    # HTTP

    @cached_property
    def session_guard(self) -> SessionGuard:
        return SessionGuard(self.session_store)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_operator_use_case,
            logout_use_case=self.logout_operator_use_case,
            session_max_age=self.config.session_ttl,
            cookie_secure=self.config.security.cookie_secure,
        )

    @cached_property
    def dashboard_controller(self) -> DashboardController:
        return DashboardController(guard=self.session_guard)

    @cached_property
    def services_controller(self) -> ServicesController:
        return ServicesController(
            registry=self.account_registry,
            upstream=self.upstream_client,
            guard=self.session_guard,
        )

    @cached_property
    def env_vars_controller(self) -> EnvVarsController:
        return EnvVarsController(
            registry=self.account_registry,
            upstream=self.upstream_client,
            guard=self.session_guard,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
