from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from render_gateway.app import create_app
from render_gateway.domain.accounts import AccountRegistry
from render_gateway.infrastructure.container import Container
from render_gateway.shared.config import (
    AccountConfig,
    AppConfig,
    DatabaseConfig,
    UpstreamConfig,
)
from render_gateway.tests.fakes import (
    ALPHA,
    BASE_URL,
    BETA,
    OPERATOR,
    OPERATOR_PASSWORD,
    FakeRenderApi,
)


@pytest.fixture()
def fake_api() -> FakeRenderApi:
    api = FakeRenderApi()
    api.services.setdefault(ALPHA.credential, [])
    api.services.setdefault(BETA.credential, [])
    api.add_service(ALPHA, "srv-a1", "alpha-web")
    api.add_service(ALPHA, "srv-a2", "alpha-worker")
    api.add_service(BETA, "srv-b1", "beta-web")
    return api


@pytest.fixture()
def registry() -> AccountRegistry:
    return AccountRegistry([ALPHA, BETA])


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig(
        app_env="test",
        admin_username=OPERATOR,
        admin_password=OPERATOR_PASSWORD,
        render_accounts=[
            AccountConfig(id=account.id, name=account.name, api_key=account.credential)
            for account in (ALPHA, BETA)
        ],
        database=DatabaseConfig(url="sqlite://"),
        upstream=UpstreamConfig(base_url=BASE_URL, timeout=5.0),
    )


@pytest.fixture()
def container(app_config: AppConfig, fake_api: FakeRenderApi) -> Iterator[Container]:
    built = Container(app_config, upstream_transport=fake_api.transport())
    yield built
    built.engine.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    flask_app = create_app(container=container)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def logged_in(client: FlaskClient) -> FlaskClient:
    response = client.post(
        "/login", data={"username": OPERATOR, "password": OPERATOR_PASSWORD}
    )
    assert response.status_code == 302
    return client
