"""In-memory Render API and the accounts shared by the test suite."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from render_gateway.domain.accounts import Account

BASE_URL = "https://api.render.example/v1"
OPERATOR = "operator"
OPERATOR_PASSWORD = "correct horse battery staple"

ALPHA = Account(id="acct-alpha", name="Alpha", credential="rnd_alpha_key")
BETA = Account(id="acct-beta", name="Beta", credential="rnd_beta_key")


def _service(service_id: str, name: str) -> dict[str, Any]:
    return {
        "id": service_id,
        "name": name,
        "type": "web_service",
        "autoDeploy": "yes",
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-02-01T00:00:00Z",
        "suspended": "not_suspended",
        "dashboardUrl": f"https://dashboard.render.com/web/{service_id}",
        "ownerId": "tea-1",
        "serviceDetails": {
            "url": f"https://{name}.onrender.com",
            "region": "frankfurt",
            "plan": "starter",
            "env": "python",
        },
        "repo": "https://github.com/example/app",
    }


@dataclass
class FakeRenderApi:
    """In-memory stand-in for the Render REST API behind ``httpx.MockTransport``."""

    owners: dict[str, str] = field(default_factory=dict)
    services: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    env_vars: dict[str, dict[str, str]] = field(default_factory=dict)
    events: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    deploys: list[tuple[str, Any]] = field(default_factory=list)
    requests: list[httpx.Request] = field(default_factory=list)

    def add_service(self, account: Account, service_id: str, name: str) -> None:
        self.owners[service_id] = account.credential
        self.services.setdefault(account.credential, []).append(_service(service_id, name))
        self.env_vars.setdefault(service_id, {})
        self.events.setdefault(
            service_id,
            [
                {
                    "id": f"evt-{service_id}-{n}",
                    "timestamp": f"2024-03-0{n}T00:00:00Z",
                    "serviceId": service_id,
                    "type": "deploy_ended",
                    "details": {"status": n},
                }
                for n in range(1, 8)
            ],
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        auth = request.headers.get("authorization", "")
        token = auth.removeprefix("Bearer ")
        if not auth.startswith("Bearer ") or token not in self.services:
            return httpx.Response(401, json={"message": "unauthorized"})

        parts = request.url.path.split("/")[2:]
        if parts == ["services"] and request.method == "GET":
            limit = int(request.url.params.get("limit", "20"))
            payload = [
                {"service": svc, "cursor": f"c-{svc['id']}"}
                for svc in self.services[token][:limit]
            ]
            return httpx.Response(200, json=payload)

        if len(parts) < 3 or parts[0] != "services":
            return httpx.Response(404, json={"message": "not found"})
        service_id = parts[1]
        if self.owners.get(service_id) != token:
            return httpx.Response(404, json={"message": "service not found"})

        resource = parts[2]
        if resource == "deploys" and request.method == "POST":
            body = json.loads(request.content)
            self.deploys.append((service_id, body))
            deploy = {
                "id": f"dep-{len(self.deploys)}",
                "status": "created",
                "trigger": "api",
                "createdAt": "2024-03-10T00:00:00Z",
                "commit": {"id": "abc123", "message": "init"},
            }
            return httpx.Response(201, json=deploy)

        if resource == "events" and request.method == "GET":
            limit = int(request.url.params.get("limit", "20"))
            payload = [
                {"event": event, "cursor": event["id"]}
                for event in reversed(self.events[service_id])
            ][:limit]
            return httpx.Response(200, json=payload)

        if resource == "env-vars":
            return self._env_vars(request, service_id, parts[3:])

        return httpx.Response(404, json={"message": "not found"})

    def _env_vars(
        self, request: httpx.Request, service_id: str, rest: list[str]
    ) -> httpx.Response:
        current = self.env_vars[service_id]
        if not rest and request.method == "GET":
            return httpx.Response(200, json=self._listing(current))
        if not rest and request.method == "PUT":
            replacement = json.loads(request.content)
            self.env_vars[service_id] = {
                item["key"]: item["value"] if "value" in item else f"generated-{item['key']}"
                for item in replacement
            }
            return httpx.Response(200, json=self._listing(self.env_vars[service_id]))

        key = rest[0]
        if request.method == "PUT":
            current[key] = json.loads(request.content)["value"]
            return httpx.Response(200, json={"key": key, "value": current[key]})
        if request.method == "DELETE":
            if key not in current:
                return httpx.Response(404, json={"message": "env var not found"})
            del current[key]
            return httpx.Response(204)
        return httpx.Response(405)

    @staticmethod
    def _listing(env_vars: dict[str, str]) -> list[dict[str, Any]]:
        return [
            {"envVar": {"key": key, "value": value}, "cursor": key}
            for key, value in env_vars.items()
        ]
