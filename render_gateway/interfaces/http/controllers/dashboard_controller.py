# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, render_template

from render_gateway.interfaces.http.controllers.auth_controller import render_login
from render_gateway.interfaces.http.session_guard import SessionGuard


class DashboardController:
    """Serves the operator dashboard shell; browsers without a session get the login form."""

    def __init__(self, *, guard: SessionGuard) -> None:
        self._guard = guard

    def index(self) -> str:
        session = self._guard.current_session()
        if session is None:
            return render_login()
        return render_template("dashboard.html", username=session.username)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("dashboard", __name__)
        bp.add_url_rule("/", endpoint="index", view_func=self.index, methods=["GET"])
        return bp
