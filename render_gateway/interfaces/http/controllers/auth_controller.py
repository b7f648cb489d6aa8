# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, redirect, render_template, request
from pydantic import ValidationError

from render_gateway.application.use_cases.auth.login_operator import LoginOperatorUseCase
from render_gateway.application.use_cases.auth.logout_operator import LogoutOperatorUseCase
from render_gateway.domain.sessions.exceptions import InvalidCredentialsError, StorageError
from render_gateway.interfaces.http.dto.auth import LoginRequestDTO
from render_gateway.interfaces.http.session_guard import (
    clear_session_cookie,
    extract_session_id,
    set_session_cookie,
)
from render_gateway.shared.logging import logger

INVALID_LOGIN_MESSAGE = "Invalid username or password"


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def render_login(error: str | None = None) -> str:
    return render_template("login.html", error=error)


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginOperatorUseCase,
        logout_use_case: LogoutOperatorUseCase,
        session_max_age: int,
        cookie_secure: bool = False,
    ) -> None:
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._session_max_age = session_max_age
        self._cookie_secure = cookie_secure

    def login_form(self) -> str:
        return render_login()

    def login(self) -> Response | str:
        try:
            dto = LoginRequestDTO.model_validate(request.form.to_dict())
        except ValidationError:
            logger.info(f"auth.login: rejected malformed form from {_get_client_ip()}")
            return render_login(INVALID_LOGIN_MESSAGE)

        try:
            session_id = self._login_use_case.execute(dto.username, dto.password)
        except InvalidCredentialsError:
            logger.warning(f"auth.login: failed from {_get_client_ip()}")
            return render_login(INVALID_LOGIN_MESSAGE)
        except StorageError:
            logger.error("auth.login: session could not be stored")
            return render_login("Login is temporarily unavailable, try again later")

        response = redirect("/", code=302)
        set_session_cookie(
            response, session_id, max_age=self._session_max_age, secure=self._cookie_secure
        )
        logger.info(f"auth.login: ok username={dto.username}")
        return response

    def logout(self) -> Response:
        session_id = extract_session_id(request.headers.get("Cookie"))
        try:
            self._logout_use_case.execute(session_id)
        except StorageError:
            logger.error("auth.logout: session could not be removed, clearing cookie anyway")

        response = redirect("/login", code=302)
        clear_session_cookie(response, secure=self._cookie_secure)
        logger.info("auth.logout: ok")
        return response

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule(
            "/login", endpoint="login_form", view_func=self.login_form, methods=["GET"]
        )
        bp.add_url_rule("/login", endpoint="login", view_func=self.login, methods=["POST"])
        bp.add_url_rule(
            "/logout", endpoint="logout", view_func=self.logout, methods=["GET", "POST"]
        )
        return bp
