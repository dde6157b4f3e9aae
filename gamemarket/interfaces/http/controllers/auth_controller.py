# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from gamemarket.application.use_cases.users.login_user import LoginUserUseCase
from gamemarket.application.use_cases.users.logout_user import LogoutUserUseCase
from gamemarket.domain.users.exceptions import InvalidCredentialsError
from gamemarket.infrastructure.audit import AuditAction, audit_log
from gamemarket.infrastructure.observability import record_login
from gamemarket.shared.middleware.client_ip import client_ip
from gamemarket.interfaces.http.dto.auth import LoginRequestDTO, LoginSuccessDTO, OkDTO
from gamemarket.interfaces.http.guard import SESSION_COOKIE, current_session, login_required
from gamemarket.shared.config import AppConfig
from gamemarket.shared.errors.validation import raise_validation_error
from gamemarket.shared.logging import logger
from gamemarket.shared.middleware.csrf import CSRF_COOKIE, csrf_protect, set_csrf_cookie
from gamemarket.shared.middleware.rate_limit import rate_limit


def _login_payload() -> dict:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    # HTML login forms post urlencoded bodies
    return request.form.to_dict()


class AuthController:
    def __init__(
        self,
        *,
        config: AppConfig,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
    ) -> None:
        self._config = config
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case

    @rate_limit()
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_login_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip()

        try:
            grant = self._login_use_case.execute(dto.username, dto.password)
        except InvalidCredentialsError:
            record_login(False)
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username},
                success=False,
            )
            raise

        record_login(True)
        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=grant.user_id,
            ip_address=ip_address,
            details={"username": grant.username},
            success=True,
        )

        response = jsonify(LoginSuccessDTO(redirect=grant.redirect_to).model_dump())
        response.set_cookie(
            SESSION_COOKIE,
            grant.token,
            httponly=True,
            samesite=self._config.security.cookie_samesite,
            secure=self._config.secure_cookies(),
            max_age=self._config.auth.session_ttl,
            expires=grant.expires_at,
        )
        if self._config.security.enable_csrf:
            set_csrf_cookie(response, self._config)

        logger.info(f"auth.login: ok user_id={grant.user_id}")
        return response, 200

    @login_required
    @csrf_protect
    def logout(self) -> tuple[Response, int]:
        session = current_session()
        self._logout_use_case.execute(session.token)

        audit_log(
            AuditAction.LOGOUT,
            user_id=session.user_id,
            ip_address=client_ip(),
            success=True,
        )

        response = jsonify(OkDTO().model_dump())
        response.delete_cookie(
            SESSION_COOKIE,
            httponly=True,
            samesite=self._config.security.cookie_samesite,
            secure=self._config.secure_cookies(),
        )
        if self._config.security.enable_csrf:
            response.delete_cookie(CSRF_COOKIE)
        logger.info(f"auth.logout: ok user_id={session.user_id}")
        return response, 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        return bp
