# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from groupchat.application.use_cases.users.login_user import LoginUserUseCase
from groupchat.domain.users.exceptions import InvalidCredentialsError
from groupchat.infrastructure.access_control import AccessControl, current_principal
from groupchat.infrastructure.audit import AuditAction, audit_log
from groupchat.interfaces.http.dto.auth import LoginRequestDTO, LoginSuccessDTO
from groupchat.shared.logging import logger

from ._request import client_ip, parse_body


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        access_control: AccessControl,
    ) -> None:
        self._login_use_case = login_use_case
        self._access = access_control

    def login(self) -> tuple[Response, int]:
        dto = parse_body(LoginRequestDTO, "Username and password are required")
        ip_address = client_ip()

        try:
            token = self._login_use_case.execute(dto.username, dto.password)
        except InvalidCredentialsError:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            ip_address=ip_address,
            details={"username": dto.username},
        )
        logger.info(f"auth.login: ok username={dto.username}")
        return jsonify(LoginSuccessDTO(token=token).model_dump()), 200

    def logout(self) -> tuple[Response, int]:
        # Tokens are stateless; logout only confirms the caller held a valid one.
        principal = current_principal()
        audit_log(AuditAction.LOGOUT, user_id=principal.id, ip_address=client_ip())
        logger.info(f"auth.logout: ok user_id={principal.id}")
        return jsonify({"message": "Logout successful"}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule(
            "/logout", view_func=self._access.authenticated(self.logout), methods=["POST"]
        )
        return bp
