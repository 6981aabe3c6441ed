# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from groupchat.application.use_cases.users.create_user import CreateUserUseCase
from groupchat.application.use_cases.users.edit_user import EditUserUseCase
from groupchat.domain.users.entities import ROLE_ADMIN
from groupchat.infrastructure.access_control import AccessControl, current_principal
from groupchat.infrastructure.audit import AuditAction, audit_log
from groupchat.interfaces.http.dto.admin import (CreateUserRequestDTO,
                                                 EditUserRequestDTO, UserDTO)
from groupchat.shared.logging import logger

from ._request import client_ip, parse_body

_CREDENTIALS_REQUIRED = "Username and password are required"


class AdminController:
    def __init__(
        self,
        *,
        create_user: CreateUserUseCase,
        edit_user: EditUserUseCase,
        access_control: AccessControl,
    ) -> None:
        self._create_user = create_user
        self._edit_user = edit_user
        self._access = access_control

    def create_user(self) -> tuple[Response, int]:
        dto = parse_body(CreateUserRequestDTO, _CREDENTIALS_REQUIRED)
        admin = current_principal()

        user = self._create_user.execute(dto.username, dto.password, dto.is_admin)

        audit_log(
            AuditAction.USER_CREATED,
            user_id=admin.id,
            ip_address=client_ip(),
            details={"target_user": user.id, "is_admin": user.is_admin},
        )
        logger.info(f"admin.create_user: user_id={user.id} by admin={admin.id}")
        payload = {
            "message": "User created successfully",
            "user": UserDTO.model_validate(user).model_dump(by_alias=True),
        }
        return jsonify(payload), 201

    def edit_user(self, user_id: str) -> tuple[Response, int]:
        dto = parse_body(EditUserRequestDTO, _CREDENTIALS_REQUIRED)
        admin = current_principal()

        user = self._edit_user.execute(
            user_id,
            username=dto.username,
            password=dto.password,
            is_admin=dto.is_admin,
        )

        audit_log(
            AuditAction.USER_UPDATED,
            user_id=admin.id,
            ip_address=client_ip(),
            details={"target_user": user.id, "is_admin": user.is_admin},
        )
        logger.info(f"admin.edit_user: user_id={user.id} by admin={admin.id}")
        payload = {
            "message": "User updated successfully",
            "user": UserDTO.model_validate(user).model_dump(by_alias=True),
        }
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        admin_only = self._access.require_roles(ROLE_ADMIN)
        bp = Blueprint("admin", __name__, url_prefix="/admin")
        bp.add_url_rule("/createUser", view_func=admin_only(self.create_user), methods=["POST"])
        bp.add_url_rule(
            "/editUser/<user_id>", view_func=admin_only(self.edit_user), methods=["PUT"]
        )
        return bp
