# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from groupchat.application.use_cases.groups.add_members import AddMembersUseCase
from groupchat.application.use_cases.groups.create_group import CreateGroupUseCase
from groupchat.application.use_cases.groups.delete_group import DeleteGroupUseCase
from groupchat.application.use_cases.groups.like_message import LikeMessageUseCase
from groupchat.application.use_cases.groups.search_groups import SearchGroupsUseCase
from groupchat.application.use_cases.groups.send_message import SendMessageUseCase
from groupchat.domain.users.entities import ROLE_ADMIN, ROLE_USER
from groupchat.infrastructure.access_control import AccessControl, current_principal
from groupchat.infrastructure.audit import AuditAction, audit_log
from groupchat.interfaces.http.dto.groups import (AddMembersRequestDTO,
                                                  CreateGroupRequestDTO,
                                                  SendMessageRequestDTO,
                                                  dump_group)
from groupchat.shared.logging import logger

from ._request import client_ip, parse_body


class GroupsController:
    def __init__(
        self,
        *,
        create_group: CreateGroupUseCase,
        delete_group: DeleteGroupUseCase,
        search_groups: SearchGroupsUseCase,
        add_members: AddMembersUseCase,
        send_message: SendMessageUseCase,
        like_message: LikeMessageUseCase,
        access_control: AccessControl,
    ) -> None:
        self._create_group = create_group
        self._delete_group = delete_group
        self._search_groups = search_groups
        self._add_members = add_members
        self._send_message = send_message
        self._like_message = like_message
        self._access = access_control

    def create_group(self) -> tuple[Response, int]:
        dto = parse_body(CreateGroupRequestDTO, "Group name is required")
        principal = current_principal()

        group = self._create_group.execute(dto.group_name, principal.id)

        audit_log(
            AuditAction.GROUP_CREATED,
            user_id=principal.id,
            ip_address=client_ip(),
            details={"group_id": group.id, "name": group.name},
        )
        logger.info(f"groups.create: group_id={group.id} owner={principal.id}")
        return jsonify({"message": "Group created successfully", "group": dump_group(group)}), 201

    def delete_group(self, group_id: str) -> tuple[Response, int]:
        principal = current_principal()

        self._delete_group.execute(group_id, principal.id)

        audit_log(
            AuditAction.GROUP_DELETED,
            user_id=principal.id,
            ip_address=client_ip(),
            details={"group_id": group_id},
        )
        return jsonify({"message": "Group deleted successfully"}), 200

    def search_group(self, group_name: str) -> tuple[Response, int]:
        groups = self._search_groups.execute(group_name)
        logger.debug(f"groups.search: fragment={group_name!r} matched={len(groups)}")
        return jsonify({"groups": [dump_group(group) for group in groups]}), 200

    def add_members(self, group_id: str) -> tuple[Response, int]:
        dto = parse_body(AddMembersRequestDTO, "userIds must be a list of user ids")
        principal = current_principal()

        group = self._add_members.execute(group_id, principal.id, dto.user_ids)

        audit_log(
            AuditAction.MEMBERS_ADDED,
            user_id=principal.id,
            ip_address=client_ip(),
            details={"group_id": group.id, "members": len(group.members)},
        )
        return jsonify({"message": "Members added successfully", "group": dump_group(group)}), 200

    def send_message(self, group_id: str) -> tuple[Response, int]:
        dto = parse_body(SendMessageRequestDTO, "Message content is required")
        principal = current_principal()

        group, message = self._send_message.execute(group_id, principal.id, dto.message)

        logger.info(
            f"groups.send_message: group_id={group.id} message_id={message.id} "
            f"sender={principal.id}"
        )
        payload = {
            "message": "Message sent successfully",
            "group": dump_group(group),
            "sentBy": principal.username,
            "content": message.content,
        }
        return jsonify(payload), 200

    def like_message(self, group_id: str, message_id: str) -> tuple[Response, int]:
        principal = current_principal()

        result = self._like_message.execute(group_id, message_id, principal.id)

        payload = {
            "message": "Message liked" if result.liked else "Message unliked",
            "liked": result.liked,
            "group": dump_group(result.group),
            "messageId": result.message.id,
            "likedBy": list(result.message.likes),
        }
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        authenticated = self._access.authenticated
        admin_or_user = self._access.require_roles(ROLE_ADMIN, ROLE_USER)

        bp = Blueprint("groups", __name__, url_prefix="/groups")
        bp.add_url_rule(
            "/createGroup", view_func=admin_or_user(self.create_group), methods=["POST"]
        )
        bp.add_url_rule(
            "/deleteGroup/<group_id>",
            view_func=authenticated(self.delete_group),
            methods=["DELETE"],
        )
        bp.add_url_rule(
            "/searchGroup/<group_name>",
            view_func=authenticated(self.search_group),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/addMembers/<group_id>",
            view_func=authenticated(self.add_members),
            methods=["POST"],
        )
        bp.add_url_rule(
            "/sendMessage/<group_id>",
            view_func=authenticated(self.send_message),
            methods=["POST"],
        )
        bp.add_url_rule(
            "/likeMessage/<group_id>/<message_id>",
            view_func=authenticated(self.like_message),
            methods=["POST"],
        )
        return bp
