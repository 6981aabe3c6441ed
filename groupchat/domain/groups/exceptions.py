# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from groupchat.shared.errors.base import DomainError


class GroupNameTakenError(DomainError):
    code = "group_name_taken"
    message = "Group name is already taken"


class GroupNotFoundError(DomainError):
    code = "group_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Group not found"


class MessageNotFoundError(DomainError):
    code = "message_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Message not found"


class GroupNameTooLongError(DomainError):
    code = "group_name_too_long"
    message = "Group name is too long"
