# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from groupchat.domain.groups.entities import LikeToggle
from groupchat.domain.groups.repositories import GroupRepository
from groupchat.domain.users.repositories import UserRepository
from groupchat.shared.errors.base import UnauthorizedError


class LikeMessageUseCase:
    """Toggle: a second identical call undoes the first."""

    def __init__(self, *, groups: GroupRepository, users: UserRepository) -> None:
        self._groups = groups
        self._users = users

    def execute(self, group_id: str, message_id: str, user_id: str) -> LikeToggle:
        if self._users.find_by_id(user_id) is None:
            raise UnauthorizedError("unknown_user")
        return self._groups.toggle_like(group_id, message_id, user_id)
