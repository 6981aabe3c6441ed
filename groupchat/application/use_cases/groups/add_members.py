# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from groupchat.domain.groups.entities import Group
from groupchat.domain.groups.exceptions import GroupNotFoundError
from groupchat.domain.groups.repositories import GroupRepository
from groupchat.domain.users.exceptions import UserNotFoundError
from groupchat.domain.users.repositories import UserRepository
from groupchat.shared.errors.base import PermissionDeniedError


class AddMembersUseCase:
    def __init__(self, *, groups: GroupRepository, users: UserRepository) -> None:
        self._groups = groups
        self._users = users

    def execute(self, group_id: str, requester_id: str, user_ids: Sequence[str]) -> Group:
        group = self._groups.find_by_id(group_id)
        if group is None:
            raise GroupNotFoundError(context={"group_id": group_id})
        # Membership first, then user ids.
        if not group.is_member(requester_id):
            raise PermissionDeniedError()

        missing = self._users.missing_ids(user_ids)
        if missing:
            raise UserNotFoundError(context={"user_ids": missing})

        return self._groups.add_members(group_id, requester_id, user_ids)
