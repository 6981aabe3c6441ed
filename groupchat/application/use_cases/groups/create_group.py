# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from groupchat.domain.groups.entities import GROUP_NAME_MAX_LENGTH, Group
from groupchat.domain.groups.exceptions import GroupNameTakenError, GroupNameTooLongError
from groupchat.domain.groups.repositories import GroupRepository
from groupchat.domain.users.repositories import UserRepository
from groupchat.shared.errors.base import UnauthorizedError


class CreateGroupUseCase:
    def __init__(self, *, groups: GroupRepository, users: UserRepository) -> None:
        self._groups = groups
        self._users = users

    def execute(self, name: str, owner_id: str) -> Group:
        if len(name) > GROUP_NAME_MAX_LENGTH:
            raise GroupNameTooLongError(context={"max_length": GROUP_NAME_MAX_LENGTH})
        # A token can outlive its account.
        if self._users.find_by_id(owner_id) is None:
            raise UnauthorizedError("unknown_user")
        if self._groups.find_by_name(name) is not None:
            raise GroupNameTakenError(context={"name": name})
        return self._groups.create(name, owner_id)
