# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from groupchat.domain.users.entities import USERNAME_MAX_LENGTH, User
from groupchat.domain.users.exceptions import (
    UsernameTakenError,
    UsernameTooLongError,
    UserNotFoundError,
)
from groupchat.domain.users.repositories import PasswordHasher, UserRepository


class EditUserUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self,
        user_id: str,
        *,
        username: str,
        password: str,
        is_admin: bool | None = None,
    ) -> User:
        """Replace username and password; ``is_admin=None`` keeps the current flag."""

        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(context={"user_id": user_id})

        if len(username) > USERNAME_MAX_LENGTH:
            raise UsernameTooLongError(context={"max_length": USERNAME_MAX_LENGTH})
        if username != user.username and self._users.find_by_username(username) is not None:
            raise UsernameTakenError(context={"username": username})

        return self._users.update(
            user_id,
            username=username,
            password_hash=self._password_hasher.hash(password),
            is_admin=is_admin,
        )
