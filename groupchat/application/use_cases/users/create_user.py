# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from groupchat.domain.users.entities import USERNAME_MAX_LENGTH, User
from groupchat.domain.users.exceptions import UsernameTakenError, UsernameTooLongError
from groupchat.domain.users.repositories import PasswordHasher, UserRepository


class CreateUserUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str, is_admin: bool = False) -> User:
        if len(username) > USERNAME_MAX_LENGTH:
            raise UsernameTooLongError(context={"max_length": USERNAME_MAX_LENGTH})
        if self._users.find_by_username(username) is not None:
            raise UsernameTakenError(context={"username": username})
        hashed = self._password_hasher.hash(password)
        return self._users.add(username=username, password_hash=hashed, is_admin=is_admin)
