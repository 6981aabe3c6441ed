# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from .entities import Principal, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: str) -> User | None: ...
    def missing_ids(self, user_ids: Iterable[str]) -> list[str]: ...
    def add(self, username: str, password_hash: str, is_admin: bool) -> User: ...
    def update(
        self,
        user_id: str,
        *,
        username: str | None = None,
        password_hash: str | None = None,
        is_admin: bool | None = None,
    ) -> User: ...
    def count(self) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, user: User) -> str: ...
    def verify(self, token: str) -> Principal: ...
