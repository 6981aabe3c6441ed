# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_USER = "user"

USERNAME_MAX_LENGTH = 64


def role_for(is_admin: bool) -> str:
    """Roles are singular: an admin is not also a ``user``."""
    return ROLE_ADMIN if is_admin else ROLE_USER


@dataclass(slots=True, frozen=True)
class User:
    id: str
    username: str
    password_hash: str
    is_admin: bool = False

    @property
    def role(self) -> str:
        return role_for(self.is_admin)


@dataclass(slots=True, frozen=True)
class Principal:
    """Identity decoded from a session token and attached to a request."""

    id: str
    username: str
    is_admin: bool

    @property
    def role(self) -> str:
        return role_for(self.is_admin)

    @classmethod
    def of(cls, user: User) -> Principal:
        return cls(id=user.id, username=user.username, is_admin=user.is_admin)
