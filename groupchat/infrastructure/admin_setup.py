# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from groupchat.domain.users.entities import User
from groupchat.domain.users.repositories import PasswordHasher, UserRepository
from groupchat.shared.config.settings import AuthConfig
from groupchat.shared.logging import logger


class AdminSetup:
    """Seed the first admin so the admin-only user endpoints are reachable."""

    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        config: AuthConfig,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._config = config

    def setup_admin_user(self) -> User | None:
        username = self._config.bootstrap_admin_username
        password = self._config.bootstrap_admin_password

        if not username or not password:
            logger.info("admin_setup: No bootstrap admin configured, skipping admin setup")
            return None

        if self._users.count() > 0:
            logger.info("admin_setup: Users already exist, skipping admin setup")
            return None

        user = self._users.add(
            username=username,
            password_hash=self._password_hasher.hash(password),
            is_admin=True,
        )
        logger.info(f"admin_setup: Created bootstrap admin '{username}' id={user.id}")
        return user


__all__ = ["AdminSetup"]
