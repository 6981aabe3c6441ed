# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Password hashing for stored user credentials."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from groupchat.domain.users.repositories import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted hashes in werkzeug's ``method$salt$hash`` format."""

    def __init__(self, method: str = "scrypt") -> None:
        self._method = method

    def hash(self, password: str) -> str:
        return generate_password_hash(password, method=self._method)

    def verify(self, password: str, hashed: str) -> bool:
        # Accounts without a stored hash can never log in.
        if not password or not hashed:
            return False
        return check_password_hash(hashed, password)
