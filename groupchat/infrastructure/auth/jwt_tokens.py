# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed session tokens.

Tokens carry ``{"user": {"id", "username", "isAdmin"}}``. Nothing is stored
server side, so logout cannot revoke a token; an ``exp`` claim is only added
when an expiry is configured.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from groupchat.domain.users.entities import Principal, User
from groupchat.domain.users.exceptions import InvalidTokenError
from groupchat.domain.users.repositories import TokenService

_JWT_ALG = "HS256"


class JwtTokenService(TokenService):
    def __init__(self, *, secret: str, expires_minutes: int | None = None) -> None:
        if not secret:
            raise ValueError("jwt_secret_blank")
        self._secret = secret
        self._expires_minutes = expires_minutes

    def issue(self, user: User) -> str:
        principal = Principal.of(user)
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "user": {
                "id": principal.id,
                "username": principal.username,
                "isAdmin": principal.is_admin,
            },
            "iat": int(now.timestamp()),
        }
        if self._expires_minutes:
            payload["exp"] = int((now + timedelta(minutes=self._expires_minutes)).timestamp())
        return jwt.encode(payload, self._secret, algorithm=_JWT_ALG)

    def verify(self, token: str) -> Principal:
        if not token:
            raise InvalidTokenError("token_blank")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[_JWT_ALG])
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("token_expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("token_invalid") from exc

        claims = payload.get("user")
        if not isinstance(claims, dict):
            raise InvalidTokenError("token_missing_user")

        user_id = claims.get("id")
        username = claims.get("username")
        is_admin = claims.get("isAdmin", False)
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("token_bad_user_id")
        if not isinstance(username, str) or not username:
            raise InvalidTokenError("token_bad_username")
        if not isinstance(is_admin, bool):
            raise InvalidTokenError("token_bad_role")

        return Principal(id=user_id, username=username, is_admin=is_admin)


__all__ = ["JwtTokenService"]
