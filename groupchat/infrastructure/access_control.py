# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import wraps
from typing import Any

from flask import g, request

from groupchat.domain.users.entities import Principal
from groupchat.domain.users.exceptions import InvalidTokenError
from groupchat.domain.users.repositories import TokenService
from groupchat.shared.errors.base import PermissionDeniedError, UnauthorizedError
from groupchat.shared.logging import logger


def token_from_request() -> str | None:
    # The raw token is expected; a "Bearer " prefix is tolerated.
    token = request.headers.get("Authorization", "").strip()
    if token[:7].lower() == "bearer ":
        token = token[7:].strip()
    return token or None


def current_principal() -> Principal:
    principal = getattr(g, "principal", None)
    if principal is None:
        raise UnauthorizedError("missing_principal")
    return principal


class AccessControl:
    def __init__(self, tokens: TokenService, *, debug_mode: bool = False) -> None:
        self._tokens = tokens
        self._debug_mode = debug_mode

    def authenticate(self, token: str | None) -> Principal:
        if not token:
            if self._debug_mode:
                logger.debug(f"No Authorization header on {request.method} {request.path}")
            raise UnauthorizedError("missing_token")
        try:
            return self._tokens.verify(token)
        except InvalidTokenError as exc:
            logger.warning(
                f"Auth failed ({exc}) on {request.method} {request.path}"
            )
            raise UnauthorizedError(str(exc)) from exc

    @staticmethod
    def authorize(principal: Principal, allowed_roles: Iterable[str]) -> None:
        allowed = set(allowed_roles)
        if principal.role not in allowed:
            logger.warning(
                f"Access denied: user {principal.id} has role {principal.role}, "
                f"needs one of {sorted(allowed)}"
            )
            raise PermissionDeniedError()

    def authenticated(self, func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            principal = self.authenticate(token_from_request())
            g.principal = principal
            g.user_id = principal.id
            return func(*args, **kwargs)

        return wrapper

    def require_roles(self, *roles: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            @wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                self.authorize(current_principal(), roles)
                return func(*args, **kwargs)

            return self.authenticated(wrapper)

        return decorator


__all__ = ["AccessControl", "current_principal", "token_from_request"]
