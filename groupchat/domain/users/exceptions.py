# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from groupchat.shared.errors.base import DomainError


class UsernameTakenError(DomainError):
    code = "username_taken"
    message = "Username is already taken"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid credentials"


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "User not found"


class InvalidTokenError(Exception):
    """Raised by the token service when a token cannot be trusted."""


class UsernameTooLongError(DomainError):
    code = "username_too_long"
    message = "Username is too long"
