# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, TypeVar

from flask import request
from pydantic import BaseModel, ValidationError

from groupchat.shared.errors.validation import raise_validation_error
from groupchat.shared.middleware.request_logger import remote_ip as client_ip

DTO = TypeVar("DTO", bound=BaseModel)


def parse_body(dto: type[DTO], message: str) -> DTO:
    """Validate the JSON body against ``dto``; a missing or non-JSON body counts as ``{}``."""

    payload: Any = request.get_json(silent=True)
    if payload is None:
        payload = {}
    try:
        return dto.model_validate(payload)
    except ValidationError as exc:
        raise_validation_error(exc, message)


__all__ = ["client_ip", "parse_body"]
