# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Reduce pydantic errors to field paths and error types; input values are dropped."""

    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())) or "body",
            "type": error.get("type", "value_error"),
        }
        for error in exc.errors()
    ]
    return {"fields": sorted({error["field"] for error in errors}), "errors": errors}


def raise_validation_error(exc: PydanticValidationError, message: str) -> NoReturn:
    raise ValidationError(message, context=format_pydantic_errors(exc)) from exc


__all__ = ["format_pydantic_errors", "raise_validation_error"]
