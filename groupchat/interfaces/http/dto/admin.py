# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CreateUserRequestDTO(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    is_admin: bool = Field(False, alias="isAdmin")


class EditUserRequestDTO(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    # Omitted or null keeps the current flag.
    is_admin: bool | None = Field(None, alias="isAdmin")


class UserDTO(BaseModel):
    id: str
    username: str
    is_admin: bool = Field(serialization_alias="isAdmin")

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "CreateUserRequestDTO",
    "EditUserRequestDTO",
    "UserDTO",
]
