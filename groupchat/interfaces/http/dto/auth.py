# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginSuccessDTO(BaseModel):
    message: str = "Login successful"
    token: str
