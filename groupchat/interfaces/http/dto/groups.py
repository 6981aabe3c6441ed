# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateGroupRequestDTO(BaseModel):
    group_name: str = Field(alias="groupName", min_length=1)


class AddMembersRequestDTO(BaseModel):
    user_ids: list[str] = Field(alias="userIds")


class SendMessageRequestDTO(BaseModel):
    message: str = Field(min_length=1)


class MessageDTO(BaseModel):
    id: str
    content: str
    sender: str
    created_at: datetime = Field(serialization_alias="createdAt")
    likes: list[str]

    model_config = ConfigDict(from_attributes=True)


class GroupDTO(BaseModel):
    id: str
    name: str
    members: list[str]
    messages: list[MessageDTO]

    model_config = ConfigDict(from_attributes=True)


def dump_group(group: object) -> dict:
    return GroupDTO.model_validate(group).model_dump(mode="json", by_alias=True)


__all__ = [
    "AddMembersRequestDTO",
    "CreateGroupRequestDTO",
    "GroupDTO",
    "MessageDTO",
    "SendMessageRequestDTO",
    "dump_group",
]
