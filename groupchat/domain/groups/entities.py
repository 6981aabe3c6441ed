# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Group aggregate: members, embedded messages and their likes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from groupchat.domain.exceptions import InvariantViolationError

GROUP_NAME_MAX_LENGTH = 128


@dataclass(slots=True)
class Message:
    """A message owned by a group. ``likes`` never holds the same user twice."""

    id: str
    content: str
    sender: str
    created_at: datetime
    likes: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(set(self.likes)) != len(self.likes):
            raise InvariantViolationError("likes must not contain duplicates", field="likes")

    def is_liked_by(self, user_id: str) -> bool:
        return user_id in self.likes

    def toggle_like(self, user_id: str) -> bool:
        """Add the user's like, or remove it if present. Returns the new state."""

        if self.is_liked_by(user_id):
            self.likes.remove(user_id)
            return False
        self.likes.append(user_id)
        return True


@dataclass(slots=True)
class Group:
    """Chat group. The first member is the owner for the group's lifetime."""

    id: str
    name: str
    members: list[str]
    messages: list[Message] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            raise InvariantViolationError("group name must not be empty", field="name")
        if not self.members:
            raise InvariantViolationError("group must have at least one member", field="members")

    @property
    def owner_id(self) -> str:
        return self.members[0]

    def is_owner(self, user_id: str) -> bool:
        return self.owner_id == user_id

    def is_member(self, user_id: str) -> bool:
        return user_id in self.members

    def merge_members(self, user_ids: Iterable[str]) -> list[str]:
        """Union ``user_ids`` into the member list.

        Existing order is kept; unseen ids are appended in the order given.
        Returns the ids that were actually appended.
        """

        seen = set(self.members)
        appended: list[str] = []
        for user_id in user_ids:
            if user_id in seen:
                continue
            seen.add(user_id)
            appended.append(user_id)
        self.members.extend(appended)
        return appended

    def find_message(self, message_id: str) -> Message | None:
        for message in self.messages:
            if message.id == message_id:
                return message
        return None


@dataclass(slots=True, frozen=True)
class LikeToggle:
    liked: bool
    message: Message
    group: Group
