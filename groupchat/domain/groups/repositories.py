# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Group, LikeToggle, Message


class GroupRepository(Protocol):
    """Group store.

    Mutating operations check membership and ownership inside the write
    transaction.
    """

    def find_by_id(self, group_id: str) -> Group | None: ...
    def find_by_name(self, name: str) -> Group | None: ...
    def search_by_name_substring(
        self, fragment: str, *, case_insensitive: bool = True
    ) -> Sequence[Group]: ...
    def create(self, name: str, owner_id: str) -> Group: ...
    def delete(self, group_id: str, requester_id: str) -> None: ...
    def add_members(
        self, group_id: str, requester_id: str, new_member_ids: Sequence[str]
    ) -> Group: ...
    def append_message(
        self, group_id: str, sender_id: str, content: str
    ) -> tuple[Group, Message]: ...
    def toggle_like(self, group_id: str, message_id: str, user_id: str) -> LikeToggle: ...
