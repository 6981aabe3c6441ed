# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from groupchat.domain.groups.entities import Group, Message
from groupchat.domain.groups.repositories import GroupRepository


class SendMessageUseCase:
    def __init__(self, *, groups: GroupRepository) -> None:
        self._groups = groups

    def execute(self, group_id: str, sender_id: str, content: str) -> tuple[Group, Message]:
        return self._groups.append_message(group_id, sender_id, content)
