# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from groupchat.domain.groups.repositories import GroupRepository
from groupchat.shared.logging import logger


class DeleteGroupUseCase:
    def __init__(self, *, groups: GroupRepository) -> None:
        self._groups = groups

    def execute(self, group_id: str, requester_id: str) -> None:
        self._groups.delete(group_id, requester_id)
        logger.info(f"groups.delete: group_id={group_id} by user={requester_id}")
