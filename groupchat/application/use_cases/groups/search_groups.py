# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from groupchat.domain.groups.entities import Group
from groupchat.domain.groups.repositories import GroupRepository


class SearchGroupsUseCase:
    def __init__(self, *, groups: GroupRepository) -> None:
        self._groups = groups

    def execute(self, fragment: str) -> list[Group]:
        return list(self._groups.search_by_name_substring(fragment, case_insensitive=True))
