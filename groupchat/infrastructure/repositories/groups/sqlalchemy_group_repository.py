# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from groupchat.domain.groups.entities import Group as DomainGroup
from groupchat.domain.groups.entities import LikeToggle
from groupchat.domain.groups.entities import Message as DomainMessage
from groupchat.domain.groups.exceptions import (
    GroupNameTakenError,
    GroupNotFoundError,
    MessageNotFoundError,
)
from groupchat.domain.groups.repositories import GroupRepository
from groupchat.infrastructure.db.models import Group, GroupMember, Message, MessageLike
from groupchat.infrastructure.unit_of_work import unit_of_work_scope
from groupchat.shared.errors.base import PermissionDeniedError


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on read.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain_message(row: Message) -> DomainMessage:
    return DomainMessage(
        id=row.id,
        content=row.content,
        sender=row.sender_id,
        created_at=_aware(row.created_at),
        likes=[like.user_id for like in row.likes],
    )


def _to_domain(row: Group) -> DomainGroup:
    return DomainGroup(
        id=row.id,
        name=row.name,
        members=[member.user_id for member in row.members],
        messages=[_to_domain_message(message) for message in row.messages],
    )


def _with_children(stmt):
    return stmt.options(
        selectinload(Group.members),
        selectinload(Group.messages).selectinload(Message.likes),
    )


class SqlAlchemyGroupRepository(GroupRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    @staticmethod
    def _load(session: Session, group_id: str, *, lock: bool = False) -> Group:
        stmt = _with_children(select(Group).where(Group.id == group_id))
        if lock:
            # Serialises concurrent writers on the same group where supported.
            stmt = stmt.with_for_update(of=Group)
        row = session.scalars(stmt).first()
        if row is None:
            raise GroupNotFoundError(context={"group_id": group_id})
        return row

    def find_by_id(self, group_id: str) -> DomainGroup | None:
        with unit_of_work_scope(self._session_factory) as session:
            stmt = _with_children(select(Group).where(Group.id == group_id))
            row = session.scalars(stmt).first()
            return _to_domain(row) if row else None

    def find_by_name(self, name: str) -> DomainGroup | None:
        with unit_of_work_scope(self._session_factory) as session:
            stmt = _with_children(select(Group).where(Group.name == name))
            row = session.scalars(stmt).first()
            return _to_domain(row) if row else None

    def search_by_name_substring(
        self, fragment: str, *, case_insensitive: bool = True
    ) -> Sequence[DomainGroup]:
        if case_insensitive:
            criterion = Group.name.icontains(fragment, autoescape=True)
        else:
            criterion = Group.name.contains(fragment, autoescape=True)
        stmt = _with_children(
            select(Group).where(criterion).order_by(Group.created_at.asc(), Group.id.asc())
        )
        with unit_of_work_scope(self._session_factory) as session:
            return [_to_domain(row) for row in session.scalars(stmt).all()]

    def create(self, name: str, owner_id: str) -> DomainGroup:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                taken = session.scalar(select(Group.id).where(Group.name == name))
                if taken is not None:
                    raise GroupNameTakenError(context={"name": name})
                row = Group(name=name)
                row.members.append(GroupMember(user_id=owner_id, position=0))
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            if self.find_by_name(name) is None:
                raise
            raise GroupNameTakenError(context={"name": name}) from exc

    def delete(self, group_id: str, requester_id: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            row = self._load(session, group_id, lock=True)
            if not _to_domain(row).is_owner(requester_id):
                raise PermissionDeniedError()
            session.delete(row)

    def add_members(
        self, group_id: str, requester_id: str, new_member_ids: Sequence[str]
    ) -> DomainGroup:
        with unit_of_work_scope(self._session_factory) as session:
            row = self._load(session, group_id, lock=True)
            group = _to_domain(row)
            if not group.is_member(requester_id):
                raise PermissionDeniedError()

            start = len(group.members)
            appended = group.merge_members(new_member_ids)
            for offset, user_id in enumerate(appended):
                row.members.append(GroupMember(user_id=user_id, position=start + offset))
            session.flush()
            return group

    def append_message(
        self, group_id: str, sender_id: str, content: str
    ) -> tuple[DomainGroup, DomainMessage]:
        with unit_of_work_scope(self._session_factory) as session:
            row = self._load(session, group_id, lock=True)
            group = _to_domain(row)
            if not group.is_member(sender_id):
                raise PermissionDeniedError()

            message_row = Message(
                sender_id=sender_id,
                content=content,
                position=len(row.messages),
            )
            row.messages.append(message_row)
            session.flush()

            message = _to_domain_message(message_row)
            group.messages.append(message)
            return group, message

    def toggle_like(self, group_id: str, message_id: str, user_id: str) -> LikeToggle:
        with unit_of_work_scope(self._session_factory) as session:
            row = self._load(session, group_id, lock=True)
            group = _to_domain(row)
            message = group.find_message(message_id)
            if message is None:
                raise MessageNotFoundError(
                    context={"group_id": group_id, "message_id": message_id}
                )
            message_row = next(m for m in row.messages if m.id == message_id)

            liked = message.toggle_like(user_id)
            if liked:
                message_row.likes.append(MessageLike(user_id=user_id))
            else:
                for like in [like for like in message_row.likes if like.user_id == user_id]:
                    message_row.likes.remove(like)
            session.flush()
            return LikeToggle(liked=liked, message=message, group=group)
