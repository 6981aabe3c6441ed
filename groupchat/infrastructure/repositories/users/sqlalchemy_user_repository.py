# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterable

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from groupchat.domain.users.entities import User as DomainUser
from groupchat.domain.users.exceptions import UsernameTakenError, UserNotFoundError
from groupchat.domain.users.repositories import UserRepository
from groupchat.infrastructure.db.models import User
from groupchat.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        is_admin=bool(row.is_admin),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(User).filter(User.username == username).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def missing_ids(self, user_ids: Iterable[str]) -> list[str]:
        wanted = list(dict.fromkeys(user_ids))
        if not wanted:
            return []
        with unit_of_work_scope(self._session_factory) as session:
            found = set(session.scalars(select(User.id).where(User.id.in_(wanted))))
        return [user_id for user_id in wanted if user_id not in found]

    def add(self, username: str, password_hash: str, is_admin: bool) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(username=username, password_hash=password_hash, is_admin=is_admin)
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            raise UsernameTakenError(context={"username": username}) from exc

    def update(
        self,
        user_id: str,
        *,
        username: str | None = None,
        password_hash: str | None = None,
        is_admin: bool | None = None,
    ) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                if row is None:
                    raise UserNotFoundError(context={"user_id": user_id})
                if username is not None:
                    row.username = username
                if password_hash is not None:
                    row.password_hash = password_hash
                if is_admin is not None:
                    row.is_admin = is_admin
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            raise UsernameTakenError(context={"username": username}) from exc

    def count(self) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            return int(session.scalar(select(func.count()).select_from(User)) or 0)
