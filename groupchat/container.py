# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from groupchat.application.services.password_hashing import WerkzeugPasswordHasher
from groupchat.application.use_cases.groups.add_members import AddMembersUseCase
from groupchat.application.use_cases.groups.create_group import CreateGroupUseCase
from groupchat.application.use_cases.groups.delete_group import DeleteGroupUseCase
from groupchat.application.use_cases.groups.like_message import LikeMessageUseCase
from groupchat.application.use_cases.groups.search_groups import SearchGroupsUseCase
from groupchat.application.use_cases.groups.send_message import SendMessageUseCase
from groupchat.application.use_cases.users.create_user import CreateUserUseCase
from groupchat.application.use_cases.users.edit_user import EditUserUseCase
from groupchat.application.use_cases.users.login_user import LoginUserUseCase
from groupchat.infrastructure.access_control import AccessControl
from groupchat.infrastructure.admin_setup import AdminSetup
from groupchat.infrastructure.auth.jwt_tokens import JwtTokenService
from groupchat.infrastructure.db import Database
from groupchat.infrastructure.repositories.groups.sqlalchemy_group_repository import \
    SqlAlchemyGroupRepository
from groupchat.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemyUserRepository
from groupchat.interfaces.http.controllers.admin_controller import AdminController
from groupchat.interfaces.http.controllers.auth_controller import AuthController
from groupchat.interfaces.http.controllers.groups_controller import GroupsController
from groupchat.interfaces.http.controllers.misc_controller import MiscController
from groupchat.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig, database: Database | None = None) -> None:
        self.config = config
        self._database = database

    @cached_property
    def database(self) -> Database:
        return self._database or Database(self.config.database)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            secret=self.config.auth.jwt_secret,
            expires_minutes=self.config.auth.jwt_expires_minutes,
        )

    @cached_property
    def access_control(self) -> AccessControl:
        return AccessControl(self.token_service, debug_mode=self.config.debug_logging)

    # Repositories

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database.session_factory)

    @cached_property
    def group_repository(self) -> SqlAlchemyGroupRepository:
        return SqlAlchemyGroupRepository(self.database.session_factory)

    @cached_property
    def admin_setup(self) -> AdminSetup:
        return AdminSetup(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            config=self.config.auth,
        )

    # User use cases

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def create_user_use_case(self) -> CreateUserUseCase:
        return CreateUserUseCase(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def edit_user_use_case(self) -> EditUserUseCase:
        return EditUserUseCase(users=self.user_repository, password_hasher=self.password_hasher)

    # Group use cases

    @cached_property
    def create_group_use_case(self) -> CreateGroupUseCase:
        return CreateGroupUseCase(groups=self.group_repository, users=self.user_repository)

    @cached_property
    def delete_group_use_case(self) -> DeleteGroupUseCase:
        return DeleteGroupUseCase(groups=self.group_repository)

    @cached_property
    def search_groups_use_case(self) -> SearchGroupsUseCase:
        return SearchGroupsUseCase(groups=self.group_repository)

    @cached_property
    def add_members_use_case(self) -> AddMembersUseCase:
        return AddMembersUseCase(groups=self.group_repository, users=self.user_repository)

    @cached_property
    def send_message_use_case(self) -> SendMessageUseCase:
        return SendMessageUseCase(groups=self.group_repository)

    @cached_property
    def like_message_use_case(self) -> LikeMessageUseCase:
        return LikeMessageUseCase(groups=self.group_repository, users=self.user_repository)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_user_use_case,
            access_control=self.access_control,
        )

    @cached_property
    def admin_controller(self) -> AdminController:
        return AdminController(
            create_user=self.create_user_use_case,
            edit_user=self.edit_user_use_case,
            access_control=self.access_control,
        )

    @cached_property
    def groups_controller(self) -> GroupsController:
        return GroupsController(
            create_group=self.create_group_use_case,
            delete_group=self.delete_group_use_case,
            search_groups=self.search_groups_use_case,
            add_members=self.add_members_use_case,
            send_message=self.send_message_use_case,
            like_message=self.like_message_use_case,
            access_control=self.access_control,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)
