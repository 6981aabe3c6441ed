# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from groupchat.shared.config.settings import DatabaseConfig
from groupchat.shared.errors.base import InfrastructureError
from groupchat.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def _build_engine(config: DatabaseConfig) -> Engine:
    url = config.url
    kwargs: dict[str, Any] = {"echo": False, "pool_pre_ping": True}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(config.pool_timeout),
        }
        if _is_memory_sqlite(url):
            # A single shared connection keeps the in-memory schema alive.
            kwargs["poolclass"] = StaticPool
        else:
            kwargs.update(
                pool_size=config.pool_size,
                max_overflow=config.max_overflow,
                pool_timeout=config.pool_timeout,
            )
    else:
        kwargs.update(
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
        )

    engine = create_engine(url, **kwargs)

    if url.startswith("sqlite"):

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


class Database:
    """Engine and session factory built from an explicit config."""

    def __init__(self, config: DatabaseConfig) -> None:
        self.engine: Engine = _build_engine(config)
        self.session_factory = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False
        )

    def init_db(self) -> None:
        # Registers the mapped tables on Base.metadata.
        from groupchat.infrastructure.db import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ensured")

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def check(self) -> None:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise InfrastructureError(
                "database_unavailable",
                status=HTTPStatus.SERVICE_UNAVAILABLE,
                context={"reason": type(exc).__name__},
            ) from exc

    def dispose(self) -> None:
        self.engine.dispose()


__all__ = ["Base", "Database"]
