# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from authcore.domain.users.entities import UserRecord
from authcore.domain.users.exceptions import DuplicateUsernameError
from authcore.domain.users.repositories import CredentialStore
from authcore.infrastructure.db.models import User
from authcore.infrastructure.db.session import Database
from authcore.shared.logging import logger


def _to_domain(row: User) -> UserRecord:
    created_at = row.created_at
    # SQLite hands back naive datetimes
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return UserRecord(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        created_at=created_at,
    )


class SqlAlchemyCredentialStore(CredentialStore):
    def __init__(self, database: Database) -> None:
        self._db = database

    def create(self, username: str, password_hash: str) -> UserRecord:
        try:
            with self._db.session_scope() as session:
                row = User(
                    username=username,
                    password_hash=password_hash,
                    created_at=datetime.now(UTC),
                )
                session.add(row)
                session.flush()
                record = _to_domain(row)
        except IntegrityError as exc:
            logger.info("credentials.create: username already taken")
            raise DuplicateUsernameError() from exc
        return record

    def find_by_username(self, username: str) -> UserRecord | None:
        with self._db.session_scope() as session:
            row = session.scalars(select(User).where(User.username == username)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> UserRecord | None:
        with self._db.session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def update_password_hash(self, user_id: int, password_hash: str) -> UserRecord | None:
        with self._db.session_scope() as session:
            session.execute(
                update(User).where(User.id == user_id).values(password_hash=password_hash)
            )
            row = session.get(User, user_id)
            return _to_domain(row) if row else None
