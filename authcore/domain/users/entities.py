# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class PublicUser:
    """Outward projection of a user; the only shape that leaves the service."""

    id: int
    username: str


@dataclass(slots=True, frozen=True)
class UserRecord:

    id: int
    username: str
    password_hash: str
    created_at: datetime

    def public(self) -> PublicUser:
        return PublicUser(id=self.id, username=self.username)

    def __repr__(self) -> str:
        return f"UserRecord(id={self.id!r}, username={self.username!r})"


@dataclass(slots=True, frozen=True)
class AuthResult:

    user: PublicUser
    token: str
