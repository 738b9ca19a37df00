# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from authcore.domain.tokens.entities import Claims

from .entities import UserRecord


class CredentialStore(Protocol):
    def create(self, username: str, password_hash: str) -> UserRecord: ...
    def find_by_username(self, username: str) -> UserRecord | None: ...
    def find_by_id(self, user_id: int) -> UserRecord | None: ...
    def update_password_hash(self, user_id: int, password_hash: str) -> UserRecord | None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
    def needs_rehash(self, hashed: str) -> bool: ...


class TokenCodec(Protocol):
    def encode(self, claims: Claims) -> str: ...
    def decode(self, token: str) -> Claims: ...
