# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from authcore.application.services.token_issuer import TokenIssuer
from authcore.domain.users.entities import AuthResult
from authcore.domain.users.exceptions import InvalidCredentialsError
from authcore.domain.users.repositories import CredentialStore, PasswordHasher
from authcore.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: CredentialStore,
        tokens: TokenIssuer,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._dummy_hash: str | None = None

    def _decoy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash(secrets.token_urlsafe(16))
        return self._dummy_hash

    def execute(self, username: str, password: str) -> AuthResult:
        user = self._users.find_by_username(username) if username else None

        if user is None:
            # unknown users pay the same verify cost as known ones
            self._password_hasher.verify(password or "", self._decoy_hash())
            logger.info("auth.login: rejected")
            raise InvalidCredentialsError()

        if not password or not self._password_hasher.verify(password, user.password_hash):
            logger.info("auth.login: rejected")
            raise InvalidCredentialsError()

        if self._password_hasher.needs_rehash(user.password_hash):
            self._users.update_password_hash(user.id, self._password_hasher.hash(password))
            logger.info(f"auth.login: upgraded password hash user_id={user.id}")

        token = self._tokens.issue(user.id)
        logger.info(f"auth.login: ok user_id={user.id}")
        return AuthResult(user=user.public(), token=token)
