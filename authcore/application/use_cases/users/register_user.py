# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authcore.application.services.password_policy import PasswordPolicy, validate_username
from authcore.application.services.token_issuer import TokenIssuer
from authcore.domain.users.entities import AuthResult
from authcore.domain.users.repositories import CredentialStore, PasswordHasher
from authcore.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: CredentialStore,
        tokens: TokenIssuer,
        password_hasher: PasswordHasher,
        policy: PasswordPolicy,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._policy = policy

    def execute(self, username: str, password: str) -> AuthResult:
        validate_username(username)
        self._policy.check(password)
        hashed = self._password_hasher.hash(password)
        # uniqueness is enforced by the store; a lost race raises DuplicateUsernameError
        persisted = self._users.create(username, hashed)
        token = self._tokens.issue(persisted.id)
        logger.info(f"auth.register: ok user_id={persisted.id}")
        return AuthResult(user=persisted.public(), token=token)
