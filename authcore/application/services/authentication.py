# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Authentication service: the single entry point into the auth core."""

from __future__ import annotations

from authcore.application.use_cases.users.login_user import LoginUserUseCase
from authcore.application.use_cases.users.register_user import RegisterUserUseCase
from authcore.application.use_cases.users.restore_session import RestoreSessionUseCase
from authcore.domain.users.entities import AuthResult, PublicUser


class AuthenticationService:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        restore_session_use_case: RestoreSessionUseCase,
    ) -> None:
        self._register = register_use_case
        self._login = login_use_case
        self._restore_session = restore_session_use_case

    def register(self, username: str, password: str) -> AuthResult:
        """Create the account and log it in straight away.

        Raises ``ValidationError``, ``WeakPasswordError`` or
        ``DuplicateUsernameError``.
        """
        return self._register.execute(username, password)

    def login(self, username: str, password: str) -> AuthResult:
        """Raises ``InvalidCredentialsError`` for an unknown user and a wrong password alike."""
        return self._login.execute(username, password)

    def restore_session(self, token: str | None) -> PublicUser:
        """Raises ``NoTokenError`` when no token is given, ``InvalidTokenError`` otherwise."""
        return self._restore_session.execute(token)
