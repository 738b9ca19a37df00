"""Application dependency container."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from functools import cached_property

from authcore.application.services.authentication import AuthenticationService
from authcore.application.services.password_hashing import (
    BoundedPasswordHasher,
    WerkzeugPasswordHasher,
)
from authcore.application.services.password_policy import PasswordPolicy
from authcore.application.services.token_codec import HmacTokenCodec
from authcore.application.services.token_issuer import TokenIssuer
from authcore.application.use_cases.users.login_user import LoginUserUseCase
from authcore.application.use_cases.users.register_user import RegisterUserUseCase
from authcore.application.use_cases.users.restore_session import RestoreSessionUseCase
from authcore.domain.users.repositories import CredentialStore, PasswordHasher
from authcore.infrastructure.db import Database
from authcore.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyCredentialStore,
)
from authcore.interfaces.http.controllers.auth_controller import AuthController
from authcore.shared.config import AppConfig, load_config
from authcore.shared.logging import setup_logging


class Container:
    def __init__(self, config: AppConfig, *, clock: Callable[[], int] | None = None) -> None:
        self._config = config
        self._clock = clock

    @property
    def config(self) -> AppConfig:
        return self._config

    @cached_property
    def database(self) -> Database:
        database = Database(self._config.database)
        database.init_db()
        return database

    @cached_property
    def credential_store(self) -> CredentialStore:
        return SqlAlchemyCredentialStore(self.database)

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        auth = self._config.auth
        hasher = WerkzeugPasswordHasher(auth.hash_method, auth.hash_cost_factor)
        if auth.max_concurrent_hashes:
            return BoundedPasswordHasher(hasher, auth.max_concurrent_hashes)
        return hasher

    @cached_property
    def token_codec(self) -> HmacTokenCodec:
        auth = self._config.auth
        return HmacTokenCodec(
            secret=auth.signing_secret.get_secret_value(),
            algorithm=auth.signing_algorithm,
            clock=self._clock,
        )

    @cached_property
    def token_issuer(self) -> TokenIssuer:
        ttl_seconds = self._config.auth.token_ttl_seconds
        return TokenIssuer(
            codec=self.token_codec,
            ttl=timedelta(seconds=ttl_seconds) if ttl_seconds else None,
            clock=self._clock,
        )

    @cached_property
    def password_policy(self) -> PasswordPolicy:
        return PasswordPolicy(min_length=self._config.auth.password_min_length)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.credential_store,
            tokens=self.token_issuer,
            password_hasher=self.password_hasher,
            policy=self.password_policy,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.credential_store,
            tokens=self.token_issuer,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def restore_session_use_case(self) -> RestoreSessionUseCase:
        return RestoreSessionUseCase(users=self.credential_store, codec=self.token_codec)

    @cached_property
    def auth_service(self) -> AuthenticationService:
        return AuthenticationService(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            restore_session_use_case=self.restore_session_use_case,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(auth_service=self.auth_service)


def build_container(config: AppConfig | None = None) -> Container:
    config = config or load_config()
    setup_logging(debug_mode=config.debug_logging)
    return Container(config)
