from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from threading import Lock

import pytest

from authcore.application.services.authentication import AuthenticationService
from authcore.application.services.password_policy import PasswordPolicy
from authcore.application.services.token_codec import HmacTokenCodec
from authcore.application.services.token_issuer import TokenIssuer
from authcore.application.use_cases.users.login_user import LoginUserUseCase
from authcore.application.use_cases.users.register_user import RegisterUserUseCase
from authcore.application.use_cases.users.restore_session import RestoreSessionUseCase
from authcore.domain.users.entities import UserRecord
from authcore.domain.users.exceptions import DuplicateUsernameError
from authcore.domain.users.repositories import CredentialStore, PasswordHasher

SECRET = "test-signing-secret"


class FakeClock:
    def __init__(self, now: int = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


class InMemoryCredentialStore(CredentialStore):
    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}
        self._seq = 1
        self._lock = Lock()

    def create(self, username: str, password_hash: str) -> UserRecord:
        with self._lock:
            if username in self._users:
                raise DuplicateUsernameError()
            user = UserRecord(
                id=self._seq,
                username=username,
                password_hash=password_hash,
                created_at=datetime.now(UTC),
            )
            self._seq += 1
            self._users[username] = user
            return user

    def find_by_username(self, username: str) -> UserRecord | None:
        return self._users.get(username)

    def find_by_id(self, user_id: int) -> UserRecord | None:
        for user in self._users.values():
            if user.id == user_id:
                return user
        return None

    def update_password_hash(self, user_id: int, password_hash: str) -> UserRecord | None:
        with self._lock:
            user = self.find_by_id(user_id)
            if user is None:
                return None
            updated = replace(user, password_hash=password_hash)
            self._users[user.username] = updated
            return updated

    def delete(self, username: str) -> None:
        self._users.pop(username, None)


class DeterministicHasher(PasswordHasher):
    def __init__(self, version: str = "v1") -> None:
        self.version = version
        self.verify_calls = 0

    def hash(self, password: str) -> str:
        return f"{self.version}:hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        _, _, rest = hashed.partition(":")
        return rest == f"hashed:{password}"

    def needs_rehash(self, hashed: str) -> bool:
        return not hashed.startswith(f"{self.version}:")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def codec(clock: FakeClock) -> HmacTokenCodec:
    return HmacTokenCodec(secret=SECRET, algorithm="HS256", clock=clock)


def build_service(
    store: CredentialStore,
    hasher: PasswordHasher,
    codec: HmacTokenCodec,
    clock: FakeClock,
    *,
    ttl: timedelta | None = timedelta(hours=1),
    min_length: int = 3,
) -> AuthenticationService:
    issuer = TokenIssuer(codec=codec, ttl=ttl, clock=clock)
    return AuthenticationService(
        register_use_case=RegisterUserUseCase(
            users=store,
            tokens=issuer,
            password_hasher=hasher,
            policy=PasswordPolicy(min_length=min_length),
        ),
        login_use_case=LoginUserUseCase(users=store, tokens=issuer, password_hasher=hasher),
        restore_session_use_case=RestoreSessionUseCase(users=store, codec=codec),
    )


@pytest.fixture()
def service(
    store: InMemoryCredentialStore,
    hasher: DeterministicHasher,
    codec: HmacTokenCodec,
    clock: FakeClock,
) -> AuthenticationService:
    return build_service(store, hasher, codec, clock)
