from __future__ import annotations

import base64
from datetime import timedelta

import pytest
from conftest import (
    DeterministicHasher,
    FakeClock,
    InMemoryCredentialStore,
    build_service,
)

from authcore.application.services.authentication import AuthenticationService
from authcore.application.services.token_codec import HmacTokenCodec
from authcore.domain.users.entities import PublicUser
from authcore.domain.users.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidTokenError,
    NoTokenError,
    WeakPasswordError,
)
from authcore.shared.errors.base import ValidationError


def test_register_user_success(
    service: AuthenticationService, store: InMemoryCredentialStore
) -> None:
    result = service.register("alice", "secret123")

    assert result.user == PublicUser(id=1, username="alice")
    assert result.token.count(".") == 2
    stored = store.find_by_username("alice")
    assert stored is not None
    assert stored.password_hash != "secret123"


def test_register_returns_public_projection_only(service: AuthenticationService) -> None:
    result = service.register("alice", "secret123")

    assert not hasattr(result.user, "password_hash")


def test_register_user_duplicate_raises(service: AuthenticationService) -> None:
    service.register("alice", "secret123")

    with pytest.raises(DuplicateUsernameError):
        service.register("alice", "other-password")


def test_usernames_are_case_sensitive(service: AuthenticationService) -> None:
    first = service.register("alice", "secret123")
    second = service.register("Alice", "secret123")

    assert first.user.id != second.user.id


@pytest.mark.parametrize("username", ["", "  alice", "bob ", "x" * 65])
def test_register_rejects_invalid_username(
    service: AuthenticationService, username: str
) -> None:
    with pytest.raises(ValidationError):
        service.register(username, "secret123")


def test_register_rejects_empty_password(service: AuthenticationService) -> None:
    with pytest.raises(ValidationError):
        service.register("alice", "")


def test_register_rejects_weak_password(
    store: InMemoryCredentialStore,
    hasher: DeterministicHasher,
    codec: HmacTokenCodec,
    clock: FakeClock,
) -> None:
    service = build_service(store, hasher, codec, clock, min_length=8)

    with pytest.raises(WeakPasswordError):
        service.register("alice", "short")
    assert store.find_by_username("alice") is None


def test_login_user_success(service: AuthenticationService) -> None:
    registered = service.register("alice", "secret123")

    result = service.login("alice", "secret123")

    assert result.user == registered.user
    assert result.token != registered.token


def test_login_user_invalid_credentials(service: AuthenticationService) -> None:
    service.register("alice", "secret123")

    with pytest.raises(InvalidCredentialsError):
        service.login("alice", "wrong")


def test_login_does_not_distinguish_unknown_user(
    service: AuthenticationService, hasher: DeterministicHasher
) -> None:
    service.register("alice", "secret123")

    with pytest.raises(InvalidCredentialsError) as unknown:
        service.login("unknown_user", "x")
    calls_after_unknown = hasher.verify_calls
    with pytest.raises(InvalidCredentialsError) as wrong:
        service.login("alice", "wrong_password")

    assert type(unknown.value) is type(wrong.value)
    assert unknown.value.to_dict() == wrong.value.to_dict()
    # both paths run exactly one verify
    assert calls_after_unknown == 1
    assert hasher.verify_calls == 2


def test_login_upgrades_outdated_hash(
    store: InMemoryCredentialStore, codec: HmacTokenCodec, clock: FakeClock
) -> None:
    old = build_service(store, DeterministicHasher("v1"), codec, clock)
    old.register("alice", "secret123")

    new = build_service(store, DeterministicHasher("v2"), codec, clock)
    new.login("alice", "secret123")

    stored = store.find_by_username("alice")
    assert stored is not None
    assert stored.password_hash.startswith("v2:")


def test_restore_session_resolves_user(service: AuthenticationService) -> None:
    registered = service.register("user1", "123")

    user = service.restore_session(registered.token)

    assert user.id == registered.user.id
    assert user.username == "user1"


@pytest.mark.parametrize("token", [None, ""])
def test_restore_session_without_token(service: AuthenticationService, token: str | None) -> None:
    with pytest.raises(NoTokenError):
        service.restore_session(token)


def test_restore_session_with_garbage(service: AuthenticationService) -> None:
    with pytest.raises(InvalidTokenError):
        service.restore_session("garbage.token.value")


@pytest.mark.parametrize(
    "header",
    [
        b'{"alg":' + b"1" * 5000 + b"}",
        b"[" * 3000 + b"]" * 3000,
        b"[" * 100_000 + b"]" * 100_000,
    ],
    ids=["huge-integer", "nested", "nested-oversized"],
)
def test_restore_session_with_hostile_header(
    service: AuthenticationService, header: bytes
) -> None:
    segment = base64.urlsafe_b64encode(header).rstrip(b"=").decode()

    with pytest.raises(InvalidTokenError):
        service.restore_session(f"{segment}.e30.c2ln")


def test_restore_session_for_deleted_user(
    service: AuthenticationService, store: InMemoryCredentialStore
) -> None:
    registered = service.register("alice", "secret123")
    store.delete("alice")

    with pytest.raises(InvalidTokenError):
        service.restore_session(registered.token)


def test_restore_session_after_expiry(
    service: AuthenticationService, clock: FakeClock
) -> None:
    registered = service.register("alice", "secret123")
    clock.advance(int(timedelta(hours=1).total_seconds()))

    with pytest.raises(InvalidTokenError):
        service.restore_session(registered.token)


def test_tokens_without_ttl_do_not_expire(
    store: InMemoryCredentialStore,
    hasher: DeterministicHasher,
    codec: HmacTokenCodec,
    clock: FakeClock,
) -> None:
    service = build_service(store, hasher, codec, clock, ttl=None)
    registered = service.register("alice", "secret123")
    clock.advance(10 * 365 * 24 * 3600)

    assert service.restore_session(registered.token).username == "alice"


def test_token_signed_with_other_secret_is_rejected(
    service: AuthenticationService,
    store: InMemoryCredentialStore,
    hasher: DeterministicHasher,
    clock: FakeClock,
) -> None:
    service.register("alice", "secret123")
    other_codec = HmacTokenCodec(secret="another-secret", clock=clock)
    foreign = build_service(store, hasher, other_codec, clock).login("alice", "secret123")

    with pytest.raises(InvalidTokenError):
        service.restore_session(foreign.token)


def test_signup_login_scenario(service: AuthenticationService) -> None:
    registered = service.register("user1", "123")
    assert service.restore_session(registered.token).id == registered.user.id

    with pytest.raises(InvalidCredentialsError):
        service.login("user1", "wrong")

    logged_in = service.login("user1", "123")
    assert logged_in.token != registered.token
    assert service.restore_session(logged_in.token).id == registered.user.id

    with pytest.raises(NoTokenError):
        service.restore_session(None)
    with pytest.raises(InvalidTokenError):
        service.restore_session("garbage.token.value")
