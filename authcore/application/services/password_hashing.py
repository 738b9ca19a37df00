"""Password hashing strategies."""

from __future__ import annotations

from threading import BoundedSemaphore

from werkzeug.security import check_password_hash, generate_password_hash

from authcore.domain.users.repositories import PasswordHasher

_SCRYPT_BLOCK_SIZE = 8
_SCRYPT_PARALLELISM = 1
# below 2**7 werkzeug's maxmem is smaller than what OpenSSL needs for r=8
SCRYPT_MIN_COST = 7
SCRYPT_MAX_COST = 20


def method_for(method: str, cost_factor: int) -> str:
    """Build the werkzeug method string, e.g. ``scrypt:32768:8:1``."""
    if method == "scrypt":
        if not SCRYPT_MIN_COST <= cost_factor <= SCRYPT_MAX_COST:
            raise ValueError(
                f"scrypt cost factor must be between {SCRYPT_MIN_COST} and {SCRYPT_MAX_COST}"
            )
        return f"scrypt:{2 ** cost_factor}:{_SCRYPT_BLOCK_SIZE}:{_SCRYPT_PARALLELISM}"
    if method == "pbkdf2":
        return f"pbkdf2:sha256:{cost_factor}"
    raise ValueError(f"Unsupported hash method: {method}")


class WerkzeugPasswordHasher(PasswordHasher):
    def __init__(self, method: str = "scrypt", cost_factor: int = 15) -> None:
        self._method = method_for(method, cost_factor)

    @property
    def method(self) -> str:
        return self._method

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self._method))

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed or "$" not in hashed:
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except ValueError:
            return False

    def needs_rehash(self, hashed: str) -> bool:
        method, _, _ = hashed.partition("$")
        return method != self._method


class BoundedPasswordHasher(PasswordHasher):
    """Caps how many hash/verify calls run at once; waiters block."""

    def __init__(self, inner: PasswordHasher, max_concurrent: int) -> None:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be >= 1")
        self._inner = inner
        self._slots = BoundedSemaphore(max_concurrent)

    def hash(self, password: str) -> str:
        with self._slots:
            return self._inner.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        with self._slots:
            return self._inner.verify(password, hashed)

    def needs_rehash(self, hashed: str) -> bool:
        return self._inner.needs_rehash(hashed)
