# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Compact HMAC-signed session tokens.

A token is ``header.payload.signature``, each segment unpadded base64url.
The header names the algorithm, the payload carries the claims and the
signature is an HMAC over ``header.payload`` using the shared secret.

Verification pins the expected algorithm: a header that names any other
algorithm is rejected before the signature is even computed.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import re
import time
from collections.abc import Callable
from typing import Any

from authcore.domain.tokens.entities import Claims
from authcore.domain.tokens.exceptions import (
    AlgorithmMismatchError,
    MalformedTokenError,
    SignatureMismatchError,
    TokenEncodingError,
    TokenExpiredError,
)
from authcore.domain.users.repositories import TokenCodec

ALGORITHMS: dict[str, Callable[..., Any]] = {
    "HS256": hashlib.sha256,
    "HS384": hashlib.sha384,
    "HS512": hashlib.sha512,
}

_SEGMENT = re.compile(r"[A-Za-z0-9_-]+")

MAX_TOKEN_LENGTH = 8192


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(segment: str) -> bytes:
    if not _SEGMENT.fullmatch(segment):
        raise MalformedTokenError(context={"reason": "bad_segment"})
    padded = segment + "=" * (-len(segment) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError(context={"reason": "bad_segment"}) from exc


def _json_segment(obj: dict[str, Any]) -> str:
    raw = json.dumps(obj, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return _b64encode(raw)


def _load_object(segment: str) -> dict[str, Any]:
    try:
        obj = json.loads(_b64decode(segment))
    except (ValueError, RecursionError) as exc:
        raise MalformedTokenError(context={"reason": "bad_json"}) from exc
    if not isinstance(obj, dict):
        raise MalformedTokenError(context={"reason": "not_an_object"})
    return obj


def _sign(signing_input: bytes, secret: str, algorithm: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input, ALGORITHMS[algorithm]).digest()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _claims_from_payload(payload: dict[str, Any]) -> Claims:
    sub = payload.get("sub")
    iat = payload.get("iat")
    exp = payload.get("exp")
    jti = payload.get("jti")
    if not _is_int(sub) or not _is_int(iat):
        raise MalformedTokenError(context={"reason": "bad_claims"})
    if exp is not None and not _is_int(exp):
        raise MalformedTokenError(context={"reason": "bad_claims"})
    if jti is not None and not isinstance(jti, str):
        raise MalformedTokenError(context={"reason": "bad_claims"})
    return Claims(subject_id=sub, issued_at=iat, expires_at=exp, token_id=jti)


def encode(claims: Claims, secret: str, algorithm: str = "HS256") -> str:
    if not secret:
        raise TokenEncodingError("empty_secret")
    if algorithm not in ALGORITHMS:
        raise TokenEncodingError("unsupported_algorithm")
    try:
        header = _json_segment({"alg": algorithm, "typ": "JWT"})
        payload = _json_segment(claims.to_payload())
    except (TypeError, ValueError) as exc:
        raise TokenEncodingError("unserializable_claims") from exc
    signing_input = f"{header}.{payload}"
    signature = _sign(signing_input.encode("ascii"), secret, algorithm)
    return f"{signing_input}.{_b64encode(signature)}"


def decode(
    token: str,
    secret: str,
    algorithm: str = "HS256",
    *,
    now: int | None = None,
) -> Claims:
    if algorithm not in ALGORITHMS:
        raise TokenEncodingError("unsupported_algorithm")
    if not isinstance(token, str):
        raise MalformedTokenError(context={"reason": "bad_structure"})
    # checked before any decoding, the header is parsed ahead of the signature
    if len(token) > MAX_TOKEN_LENGTH:
        raise MalformedTokenError(context={"reason": "too_long"})
    if token.count(".") != 2:
        raise MalformedTokenError(context={"reason": "bad_structure"})

    segments = token.split(".")
    if not all(_SEGMENT.fullmatch(segment) for segment in segments):
        raise MalformedTokenError(context={"reason": "bad_segment"})
    header_segment, payload_segment, signature_segment = segments
    header = _load_object(header_segment)
    if header.get("alg") != algorithm:
        raise AlgorithmMismatchError()

    signature = _b64decode(signature_segment)
    expected = _sign(f"{header_segment}.{payload_segment}".encode("ascii"), secret, algorithm)
    if not hmac.compare_digest(signature, expected):
        raise SignatureMismatchError()

    claims = _claims_from_payload(_load_object(payload_segment))
    current = int(time.time()) if now is None else now
    if claims.is_expired(current):
        raise TokenExpiredError()
    return claims


class HmacTokenCodec(TokenCodec):
    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        clock: Callable[[], int] | None = None,
    ) -> None:
        if not secret:
            raise TokenEncodingError("empty_secret")
        if algorithm not in ALGORITHMS:
            raise TokenEncodingError("unsupported_algorithm")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock or (lambda: int(time.time()))

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def now(self) -> int:
        return self._clock()

    def encode(self, claims: Claims) -> str:
        return encode(claims, self._secret, self._algorithm)

    def decode(self, token: str) -> Claims:
        return decode(token, self._secret, self._algorithm, now=self._clock())

    def __repr__(self) -> str:
        return f"HmacTokenCodec(algorithm={self._algorithm!r})"
