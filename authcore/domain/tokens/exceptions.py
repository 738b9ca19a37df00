# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authcore.shared.errors.base import DomainError, InfrastructureError


class TokenError(DomainError):
    code = "token_error"
    status = HTTPStatus.UNAUTHORIZED


class MalformedTokenError(TokenError):
    code = "malformed_token"


class SignatureMismatchError(TokenError):
    code = "signature_mismatch"


class AlgorithmMismatchError(SignatureMismatchError):
    code = "algorithm_mismatch"


class TokenExpiredError(TokenError):
    code = "token_expired"


class TokenEncodingError(InfrastructureError):
    def __init__(self, reason: str) -> None:
        super().__init__("token_encoding_error", context={"reason": reason})
