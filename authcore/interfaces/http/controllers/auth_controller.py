# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Framework-neutral request handlers for the auth core.

Each handler takes the decoded request body (or header value) and returns a
``(payload, status)`` pair, so any web framework can mount them.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable, Mapping
from http import HTTPStatus
from typing import Any

from pydantic import ValidationError

from authcore.application.services.authentication import AuthenticationService
from authcore.interfaces.http.bearer import bearer_token
from authcore.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    SessionDTO,
    UserDTO,
)
from authcore.shared.errors.base import AppError
from authcore.shared.errors.validation import raise_validation_error
from authcore.shared.logging import clear_correlation_id, logger, set_correlation_id

Response = tuple[dict[str, Any], HTTPStatus]


def _handle(
    action: str,
    handler: Callable[[], Response],
    correlation_id: str | None = None,
) -> Response:
    set_correlation_id(correlation_id or secrets.token_urlsafe(8))
    try:
        return handler()
    except AppError as exc:
        logger.warning(f"Handled application error {exc.code} on {action}")
        return exc.to_dict(), exc.status
    except Exception:
        logger.exception(f"Unhandled error on {action}")
        return {"error": "internal_error"}, HTTPStatus.INTERNAL_SERVER_ERROR
    finally:
        clear_correlation_id()


class AuthController:
    def __init__(self, *, auth_service: AuthenticationService) -> None:
        self._auth = auth_service

    def register(
        self, body: Mapping[str, Any] | None, *, correlation_id: str | None = None
    ) -> Response:
        def _run() -> Response:
            try:
                dto = RegisterRequestDTO.model_validate(body or {})
            except ValidationError as exc:
                raise_validation_error(exc)

            result = self._auth.register(dto.username, dto.password)
            payload = AuthSuccessDTO(user=UserDTO.from_user(result.user), token=result.token)
            return payload.model_dump(), HTTPStatus.CREATED

        return _handle("auth.register", _run, correlation_id)

    def login(
        self, body: Mapping[str, Any] | None, *, correlation_id: str | None = None
    ) -> Response:
        def _run() -> Response:
            try:
                dto = LoginRequestDTO.model_validate(body or {})
            except ValidationError as exc:
                raise_validation_error(exc)

            result = self._auth.login(dto.username, dto.password)
            payload = AuthSuccessDTO(user=UserDTO.from_user(result.user), token=result.token)
            return payload.model_dump(), HTTPStatus.OK

        return _handle("auth.login", _run, correlation_id)

    def resume_session(
        self, authorization: str | None, *, correlation_id: str | None = None
    ) -> Response:
        def _run() -> Response:
            token = bearer_token(authorization)
            if token is None:
                return SessionDTO().model_dump(), HTTPStatus.OK
            user = self._auth.restore_session(token)
            return SessionDTO(user=UserDTO.from_user(user)).model_dump(), HTTPStatus.OK

        return _handle("auth.session", _run, correlation_id)
