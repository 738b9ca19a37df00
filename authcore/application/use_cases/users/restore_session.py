# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authcore.domain.tokens.exceptions import TokenError
from authcore.domain.users.entities import PublicUser
from authcore.domain.users.exceptions import InvalidTokenError, NoTokenError
from authcore.domain.users.repositories import CredentialStore, TokenCodec
from authcore.shared.logging import logger


class RestoreSessionUseCase:
    def __init__(self, *, users: CredentialStore, codec: TokenCodec) -> None:
        self._users = users
        self._codec = codec

    def execute(self, token: str | None) -> PublicUser:
        if not token:
            raise NoTokenError()

        try:
            claims = self._codec.decode(token)
        except TokenError as exc:
            logger.debug(f"auth.session: token rejected reason={exc.code}")
            raise InvalidTokenError() from exc

        user = self._users.find_by_id(claims.subject_id)
        if user is None:
            logger.info(f"auth.session: token for missing user_id={claims.subject_id}")
            raise InvalidTokenError()
        return user.public()
