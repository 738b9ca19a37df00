# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
import time
from collections.abc import Callable
from datetime import timedelta

from authcore.domain.tokens.entities import Claims
from authcore.domain.users.repositories import TokenCodec


class TokenIssuer:
    def __init__(
        self,
        *,
        codec: TokenCodec,
        ttl: timedelta | None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._codec = codec
        self._ttl_seconds = int(ttl.total_seconds()) if ttl else None
        self._clock = clock or (lambda: int(time.time()))

    def issue(self, user_id: int) -> str:
        now = self._clock()
        expires_at = now + self._ttl_seconds if self._ttl_seconds else None
        claims = Claims(
            subject_id=user_id,
            issued_at=now,
            expires_at=expires_at,
            token_id=secrets.token_urlsafe(12),
        )
        return self._codec.encode(claims)
