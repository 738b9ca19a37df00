# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class Claims:
    """Signed session payload. Timestamps are integer epoch seconds."""

    subject_id: int
    issued_at: int
    expires_at: int | None = None
    token_id: str | None = None

    def is_expired(self, now: int) -> bool:
        return self.expires_at is not None and now >= self.expires_at

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"sub": self.subject_id, "iat": self.issued_at}
        if self.expires_at is not None:
            payload["exp"] = self.expires_at
        if self.token_id is not None:
            payload["jti"] = self.token_id
        return payload
