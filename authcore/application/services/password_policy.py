# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from authcore.domain.users.exceptions import WeakPasswordError
from authcore.shared.errors.base import ValidationError

USERNAME_MAX_LENGTH = 64
PASSWORD_MAX_LENGTH = 128


def validate_username(username: str) -> str:
    """Usernames are case-sensitive and stored exactly as given."""
    if not isinstance(username, str) or not username:
        raise ValidationError(context={"fields": ["username"], "reason": "empty"})
    if username != username.strip():
        raise ValidationError(context={"fields": ["username"], "reason": "surrounding_whitespace"})
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(
            context={"fields": ["username"], "reason": "too_long", "max_length": USERNAME_MAX_LENGTH}
        )
    return username


@dataclass(slots=True, frozen=True)
class PasswordPolicy:
    min_length: int = 3
    max_length: int = PASSWORD_MAX_LENGTH

    def check(self, password: str) -> None:
        if not isinstance(password, str) or not password:
            raise ValidationError(context={"fields": ["password"], "reason": "empty"})
        if len(password) > self.max_length:
            raise ValidationError(
                context={"fields": ["password"], "reason": "too_long", "max_length": self.max_length}
            )
        if len(password) < self.min_length:
            raise WeakPasswordError(context={"min_length": self.min_length})
