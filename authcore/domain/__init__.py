# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .tokens.entities import Claims
from .users.entities import AuthResult, PublicUser, UserRecord

__all__ = [
    "AuthResult",
    "Claims",
    "PublicUser",
    "UserRecord",
]
