# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .models import User
from .session import Base, Database, build_engine

__all__ = ["Base", "Database", "User", "build_engine"]
