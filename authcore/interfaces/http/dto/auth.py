from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from authcore.application.services.password_policy import (
    PASSWORD_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
)
from authcore.domain.users.entities import PublicUser


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=USERNAME_MAX_LENGTH)
    password: str = Field(min_length=1, max_length=PASSWORD_MAX_LENGTH)

    model_config = ConfigDict(hide_input_in_errors=True)


class LoginRequestDTO(BaseModel):
    # no length rules: any bad pair must fail as invalid_credentials
    username: str
    password: str

    model_config = ConfigDict(hide_input_in_errors=True)


class UserDTO(BaseModel):
    id: int
    username: str

    @classmethod
    def from_user(cls, user: PublicUser) -> UserDTO:
        return cls(id=user.id, username=user.username)


class AuthSuccessDTO(BaseModel):
    user: UserDTO
    token: str


class SessionDTO(BaseModel):
    user: UserDTO | None = None
