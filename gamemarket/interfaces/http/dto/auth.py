from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

USERNAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def _check_username(value: str) -> str:
    if not USERNAME_RE.match(value):
        raise PydanticCustomError(
            "username_invalid_chars",
            "Username may contain only ASCII letters, digits, '.', '_' and '-'",
            {"pattern": USERNAME_RE.pattern},
        )
    return value


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=256)  # No strength check on login

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return _check_username(value.strip())


class CreateUserDTO(BaseModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=8, max_length=256)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return _check_username(value.strip())


class LoginSuccessDTO(BaseModel):
    ok: bool = True
    redirect: str


class OkDTO(BaseModel):
    ok: bool = True
