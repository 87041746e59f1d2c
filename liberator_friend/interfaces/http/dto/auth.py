from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username cannot be blank")
        return value


class LoginSuccessDTO(BaseModel):
    ok: bool = True
    username: str
    roles: list[str]
