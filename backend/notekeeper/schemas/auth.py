"""Authentication-related schemas."""
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from .response import OKResponse

# Passwords are taken verbatim; only the username is trimmed.
Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]


class RegisterRequest(BaseModel):
    username: Username
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    username: Username
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(OKResponse):
    token: str
