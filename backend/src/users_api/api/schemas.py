"""Pydantic schemas for users API request bodies.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator

from users_api.models import CamelModel


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


# Values are forwarded untouched; passwords in particular are not stripped.
NonEmptyStr = Annotated[str, AfterValidator(_not_blank)]


class SignupRequest(CamelModel):
    email: NonEmptyStr
    password: NonEmptyStr
    first_name: NonEmptyStr
    last_name: NonEmptyStr


class LoginRequest(CamelModel):
    email: NonEmptyStr
    password: NonEmptyStr


class ConfirmSignupRequest(CamelModel):
    email: NonEmptyStr
    code: NonEmptyStr


class AddUserToGroupRequest(CamelModel):
    group: NonEmptyStr
