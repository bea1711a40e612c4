"""Result models returned by the identity provider service.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model using camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ProviderResult(CamelModel):
    """Outcome of a provider call as reported by its HTTP response."""

    is_successful: bool
    status_code: int


class SignupResult(ProviderResult):
    cognito_user_id: str
    is_confirmed: bool


class LoginResult(ProviderResult):
    """Tokens issued on successful authentication, passed through unchanged."""

    id_token: str
    access_token: str
    refresh_token: str


class ConfirmSignupResult(ProviderResult):
    pass


class AddUserToGroupResult(ProviderResult):
    pass


class GetUserResult(ProviderResult):
    user: Dict[str, str]
