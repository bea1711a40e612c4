"""User profile API handler.

Route handled:
    GET /users/me - Return the profile of the caller's access token

The token is read from the ``AccessToken`` header.
"""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional

from users_api.api.common import default_identity_provider
from users_api.api.common import run_request
from users_api.exceptions import ValidationError
from users_api.services.cognito_users import IdentityProvider
from users_api.utils import get_header
from users_api.utils import json_response
from users_api.utils.logging import configure_logging
from users_api.utils.logging import get_logger

configure_logging()
logger = get_logger(__name__)

ACCESS_TOKEN_HEADER = "AccessToken"


def get_user(event: Mapping[str, Any], provider: IdentityProvider) -> dict[str, Any]:
    access_token = (get_header(event, ACCESS_TOKEN_HEADER) or "").strip()
    if not access_token:
        raise ValidationError("Missing required header", fields=[ACCESS_TOKEN_HEADER])
    return json_response(200, provider.get_user(access_token))


def lambda_handler(
    event: Mapping[str, Any],
    context: Any,
    provider: Optional[IdentityProvider] = None,
) -> dict[str, Any]:
    def action() -> dict[str, Any]:
        return get_user(event, provider or default_identity_provider())

    return run_request(event, context, action, logger)
