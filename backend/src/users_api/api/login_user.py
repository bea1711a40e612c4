"""Login API handler.

Route handled:
    POST /login - Exchange email and password for Cognito tokens
"""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional

from users_api.api.common import default_identity_provider
from users_api.api.common import run_request
from users_api.api.schemas import LoginRequest
from users_api.config import ClientCredential
from users_api.config import load_client_credential
from users_api.services.cognito_users import IdentityProvider
from users_api.utils import json_response
from users_api.utils import parse_json_body
from users_api.utils import parse_model
from users_api.utils.logging import configure_logging
from users_api.utils.logging import get_logger

configure_logging()
logger = get_logger(__name__)


def login_user(
    event: Mapping[str, Any],
    provider: IdentityProvider,
    credential: ClientCredential,
) -> dict[str, Any]:
    """Authenticate the user and return the issued tokens verbatim."""
    request = parse_model(parse_json_body(event), LoginRequest)
    result = provider.authenticate(
        request.email,
        request.password,
        credential.app_client_id,
        credential.app_client_secret,
    )
    return json_response(200, result)


def lambda_handler(
    event: Mapping[str, Any],
    context: Any,
    provider: Optional[IdentityProvider] = None,
    credential: Optional[ClientCredential] = None,
) -> dict[str, Any]:
    def action() -> dict[str, Any]:
        return login_user(
            event,
            provider or default_identity_provider(),
            credential or load_client_credential(),
        )

    return run_request(event, context, action, logger)
