"""Group membership API handler.

Route handled:
    POST /users/{userName}/group - Add a user to a user pool group
"""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional

from users_api.api.common import default_identity_provider
from users_api.api.common import run_request
from users_api.api.schemas import AddUserToGroupRequest
from users_api.config import Settings
from users_api.config import load_settings
from users_api.exceptions import ValidationError
from users_api.services.cognito_users import IdentityProvider
from users_api.utils import get_path_parameter
from users_api.utils import json_response
from users_api.utils import parse_json_body
from users_api.utils import parse_model
from users_api.utils.logging import configure_logging
from users_api.utils.logging import get_logger

configure_logging()
logger = get_logger(__name__)


def add_user_to_group(
    event: Mapping[str, Any],
    provider: IdentityProvider,
    settings: Settings,
) -> dict[str, Any]:
    username = (get_path_parameter(event, "userName") or "").strip()
    if not username:
        raise ValidationError("Missing required path parameter", fields=["userName"])

    request = parse_model(parse_json_body(event), AddUserToGroupRequest)
    result = provider.add_user_to_group(
        request.group,
        username,
        settings.require_user_pool_id(),
    )
    return json_response(200, result)


def lambda_handler(
    event: Mapping[str, Any],
    context: Any,
    provider: Optional[IdentityProvider] = None,
    settings: Optional[Settings] = None,
) -> dict[str, Any]:
    def action() -> dict[str, Any]:
        return add_user_to_group(
            event,
            provider or default_identity_provider(),
            settings or load_settings(),
        )

    return run_request(event, context, action, logger)
