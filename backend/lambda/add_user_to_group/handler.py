"""Lambda entrypoint for the user group membership endpoint."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from users_api.api.add_user_to_group import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    return _handler(event, context)
