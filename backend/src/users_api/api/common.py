"""Request lifecycle shared by the users API handlers.

Every handler goes through the same steps: log the inbound request,
run its action (parse, one provider call, build the result) and turn
whatever comes out into an API Gateway response. No error leaves
``run_request`` unformatted.
"""

from __future__ import annotations

import time
from functools import lru_cache
from typing import Any
from typing import Callable
from typing import Mapping

from users_api.config import load_settings
from users_api.exceptions import AppError
from users_api.exceptions import ConfigurationError
from users_api.services.cognito_users import CognitoUserService
from users_api.utils.logging import ContextLogger
from users_api.utils.logging import clear_request_context
from users_api.utils.logging import log_lambda_event
from users_api.utils.logging import log_response
from users_api.utils.logging import set_request_context
from users_api.utils.responses import fault_response

DEFAULT_ERROR_PREFIX = "An error occurred: "


@lru_cache(maxsize=1)
def default_identity_provider() -> CognitoUserService:
    """Return the container-wide Cognito service."""
    return CognitoUserService(region_name=load_settings().region)


def _request_id(event: Mapping[str, Any], context: Any) -> str:
    aws_request_id = getattr(context, "aws_request_id", None)
    if aws_request_id:
        return str(aws_request_id)
    return (event.get("requestContext") or {}).get("requestId", "")


def run_request(
    event: Mapping[str, Any],
    context: Any,
    action: Callable[[], dict[str, Any]],
    logger: ContextLogger,
    unexpected_prefix: str = DEFAULT_ERROR_PREFIX,
) -> dict[str, Any]:
    """Execute ``action`` and map any failure to an error response."""
    set_request_context(req_id=_request_id(event, context))
    start = time.perf_counter()
    log_lambda_event(logger, event)

    try:
        response = action()
    except ConfigurationError as exc:
        logger.error(
            f"{type(exc).__name__}: {exc.message}",
            extra={"fault": {"status_code": exc.status_code}},
        )
        response = fault_response(exc, unexpected_prefix)
    except AppError as exc:
        logger.warning(
            f"{type(exc).__name__}: {exc.message}",
            extra={"fault": {"status_code": exc.status_code}},
        )
        response = fault_response(exc, unexpected_prefix)
    except Exception as exc:
        logger.exception("Unexpected error handling request")
        response = fault_response(exc, unexpected_prefix)

    log_response(
        logger,
        response["statusCode"],
        duration_ms=(time.perf_counter() - start) * 1000,
    )
    clear_request_context()
    return response
