"""Shared response utilities for Lambda handlers."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any
from typing import Optional

from pydantic import BaseModel

from users_api.exceptions import AppError
from users_api.exceptions import ConfigurationError
from users_api.exceptions import ProviderError

CONFIGURATION_ERROR_MESSAGE = "Service is not configured correctly"


def json_response(
    status_code: int,
    body: Any,
    headers: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    """Create a JSON API Gateway proxy response.

    Args:
        status_code: HTTP status code.
        body: Response body (dict, Pydantic model, or dataclass).
        headers: Optional additional headers to include.

    Returns:
        API Gateway response dictionary.
    """
    response_headers = {
        "Content-Type": "application/json",
    }
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": json.dumps(_serialize_body(body), default=str),
    }


def _serialize_body(body: Any) -> Any:
    """Serialize response body to a JSON-compatible value.

    Pydantic models are dumped by alias so the wire format keeps the
    camelCase field names clients expect.
    """
    if isinstance(body, BaseModel):
        return body.model_dump(by_alias=True)

    if hasattr(body, "__dataclass_fields__"):
        return asdict(body)

    return body


def error_response(status_code: int, message: str) -> dict[str, Any]:
    """Create an error response with the uniform ``{"message": ...}`` body."""
    return json_response(status_code, {"message": message})


def fault_response(exc: Exception, unexpected_prefix: str) -> dict[str, Any]:
    """Map a failure to an error response.

    Provider faults keep the provider's status code and message. A
    configuration fault is reported as a generic 500 so internal setting
    names never reach the caller. Every other failure is a 500 whose
    message is prefixed by ``unexpected_prefix``.
    """
    if isinstance(exc, ProviderError):
        return json_response(exc.status_code, exc.to_dict())

    if isinstance(exc, ConfigurationError):
        return error_response(500, f"{unexpected_prefix}{CONFIGURATION_ERROR_MESSAGE}")

    if isinstance(exc, AppError):
        return error_response(exc.status_code, f"{unexpected_prefix}{exc.message}")

    message = str(exc) or type(exc).__name__
    return error_response(500, f"{unexpected_prefix}{message}")
