"""Shared parsing utilities for request handling."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any
from typing import Mapping
from typing import Optional
from typing import TypeVar

import pydantic
from pydantic import BaseModel

from users_api.exceptions import ValidationError

M = TypeVar("M", bound=BaseModel)


def parse_json_body(event: Mapping[str, Any]) -> dict[str, Any]:
    """Parse the JSON object carried in an API Gateway event body.

    Args:
        event: The Lambda event.

    Returns:
        The decoded JSON object.

    Raises:
        ValidationError: If the body is missing, not JSON, or not an object.
    """
    raw = event.get("body") or ""
    if raw and event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise ValidationError("Request body is not valid base64") from exc
    if not raw.strip():
        raise ValidationError("Request body is required")

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Request body is not valid JSON ({exc.msg})") from exc

    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def parse_model(payload: Mapping[str, Any], model: type[M]) -> M:
    """Validate a decoded payload against a request model.

    Raises:
        ValidationError: Naming every missing or invalid field.
    """
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        fields = []
        for error in exc.errors():
            name = ".".join(str(part) for part in error.get("loc", ())) or "body"
            if name not in fields:
                fields.append(name)
        raise ValidationError("Missing or invalid fields", fields=fields) from exc


def get_header(event: Mapping[str, Any], name: str) -> Optional[str]:
    """Return a request header, matched case-insensitively."""
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def get_path_parameter(event: Mapping[str, Any], name: str) -> Optional[str]:
    params = event.get("pathParameters") or {}
    return params.get(name)
