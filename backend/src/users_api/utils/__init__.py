"""Utility modules for the users API."""

from users_api.utils.parsers import (
    get_header,
    get_path_parameter,
    parse_json_body,
    parse_model,
)
from users_api.utils.responses import error_response, fault_response, json_response
from users_api.utils.logging import (
    configure_logging,
    get_logger,
    mask_email,
    redact_body,
    set_request_context,
    clear_request_context,
)

__all__ = [
    "clear_request_context",
    "configure_logging",
    "error_response",
    "fault_response",
    "get_header",
    "get_logger",
    "get_path_parameter",
    "json_response",
    "mask_email",
    "parse_json_body",
    "parse_model",
    "redact_body",
    "set_request_context",
]
