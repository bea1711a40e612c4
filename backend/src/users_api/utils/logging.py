"""Structured logging utilities for Lambda functions.

This module provides JSON-formatted logging with request context,
suitable for CloudWatch Logs Insights queries.

SECURITY NOTES:
- Use mask_email() when logging email addresses
- Use redact_body() before logging a request payload
- Never log passwords, tokens, or the app client secret
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from contextvars import ContextVar
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Mapping
from typing import MutableMapping
from typing import Optional

REDACTED = "***"

# Payload keys whose values must never reach the logs
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "code",
        "confirmationCode",
        "idToken",
        "accessToken",
        "refreshToken",
    }
)


def mask_email(email: str) -> str:
    """Mask an email address for safe logging.

    Examples:
        >>> mask_email("john.doe@example.com")
        'jo***@***.com'
        >>> mask_email("a@b.co")
        'a***@***.co'
    """
    if not email or "@" not in email:
        return REDACTED

    local, domain = email.rsplit("@", 1)
    domain_parts = domain.rsplit(".", 1)

    visible_local = local[:2] if len(local) > 2 else local[:1]
    tld = domain_parts[-1] if len(domain_parts) > 1 else ""

    return f"{visible_local}***@***.{tld}" if tld else f"{visible_local}***@***"


def redact_body(raw_body: Optional[str]) -> str:
    """Return a loggable form of a raw request body.

    Sensitive values are replaced and the email is masked. Bodies that
    are not a JSON object are reduced to their length, since they cannot
    be inspected for secrets.
    """
    if not raw_body:
        return ""
    try:
        payload = json.loads(raw_body)
    except ValueError:
        return f"<unparseable body, {len(raw_body)} chars>"
    if not isinstance(payload, dict):
        return f"<non-object body, {len(raw_body)} chars>"

    redacted: dict[str, Any] = {}
    for key, value in payload.items():
        if key in SENSITIVE_KEYS:
            redacted[key] = REDACTED
        elif key == "email" and isinstance(value, str):
            redacted[key] = mask_email(value)
        else:
            redacted[key] = value
    return json.dumps(redacted, default=str)


request_id: ContextVar[str] = ContextVar("request_id", default="")


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter producing one CloudWatch-friendly object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        req_id = request_id.get()
        if req_id:
            log_data["request_id"] = req_id

        if record.levelno >= logging.WARNING:
            log_data["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        for key in ("event", "response", "fault"):
            value = getattr(record, key, None)
            if value is not None:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that merges adapter-level context into ``extra``."""

    def process(
        self,
        msg: str,
        kwargs: MutableMapping[str, Any],
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra = kwargs.get("extra", {})
        if self.extra:
            extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structured logging for Lambda execution.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to
               LOG_LEVEL environment variable or INFO.
    """
    log_level: str = level or os.getenv("LOG_LEVEL") or "INFO"

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredLogFormatter())
    root_logger.addHandler(handler)

    # Reduce noise from libraries
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str, **extra: Any) -> ContextLogger:
    """Get a context-aware logger (name is typically ``__name__``)."""
    return ContextLogger(logging.getLogger(name), extra)


def set_request_context(req_id: Optional[str] = None) -> None:
    """Attach the Lambda request id to every log line of this invocation."""
    if req_id:
        request_id.set(req_id)


def clear_request_context() -> None:
    request_id.set("")


def log_lambda_event(logger: ContextLogger, event: Mapping[str, Any]) -> None:
    """Log the inbound request with its body redacted."""
    log_data = {
        "http_method": event.get("httpMethod"),
        "path": event.get("path"),
        "body": redact_body(event.get("body")),
    }
    logger.info("Request received", extra={"event": log_data})


def log_response(
    logger: ContextLogger,
    status_code: int,
    duration_ms: Optional[float] = None,
) -> None:
    """Log the status of the response being returned."""
    log_data: dict[str, Any] = {"status_code": status_code}
    if duration_ms is not None:
        log_data["duration_ms"] = round(duration_ms, 2)

    level = logging.INFO if status_code < 400 else logging.WARNING
    logger.log(level, "Lambda response", extra={"response": log_data})
