"""Shared boto3 client factory with caching."""

from __future__ import annotations

from typing import Any

import boto3
import botocore.config

_CLIENT_CACHE: dict[tuple[str, str | None], Any] = {}

# One attempt per request; callers get the provider's answer or its fault.
_CLIENT_CONFIG = botocore.config.Config(
    connect_timeout=5,
    read_timeout=10,
    retries={"total_max_attempts": 1},
)


def get_client(service: str, region_name: str | None = None) -> Any:
    """Return a cached boto3 client for the given service."""
    cache_key = (service, region_name)
    if cache_key in _CLIENT_CACHE:
        return _CLIENT_CACHE[cache_key]
    client = boto3.client(  # type: ignore[call-overload]
        service,
        region_name=region_name,
        config=_CLIENT_CONFIG,
    )
    _CLIENT_CACHE[cache_key] = client
    return client


def clear_client_cache() -> None:
    """Clear cached boto3 clients (useful in tests)."""
    _CLIENT_CACHE.clear()


def get_cognito_idp_client(region_name: str | None = None) -> Any:
    return get_client("cognito-idp", region_name=region_name)


def get_kms_client(region_name: str | None = None) -> Any:
    return get_client("kms", region_name=region_name)


def get_secretsmanager_client(region_name: str | None = None) -> Any:
    return get_client("secretsmanager", region_name=region_name)
