"""Pytest configuration and fixtures for users API tests.

This module provides shared fixtures: API Gateway events, a Lambda
context, a mocked identity provider and helpers to build botocore
errors the way the AWS SDK raises them.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from typing import Optional
from uuid import uuid4

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))


# --- Cache isolation ---


@pytest.fixture(autouse=True)
def _clear_caches():
    """Reset cached clients, secrets and credentials around each test."""
    from users_api.api.common import default_identity_provider
    from users_api.config import clear_config_cache
    from users_api.services.aws_clients import clear_client_cache
    from users_api.services.secrets import clear_secret_cache

    def clear() -> None:
        clear_client_cache()
        clear_secret_cache()
        clear_config_cache()
        default_identity_provider.cache_clear()

    clear()
    yield
    clear()


# --- API Event Fixtures ---


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    """Minimal Lambda context object."""
    return SimpleNamespace(
        aws_request_id=str(uuid4()),
        function_name='users-api-test',
    )


@pytest.fixture
def api_gateway_event() -> dict:
    """Base API Gateway proxy event structure."""
    return {
        'httpMethod': 'POST',
        'path': '/users',
        'queryStringParameters': None,
        'pathParameters': None,
        'headers': {'Content-Type': 'application/json'},
        'requestContext': {'requestId': str(uuid4())},
        'body': None,
        'isBase64Encoded': False,
    }


def make_event(base: dict, body: Any = None, **overrides: Any) -> dict:
    """Copy ``base`` with a body (dicts are JSON encoded) and overrides."""
    event = dict(base)
    if isinstance(body, dict):
        body = json.dumps(body)
    event['body'] = body
    event.update(overrides)
    return event


# --- Identity provider Fixtures ---


@pytest.fixture
def credential():
    from users_api.config import ClientCredential

    return ClientCredential(
        app_client_id='1example23456789',
        app_client_secret='exampleSecret',
    )


@pytest.fixture
def provider(mocker):
    """Autospecced identity provider; no AWS calls are made."""
    from users_api.services.cognito_users import CognitoUserService

    return mocker.create_autospec(CognitoUserService, instance=True)


@pytest.fixture
def cognito_client(mocker):
    """Mocked boto3 cognito-idp client."""
    return mocker.Mock(name='cognito-idp')


def client_error(
    code: str,
    message: str,
    status_code: Optional[int] = 400,
    operation: str = 'SignUp',
):
    """Build a botocore ClientError as raised by the AWS SDK."""
    from botocore.exceptions import ClientError

    response: dict[str, Any] = {'Error': {'Code': code, 'Message': message}}
    if status_code is not None:
        response['ResponseMetadata'] = {'HTTPStatusCode': status_code}
    return ClientError(response, operation)


def response_body(response: dict) -> dict:
    return json.loads(response['body'])
