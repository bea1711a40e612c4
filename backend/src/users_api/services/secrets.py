"""Secret retrieval helpers with caching.

Two stores are supported: a JSON secret in AWS Secrets Manager, and
KMS-encrypted Lambda environment variables (encrypted with the function
name as encryption context, as the Lambda console helpers do).
"""

from __future__ import annotations

import base64
import binascii
import json
import os
from typing import Any

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from users_api.exceptions import ConfigurationError
from users_api.services.aws_clients import get_kms_client
from users_api.services.aws_clients import get_secretsmanager_client

_SECRET_CACHE: dict[str, dict[str, Any]] = {}
_DECRYPTED_CACHE: dict[str, str] = {}


def get_secret_json(secret_arn: str, region_name: str | None = None) -> dict[str, Any]:
    """Fetch a secret from AWS Secrets Manager and parse JSON."""
    if secret_arn in _SECRET_CACHE:
        return _SECRET_CACHE[secret_arn]

    client = get_secretsmanager_client(region_name)
    try:
        response = client.get_secret_value(SecretId=secret_arn)
    except (BotoCoreError, ClientError) as exc:
        raise ConfigurationError(secret_arn, detail=type(exc).__name__) from exc

    secret_str = response.get("SecretString")
    if not secret_str and response.get("SecretBinary"):
        secret_str = base64.b64decode(response["SecretBinary"]).decode("utf-8")
    if not secret_str:
        raise ConfigurationError(secret_arn, detail="secret value is empty")

    try:
        secret_payload = json.loads(secret_str)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(secret_arn, detail="secret is not JSON") from exc

    _SECRET_CACHE[secret_arn] = secret_payload
    return secret_payload


def decrypt_env_value(name: str, region_name: str | None = None) -> str:
    """Decrypt a base64, KMS-encrypted environment variable."""
    if name in _DECRYPTED_CACHE:
        return _DECRYPTED_CACHE[name]

    encrypted = os.getenv(name)
    if not encrypted:
        raise ConfigurationError(name)

    try:
        ciphertext = base64.b64decode(encrypted, validate=True)
    except binascii.Error as exc:
        raise ConfigurationError(name, detail="value is not base64") from exc

    client = get_kms_client(region_name)
    try:
        response = client.decrypt(
            CiphertextBlob=ciphertext,
            EncryptionContext={
                "LambdaFunctionName": os.getenv("AWS_LAMBDA_FUNCTION_NAME", ""),
            },
        )
    except (BotoCoreError, ClientError) as exc:
        raise ConfigurationError(name, detail=type(exc).__name__) from exc

    plaintext = response["Plaintext"].decode("utf-8")
    _DECRYPTED_CACHE[name] = plaintext
    return plaintext


def clear_secret_cache() -> None:
    """Clear cached secrets (useful in tests)."""
    _SECRET_CACHE.clear()
    _DECRYPTED_CACHE.clear()
