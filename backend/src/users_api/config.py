"""Process-wide configuration for the users API Lambdas.

The app client credential is resolved once per container and reused by
every invocation. Handlers receive it as an argument so tests can pass
one in directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from dataclasses import field
from functools import lru_cache
from typing import Optional

from users_api.exceptions import ConfigurationError
from users_api.services.secrets import decrypt_env_value
from users_api.services.secrets import get_secret_json

CLIENT_ID_ENV = "MY_COGNITO_POOL_APP_CLIENT_ID"
CLIENT_SECRET_ENV = "MY_COGNITO_POOL_APP_CLIENT_SECRET"
CREDENTIAL_SECRET_ARN_ENV = "COGNITO_APP_CLIENT_SECRET_ARN"
USER_POOL_ID_ENV = "MY_COGNITO_USER_POOL_ID"


@dataclass(frozen=True)
class ClientCredential:
    """Cognito app client id and secret."""

    app_client_id: str
    app_client_secret: str = field(repr=False)


@dataclass(frozen=True)
class Settings:
    region: Optional[str]
    user_pool_id: Optional[str]

    def require_user_pool_id(self) -> str:
        if not self.user_pool_id:
            raise ConfigurationError(USER_POOL_ID_ENV)
        return self.user_pool_id


def load_settings() -> Settings:
    return Settings(
        region=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or None,
        user_pool_id=os.getenv(USER_POOL_ID_ENV, "").strip() or None,
    )


@lru_cache(maxsize=1)
def load_client_credential() -> ClientCredential:
    """Resolve the app client credential.

    A Secrets Manager secret named by COGNITO_APP_CLIENT_SECRET_ARN takes
    precedence. Otherwise the id and secret are read from KMS-encrypted
    environment variables.

    Raises:
        ConfigurationError: If neither source yields both values.
    """
    region = load_settings().region
    secret_arn = os.getenv(CREDENTIAL_SECRET_ARN_ENV, "").strip()
    if secret_arn:
        payload = get_secret_json(secret_arn, region_name=region)
        client_id = payload.get("app_client_id")
        client_secret = payload.get("app_client_secret")
        if not client_id or not client_secret:
            raise ConfigurationError(
                secret_arn, detail="app_client_id and app_client_secret required"
            )
        return ClientCredential(str(client_id), str(client_secret))

    return ClientCredential(
        app_client_id=decrypt_env_value(CLIENT_ID_ENV, region_name=region),
        app_client_secret=decrypt_env_value(CLIENT_SECRET_ENV, region_name=region),
    )


def clear_config_cache() -> None:
    """Forget the resolved credential (useful in tests)."""
    load_client_credential.cache_clear()
