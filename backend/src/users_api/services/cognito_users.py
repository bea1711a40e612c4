"""Cognito user pool operations used by the users API.

``CognitoUserService`` wraps a ``cognito-idp`` boto3 client and turns
each provider response into a typed result. Every botocore failure is
re-raised as ``ProviderError`` carrying the provider's HTTP status and
message.
"""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional
from typing import Protocol

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from users_api.auth.secret_hash import compute_secret_hash
from users_api.exceptions import UnexpectedError
from users_api.exceptions import from_client_error
from users_api.models import AddUserToGroupResult
from users_api.models import ConfirmSignupResult
from users_api.models import GetUserResult
from users_api.models import LoginResult
from users_api.models import SignupResult
from users_api.services.aws_clients import get_cognito_idp_client
from users_api.utils.logging import get_logger
from users_api.utils.logging import mask_email

logger = get_logger(__name__)

USER_PASSWORD_AUTH = "USER_PASSWORD_AUTH"


class IdentityProvider(Protocol):
    """Operations the handlers need from the identity provider."""

    def sign_up(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        client_id: str,
        client_secret: str,
    ) -> SignupResult: ...

    def confirm_sign_up(
        self,
        client_id: str,
        client_secret: str,
        email: str,
        confirmation_code: str,
    ) -> ConfirmSignupResult: ...

    def authenticate(
        self,
        email: str,
        password: str,
        client_id: str,
        client_secret: str,
    ) -> LoginResult: ...

    def get_user(self, access_token: str) -> GetUserResult: ...

    def add_user_to_group(
        self,
        group_name: str,
        username: str,
        user_pool_id: str,
    ) -> AddUserToGroupResult: ...


def _http_outcome(response: Mapping[str, Any]) -> dict[str, Any]:
    """Extract success flag and status code from response metadata."""
    status_code = int(response.get("ResponseMetadata", {}).get("HTTPStatusCode", 200))
    return {
        "is_successful": 200 <= status_code < 300,
        "status_code": status_code,
    }


def attributes_to_profile(attributes: Optional[list[Mapping[str, Any]]]) -> dict[str, str]:
    """Build a name -> value mapping from Cognito ``AttributeType`` entries.

    Later entries win when a name is repeated.
    """
    profile: dict[str, str] = {}
    for attribute in attributes or []:
        name = attribute.get("Name")
        if name:
            profile[name] = attribute.get("Value", "")
    return profile


class CognitoUserService:
    """IdentityProvider backed by Amazon Cognito user pools.

    The boto3 client is safe to share between invocations, so one service
    instance is created per Lambda container.
    """

    def __init__(self, client: Any = None, region_name: Optional[str] = None):
        self._client = client or get_cognito_idp_client(region_name)

    def sign_up(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        client_id: str,
        client_secret: str,
    ) -> SignupResult:
        """Register a new user with email and display name attributes."""
        attributes = [
            {"Name": "email", "Value": email},
            {"Name": "name", "Value": f"{first_name} {last_name}"},
        ]
        try:
            response = self._client.sign_up(
                ClientId=client_id,
                SecretHash=compute_secret_hash(client_id, client_secret, email),
                Username=email,
                Password=password,
                UserAttributes=attributes,
            )
        except (BotoCoreError, ClientError) as exc:
            raise from_client_error(exc) from exc

        logger.info(f"Signed up user {mask_email(email)}")
        return SignupResult(
            **_http_outcome(response),
            cognito_user_id=response.get("UserSub", ""),
            is_confirmed=bool(response.get("UserConfirmed", False)),
        )

    def confirm_sign_up(
        self,
        client_id: str,
        client_secret: str,
        email: str,
        confirmation_code: str,
    ) -> ConfirmSignupResult:
        """Confirm a registration with the code the provider sent the user."""
        try:
            response = self._client.confirm_sign_up(
                ClientId=client_id,
                SecretHash=compute_secret_hash(client_id, client_secret, email),
                Username=email,
                ConfirmationCode=confirmation_code,
            )
        except (BotoCoreError, ClientError) as exc:
            raise from_client_error(exc) from exc

        logger.info(f"Confirmed user {mask_email(email)}")
        return ConfirmSignupResult(**_http_outcome(response))

    def authenticate(
        self,
        email: str,
        password: str,
        client_id: str,
        client_secret: str,
    ) -> LoginResult:
        """Run the USER_PASSWORD_AUTH flow and return the issued tokens.

        Raises:
            ProviderError: If Cognito rejects the credentials.
            UnexpectedError: If Cognito answers with a challenge instead
                of tokens.
        """
        auth_parameters = {
            "USERNAME": email,
            "PASSWORD": password,
            "SECRET_HASH": compute_secret_hash(client_id, client_secret, email),
        }
        try:
            response = self._client.initiate_auth(
                ClientId=client_id,
                AuthFlow=USER_PASSWORD_AUTH,
                AuthParameters=auth_parameters,
            )
        except (BotoCoreError, ClientError) as exc:
            raise from_client_error(exc) from exc

        tokens = response.get("AuthenticationResult")
        if not tokens:
            challenge = response.get("ChallengeName", "unknown")
            raise UnexpectedError(f"Authentication requires challenge {challenge}")

        return LoginResult(
            **_http_outcome(response),
            id_token=tokens.get("IdToken", ""),
            access_token=tokens.get("AccessToken", ""),
            refresh_token=tokens.get("RefreshToken", ""),
        )

    def get_user(self, access_token: str) -> GetUserResult:
        """Fetch the profile attributes of the user owning ``access_token``."""
        try:
            response = self._client.get_user(AccessToken=access_token)
        except (BotoCoreError, ClientError) as exc:
            raise from_client_error(exc) from exc

        return GetUserResult(
            **_http_outcome(response),
            user=attributes_to_profile(response.get("UserAttributes")),
        )

    def add_user_to_group(
        self,
        group_name: str,
        username: str,
        user_pool_id: str,
    ) -> AddUserToGroupResult:
        try:
            response = self._client.admin_add_user_to_group(
                GroupName=group_name,
                Username=username,
                UserPoolId=user_pool_id,
            )
        except (BotoCoreError, ClientError) as exc:
            raise from_client_error(exc) from exc

        logger.info(f"Added user {mask_email(username)} to group {group_name}")
        return AddUserToGroupResult(**_http_outcome(response))
