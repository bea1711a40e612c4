"""Tests for the confirm, get-user and add-to-group handlers."""

from __future__ import annotations

from conftest import make_event, response_body
from users_api.api import add_user_to_group
from users_api.api import confirm_user
from users_api.api import get_user
from users_api.config import Settings
from users_api.exceptions import ProviderError
from users_api.models import AddUserToGroupResult
from users_api.models import ConfirmSignupResult
from users_api.models import GetUserResult


class TestConfirmUser:
    def test_confirms_with_code(
        self, api_gateway_event, lambda_context, provider, credential
    ) -> None:
        provider.confirm_sign_up.return_value = ConfirmSignupResult(
            is_successful=True, status_code=200
        )
        event = make_event(
            api_gateway_event, {'email': 'alice@example.com', 'code': '123456'}
        )

        response = confirm_user.lambda_handler(
            event, lambda_context, provider=provider, credential=credential
        )

        assert response['statusCode'] == 200
        assert response_body(response) == {'isSuccessful': True, 'statusCode': 200}
        provider.confirm_sign_up.assert_called_once_with(
            '1example23456789', 'exampleSecret', 'alice@example.com', '123456'
        )

    def test_expired_code_keeps_provider_status(
        self, api_gateway_event, lambda_context, provider, credential
    ) -> None:
        provider.confirm_sign_up.side_effect = ProviderError(
            'Invalid code provided, please request a code again.',
            status_code=400,
            error_code='ExpiredCodeException',
        )
        event = make_event(
            api_gateway_event, {'email': 'alice@example.com', 'code': '000000'}
        )

        response = confirm_user.lambda_handler(
            event, lambda_context, provider=provider, credential=credential
        )

        assert response['statusCode'] == 400
        assert 'code' in response_body(response)['message']

    def test_missing_code_is_rejected(
        self, api_gateway_event, lambda_context, provider, credential
    ) -> None:
        event = make_event(api_gateway_event, {'email': 'alice@example.com'})

        response = confirm_user.lambda_handler(
            event, lambda_context, provider=provider, credential=credential
        )

        assert response['statusCode'] == 500
        assert 'code' in response_body(response)['message']
        provider.confirm_sign_up.assert_not_called()


class TestGetUser:
    def test_returns_profile(
        self, api_gateway_event, lambda_context, provider
    ) -> None:
        provider.get_user.return_value = GetUserResult(
            is_successful=True,
            status_code=200,
            user={'email': 'alice@example.com', 'name': 'Alice Liddell'},
        )
        event = make_event(
            api_gateway_event,
            httpMethod='GET',
            headers={'accesstoken': 'access-token'},
        )

        response = get_user.lambda_handler(event, lambda_context, provider=provider)

        assert response['statusCode'] == 200
        assert response_body(response) == {
            'isSuccessful': True,
            'statusCode': 200,
            'user': {'email': 'alice@example.com', 'name': 'Alice Liddell'},
        }
        provider.get_user.assert_called_once_with('access-token')

    def test_missing_token_header_is_rejected(
        self, api_gateway_event, lambda_context, provider
    ) -> None:
        event = make_event(api_gateway_event, httpMethod='GET', headers={})

        response = get_user.lambda_handler(event, lambda_context, provider=provider)

        assert response['statusCode'] == 500
        assert 'AccessToken' in response_body(response)['message']
        provider.get_user.assert_not_called()

    def test_revoked_token_keeps_provider_status(
        self, api_gateway_event, lambda_context, provider
    ) -> None:
        provider.get_user.side_effect = ProviderError(
            'Access Token has been revoked', status_code=400
        )
        event = make_event(
            api_gateway_event, httpMethod='GET', headers={'AccessToken': 'revoked'}
        )

        response = get_user.lambda_handler(event, lambda_context, provider=provider)

        assert response['statusCode'] == 400
        assert response_body(response) == {'message': 'Access Token has been revoked'}


class TestAddUserToGroup:
    def test_adds_user_to_group(
        self, api_gateway_event, lambda_context, provider
    ) -> None:
        provider.add_user_to_group.return_value = AddUserToGroupResult(
            is_successful=True, status_code=200
        )
        event = make_event(
            api_gateway_event,
            {'group': 'photographers'},
            pathParameters={'userName': 'alice@example.com'},
        )

        response = add_user_to_group.lambda_handler(
            event,
            lambda_context,
            provider=provider,
            settings=Settings(region='eu-west-1', user_pool_id='eu-west-1_pool'),
        )

        assert response['statusCode'] == 200
        assert response_body(response) == {'isSuccessful': True, 'statusCode': 200}
        provider.add_user_to_group.assert_called_once_with(
            'photographers', 'alice@example.com', 'eu-west-1_pool'
        )

    def test_missing_user_pool_is_configuration_error(
        self, api_gateway_event, lambda_context, provider
    ) -> None:
        event = make_event(
            api_gateway_event,
            {'group': 'photographers'},
            pathParameters={'userName': 'alice@example.com'},
        )

        response = add_user_to_group.lambda_handler(
            event,
            lambda_context,
            provider=provider,
            settings=Settings(region='eu-west-1', user_pool_id=None),
        )

        assert response['statusCode'] == 500
        assert response_body(response) == {
            'message': 'An error occurred: Service is not configured correctly'
        }
        provider.add_user_to_group.assert_not_called()

    def test_missing_username_is_rejected(
        self, api_gateway_event, lambda_context, provider
    ) -> None:
        event = make_event(api_gateway_event, {'group': 'photographers'})

        response = add_user_to_group.lambda_handler(
            event,
            lambda_context,
            provider=provider,
            settings=Settings(region='eu-west-1', user_pool_id='eu-west-1_pool'),
        )

        assert response['statusCode'] == 500
        assert 'userName' in response_body(response)['message']
        provider.add_user_to_group.assert_not_called()

    def test_unknown_group_keeps_provider_status(
        self, api_gateway_event, lambda_context, provider
    ) -> None:
        provider.add_user_to_group.side_effect = ProviderError(
            'Group not found.', status_code=400, error_code='ResourceNotFoundException'
        )
        event = make_event(
            api_gateway_event,
            {'group': 'missing'},
            pathParameters={'userName': 'alice@example.com'},
        )

        response = add_user_to_group.lambda_handler(
            event,
            lambda_context,
            provider=provider,
            settings=Settings(region='eu-west-1', user_pool_id='eu-west-1_pool'),
        )

        assert response['statusCode'] == 400
        assert response_body(response) == {'message': 'Group not found.'}
