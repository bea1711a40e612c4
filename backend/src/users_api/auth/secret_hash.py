"""Cognito SECRET_HASH computation.

App clients configured with a client secret require every sign-up,
confirm and authenticate call to carry a SECRET_HASH: the Base64 encoded
HMAC-SHA256 of ``username + client_id`` keyed with the client secret.
The provider recomputes the value and rejects the call on mismatch, so
the message order (username first, then client id) is fixed.
"""

from __future__ import annotations

import base64
import hashlib
import hmac

from users_api.exceptions import SecretHashError


def compute_secret_hash(client_id: str, client_secret: str, username: str) -> str:
    """Return the SECRET_HASH for ``username`` under the given app client.

    Raises:
        SecretHashError: If any input is not a string. This indicates
            broken configuration rather than a bad request.
    """
    try:
        digest = hmac.new(
            client_secret.encode("utf-8"),
            msg=username.encode("utf-8") + client_id.encode("utf-8"),
            digestmod=hashlib.sha256,
        ).digest()
    except (AttributeError, TypeError) as exc:
        raise SecretHashError("cannot compute secret hash") from exc
    return base64.b64encode(digest).decode("ascii")
