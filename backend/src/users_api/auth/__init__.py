"""Authentication helpers for Cognito app clients."""

from users_api.auth.secret_hash import compute_secret_hash

__all__ = [
    "compute_secret_hash",
]
