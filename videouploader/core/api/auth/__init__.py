"""Authentication modes and token refresh."""
from .credentials import (
    Origin,
    Credentials,
    UploadTokenCredentials,
    AccessTokenCredentials,
    ApiKeyCredentials,
    CredentialManager,
    resolve_credentials,
)

__all__ = [
    'Origin',
    'Credentials',
    'UploadTokenCredentials',
    'AccessTokenCredentials',
    'ApiKeyCredentials',
    'CredentialManager',
    'resolve_credentials',
]
