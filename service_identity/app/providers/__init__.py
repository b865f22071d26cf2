"""
Identity provider package.

Defines the two narrow capabilities the core consumes and ships concrete
HTTP clients for them:

- base: `TokenVerificationProvider`, `IdentityRecordProvider`, the
  `UserRecord` shape and the provider error types.
- jwks: `FirebaseTokenVerifier`, verifying ID tokens against a cached JWKS.
- identity_toolkit: `IdentityToolkitClient`, fetching user records.
"""

from .base import (
    IdentityRecordProvider,
    ProviderError,
    ProviderUserInfo,
    TokenVerificationError,
    TokenVerificationProvider,
    UserRecord,
    UserRecordError,
)
from .identity_toolkit import IdentityToolkitClient
from .jwks import FirebaseTokenVerifier

__all__ = [
    "FirebaseTokenVerifier",
    "IdentityRecordProvider",
    "IdentityToolkitClient",
    "ProviderError",
    "ProviderUserInfo",
    "TokenVerificationError",
    "TokenVerificationProvider",
    "UserRecord",
    "UserRecordError",
]
