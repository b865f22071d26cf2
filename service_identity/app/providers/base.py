"""
Capability interfaces for the external identity provider.

The core depends only on these two protocols, never on a concrete SDK, so
any object with a matching coroutine (including a test double) can be
injected.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable


class ProviderError(Exception):
    """Failure reported by an identity provider."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code
        super().__init__(message)


class TokenVerificationError(ProviderError):
    """Token rejected: bad signature, expired, revoked or malformed."""


class UserRecordError(ProviderError):
    """User record could not be fetched (unknown id or provider error)."""


@dataclass(frozen=True)
class ProviderUserInfo:
    """One linked sign-in provider of a user record."""
    provider_id: Optional[str]
    uid: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class UserRecord:
    """User record as returned by the identity provider."""
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    phone_number: Optional[str] = None
    email_verified: Optional[bool] = None
    provider_data: Optional[List[ProviderUserInfo]] = field(default=None)


@runtime_checkable
class TokenVerificationProvider(Protocol):
    """Verifies a raw token and returns its claims."""

    async def verify_token(self, raw_token: str) -> Mapping[str, Any]:
        ...


@runtime_checkable
class IdentityRecordProvider(Protocol):
    """Looks up the full user record for a subject identifier."""

    async def get_user_record(self, subject_id: str) -> UserRecord:
        ...


def user_record_from_payload(payload: Dict[str, Any]) -> UserRecord:
    """Build a `UserRecord` from an Identity Toolkit user payload."""
    provider_data = payload.get("providerUserInfo")
    return UserRecord(
        uid=payload.get("localId", ""),
        email=payload.get("email"),
        display_name=payload.get("displayName"),
        photo_url=payload.get("photoUrl"),
        phone_number=payload.get("phoneNumber"),
        email_verified=payload.get("emailVerified"),
        provider_data=None if provider_data is None else [
            ProviderUserInfo(
                provider_id=entry.get("providerId"),
                uid=entry.get("rawId"),
                email=entry.get("email"),
            )
            for entry in provider_data
        ],
    )
