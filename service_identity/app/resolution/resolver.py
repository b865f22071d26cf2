"""
Identity info resolver.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from shared.errors import AuthenticationError
from shared.logging import get_logger
from ..providers.base import IdentityRecordProvider, UserRecord, UserRecordError

UNKNOWN_PROVIDER = "unknown"


class IdentityInfo(BaseModel):
    """Normalized profile of a verified subject."""

    model_config = ConfigDict(frozen=True)

    subject_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    phone_number: Optional[str] = None
    email_verified: bool = False
    provider: str = UNKNOWN_PROVIDER


class IdentityInfoResolver:
    """Fetches and normalizes the user record behind a subject id."""

    def __init__(self, provider: IdentityRecordProvider):
        self.provider = provider
        self.logger = get_logger("identity.resolver")

    async def resolve(self, subject_id: Optional[str]) -> IdentityInfo:
        # An empty id here means verification was skipped upstream
        if not subject_id:
            self.logger.error("Identity resolution called without a subject id")
            raise AuthenticationError("Cannot resolve identity: subject identifier is missing")

        try:
            record = await self.provider.get_user_record(subject_id)
        except UserRecordError as e:
            self.logger.error(
                "Error fetching user info from identity provider",
                subject_id=subject_id,
                error=e.message,
                code=e.code
            )
            raise AuthenticationError(f"Error fetching user info: {e.message}", cause=e) from e
        except Exception as e:
            self.logger.error(
                "Unexpected error fetching user info",
                subject_id=subject_id,
                error=str(e),
                error_type=type(e).__name__
            )
            raise AuthenticationError("Error fetching user info: identity provider unavailable", cause=e) from e

        try:
            return to_identity_info(record, subject_id)
        except Exception as e:
            self.logger.error(
                "Malformed user record from identity provider",
                subject_id=subject_id,
                error=str(e),
                error_type=type(e).__name__
            )
            raise AuthenticationError("Error fetching user info: malformed user record", cause=e) from e


def to_identity_info(record: UserRecord, subject_id: str) -> IdentityInfo:
    """Normalize a provider record, tolerating missing optional fields."""
    return IdentityInfo(
        subject_id=record.uid or subject_id,
        email=record.email,
        display_name=record.display_name,
        photo_url=record.photo_url,
        phone_number=record.phone_number,
        email_verified=bool(record.email_verified),
        provider=primary_provider(record),
    )


def primary_provider(record: UserRecord) -> str:
    """Id of the first linked sign-in provider, or ``"unknown"``."""
    if not record.provider_data:
        return UNKNOWN_PROVIDER
    provider_id = record.provider_data[0].provider_id
    if not isinstance(provider_id, str) or not provider_id.strip():
        return UNKNOWN_PROVIDER
    return provider_id
