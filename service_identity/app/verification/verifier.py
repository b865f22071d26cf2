"""
Identity verification adapter.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.errors import AuthenticationError
from shared.logging import get_logger, redact_token
from ..providers.base import TokenVerificationError, TokenVerificationProvider

BEARER_PREFIX = "Bearer "
SUBJECT_CLAIMS = ("sub", "uid", "user_id")


class VerifiedIdentity(BaseModel):
    """Subject of a token that passed verification."""

    model_config = ConfigDict(frozen=True)

    subject_id: str = Field(min_length=1)


class TokenVerifier:
    """Turns a raw token into a `VerifiedIdentity` or an `AuthenticationError`."""

    def __init__(self, provider: TokenVerificationProvider):
        self.provider = provider
        self.logger = get_logger("identity.verifier")

    async def verify(self, token: Optional[str]) -> VerifiedIdentity:
        """Verify a token with the provider.

        Any failure, whether reported by the provider or not, surfaces as
        `AuthenticationError` with the original exception as cause.
        """
        token = token.lstrip() if isinstance(token, str) else ""
        # Auth scheme names are case-insensitive
        if token[:len(BEARER_PREFIX)].lower() == BEARER_PREFIX.lower():
            token = token[len(BEARER_PREFIX):]
        token = token.strip()

        if not token:
            self.logger.warning("Token verification rejected", reason="missing_token")
            raise AuthenticationError("Invalid token: token is missing")

        self.logger.info("Verifying identity token", token_prefix=redact_token(token))

        try:
            claims = await self.provider.verify_token(token)
        except TokenVerificationError as e:
            self.logger.warning("Token verification failed", error=e.message, code=e.code)
            raise AuthenticationError(f"Invalid or expired token: {e.message}", cause=e) from e
        except Exception as e:
            self.logger.error(
                "Unexpected error during token verification",
                error=str(e),
                error_type=type(e).__name__
            )
            raise AuthenticationError("Token verification failed: identity provider unavailable", cause=e) from e

        subject_id = _subject_from_claims(claims)
        if not subject_id:
            self.logger.warning("Token verification failed", reason="missing_subject")
            raise AuthenticationError("Invalid token: no subject identifier")

        self.logger.info("Token verified", subject_id=subject_id)
        return VerifiedIdentity(subject_id=subject_id)


def _subject_from_claims(claims: Any) -> Optional[str]:
    if not isinstance(claims, Mapping):
        return None
    for claim in SUBJECT_CLAIMS:
        value = claims.get(claim)
        if isinstance(value, str) and value:
            return value
    return None
