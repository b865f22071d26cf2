"""
Identity service for the RepHelper API.
"""

from typing import Optional

from shared.config import ServiceConfig, get_config
from shared.logging import configure_logging, get_logger, set_user_context
from .providers import (
    FirebaseTokenVerifier,
    IdentityRecordProvider,
    IdentityToolkitClient,
    TokenVerificationProvider,
)
from .resolution import IdentityInfo, IdentityInfoResolver
from .verification import TokenVerifier, VerifiedIdentity


class IdentityService:
    """Verifies a token and resolves the identity behind it."""

    def __init__(self, verifier: TokenVerifier, resolver: IdentityInfoResolver):
        self.verifier = verifier
        self.resolver = resolver
        self.logger = get_logger("identity.service")

    @classmethod
    def from_providers(
        cls,
        token_provider: TokenVerificationProvider,
        record_provider: IdentityRecordProvider,
    ) -> "IdentityService":
        return cls(TokenVerifier(token_provider), IdentityInfoResolver(record_provider))

    async def verify(self, token: Optional[str]) -> VerifiedIdentity:
        return await self.verifier.verify(token)

    async def resolve(self, subject_id: Optional[str]) -> IdentityInfo:
        return await self.resolver.resolve(subject_id)

    async def authenticate(self, token: Optional[str]) -> IdentityInfo:
        """Verify `token`, then resolve its subject.

        Raises:
            AuthenticationError: either step failed.
        """
        identity = await self.verifier.verify(token)
        set_user_context(user_id=identity.subject_id)
        info = await self.resolver.resolve(identity.subject_id)
        self.logger.info("Identity authenticated", subject_id=info.subject_id, provider=info.provider)
        return info


def create_identity_service(config: Optional[ServiceConfig] = None) -> IdentityService:
    """Wire an `IdentityService` with HTTP provider clients from configuration."""
    config = config or get_config("identity")
    configure_logging(config.service_name, config.log_level)

    if not config.firebase_project_id.strip():
        raise ValueError("REPHELPER_FIREBASE_PROJECT_ID must be set to verify identity tokens")

    token_provider = FirebaseTokenVerifier(
        jwks_url=config.jwks_url,
        project_id=config.firebase_project_id,
        cache_ttl=config.jwks_cache_ttl_seconds,
        timeout=config.provider_timeout_seconds,
    )
    record_provider = IdentityToolkitClient(
        base_url=config.identity_toolkit_url,
        project_id=config.firebase_project_id,
        access_token=config.identity_toolkit_access_token,
        timeout=config.provider_timeout_seconds,
    )

    return IdentityService.from_providers(token_provider, record_provider)
