"""
JWKS-backed verifier for Firebase ID tokens.
"""

import time
from typing import Dict, Any, Optional

import httpx
import jwt

from shared.logging import get_logger
from .base import TokenVerificationError

FIREBASE_ISSUER_PREFIX = "https://securetoken.google.com/"


class FirebaseTokenVerifier:
    """Verifies RS256 ID tokens against a cached JSON Web Key Set.

    Implements `TokenVerificationProvider`. The audience and issuer claims
    are always checked against `project_id`, which must not be blank.
    """

    def __init__(
        self,
        jwks_url: str,
        project_id: str,
        cache_ttl: int = 3600,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not isinstance(project_id, str) or not project_id.strip():
            raise ValueError("FirebaseTokenVerifier requires a project id")
        self.jwks_url = jwks_url
        self.project_id = project_id.strip()
        self.cache_ttl = cache_ttl
        self.timeout = timeout
        self._transport = transport
        self.logger = get_logger("identity.jwks")

        self._jwks_cache: Optional[Dict[str, Any]] = None
        self._cache_timestamp: float = 0

    async def get_jwks(self) -> Dict[str, Any]:
        """Get JWKS from cache or fetch it from the provider."""
        current_time = time.time()

        if (self._jwks_cache is not None and
                current_time - self._cache_timestamp < self.cache_ttl):
            return self._jwks_cache

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.jwks_url)
                response.raise_for_status()
                jwks_data = response.json()
        except httpx.HTTPError as e:
            self.logger.error("Failed to fetch JWKS", error=str(e))
            # Stale keys beat no keys
            if self._jwks_cache is not None:
                self.logger.warning("Using stale JWKS cache due to fetch failure")
                return self._jwks_cache
            raise

        self._jwks_cache = jwks_data
        self._cache_timestamp = current_time
        self.logger.info(
            "JWKS refreshed successfully",
            keys_count=len(jwks_data.get("keys", []))
        )
        return jwks_data

    async def get_key(self, kid: str) -> Optional[Dict[str, Any]]:
        """Get a specific key by key ID."""
        jwks = await self.get_jwks()
        for key in jwks.get("keys", []):
            if key.get("kid") == kid:
                return key
        return None

    async def verify_token(self, raw_token: str) -> Dict[str, Any]:
        """Verify a token and return its claims.

        Raises:
            TokenVerificationError: the token is malformed, signed by an
                unknown key, expired, or issued for another project.
        """
        try:
            header = jwt.get_unverified_header(raw_token)
        except jwt.PyJWTError as e:
            raise TokenVerificationError(f"Malformed token: {e}", code="malformed") from e

        kid = header.get("kid")
        if not kid:
            raise TokenVerificationError("Token missing key ID", code="malformed")

        key_data = await self.get_key(kid)
        if key_data is None:
            raise TokenVerificationError(f"Key not found: {kid}", code="unknown_key")

        try:
            signing_key = jwt.PyJWK(key_data).key
            claims = jwt.decode(
                raw_token,
                signing_key,
                algorithms=["RS256"],
                audience=self.project_id,
                issuer=FIREBASE_ISSUER_PREFIX + self.project_id,
                options={"require": ["exp", "iat", "aud", "iss", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenVerificationError(f"Token has expired: {e}", code="expired") from e
        except jwt.PyJWTError as e:
            raise TokenVerificationError(str(e), code="invalid") from e

        return claims

    def clear_cache(self):
        """Clear the cached key set."""
        self._jwks_cache = None
        self._cache_timestamp = 0
