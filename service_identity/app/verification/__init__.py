"""
Token verification package.

`TokenVerifier` wraps a `TokenVerificationProvider` and classifies every
failure as an authentication error. Only a redacted token prefix is ever
logged.
"""

from .verifier import TokenVerifier, VerifiedIdentity

__all__ = ["TokenVerifier", "VerifiedIdentity"]
