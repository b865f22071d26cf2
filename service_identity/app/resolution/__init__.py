"""
Identity resolution package.

Resolves a verified subject id into an `IdentityInfo` record. Provider
failures are reported as authentication errors, since a verified token
whose subject cannot be resolved means identity was not established.
"""

from .resolver import IdentityInfo, IdentityInfoResolver, UNKNOWN_PROVIDER

__all__ = ["IdentityInfo", "IdentityInfoResolver", "UNKNOWN_PROVIDER"]
