"""
Shared utilities for the RepHelper identity core.

This package aggregates common building blocks consumed by the services:

- config: Service configuration via pydantic-settings
- logging: Structured logging with correlation context and token redaction
- errors: Closed domain error taxonomy and error responses

Any cross-service logic should live here to avoid import cycles across
service packages. Do not import from service packages into shared/.
"""
