"""
Identity service package for the RepHelper API.

Authenticates callers by verifying externally-issued ID tokens and
resolving the verified subject into an `IdentityInfo` record:

- app.verification: Token verification adapter.
- app.resolution: User-record resolution and normalization.
- app.query: Pagination/sort normalization for read paths.
- app.providers: Provider capability interfaces and HTTP clients.
- app.service: `IdentityService` facade and wiring from configuration.
- app.handlers: FastAPI exception handlers and auth dependency.

Design notes:
- Keep the package import side-effects minimal; module import must not
  perform network calls.
- Use the shared/ utilities for logging, configuration and errors.
- The core is stateless: no caches, counters or locks. Provider clients
  own their own caching and timeouts.
"""
