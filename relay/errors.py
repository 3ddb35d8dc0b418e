"""Relay error taxonomy.

Every error is scoped to one request: the exception handlers registered in
``relay.main`` turn each of these into an ``{"error": ...}`` JSON response.
Missing credentials are not an exception, see ``relay.models.auth.TokenAbsent``.
"""


class RelayError(Exception):
    """Base exception for relay failures."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConfigurationMissingError(RelayError):
    """A required secret is absent."""

    def __init__(self, name: str):
        super().__init__(f"Missing configuration: {name}", status_code=500)
        self.name = name


class ExternalServiceError(RelayError):
    """The auth service or Discord failed or was unreachable."""


class MalformedRequestError(RelayError):
    """Request body does not match the expected shape."""

    def __init__(self, message: str = "Malformed request body"):
        super().__init__(message, status_code=400)
