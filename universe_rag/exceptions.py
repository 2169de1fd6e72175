# universe_rag/exceptions.py
"""
Error taxonomy for the Universe adapter.

Hierarchy:
    UniverseRAGError
    ├── ConfigError        bad or missing serverUrl / universe
    ├── CredentialError    bearer token missing at init, or client used before init
    ├── ValidationError    malformed file id or content passed to an operation
    ├── TransportError     network failure that survived the single retry, or an unusable response
    └── ApiError           the server answered with a non-success HTTP status

Every error is raised to the immediate caller. Nothing here is caught or
logged by the adapter itself.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class UniverseRAGError(Exception):
    """Base error for all universe_rag failures."""

    pass


class ConfigError(UniverseRAGError, ValueError):
    """
    Raised when the adapter configuration is missing or invalid.

    `fields` names the offending settings (server_url, universe, ...) when known.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        fields: tuple[str, ...] = (),
    ):
        self.path = path
        self.fields = fields
        if path:
            message = f"{message} (file: {path})"
        super().__init__(message)


class CredentialError(UniverseRAGError):
    """Raised when the bearer token cannot be resolved."""

    pass


class ValidationError(UniverseRAGError, ValueError):
    """Raised when an operation receives a malformed argument."""

    pass


class TransportError(UniverseRAGError):
    """
    Raised when no usable HTTP response could be obtained.

    `retried` is False for failures that are not retried, such as a body
    that cannot be decoded or too many redirects.
    """

    def __init__(self, message: str, endpoint: Optional[str] = None, retried: bool = True):
        self.message = message
        self.endpoint = endpoint
        self.retried = retried
        prefix = "API request failed after retry" if retried else "API request failed"
        super().__init__(f"{prefix}: {message}")


class ApiError(UniverseRAGError):
    """
    Structured error for non-success HTTP responses.

    Attributes:
        status_code: HTTP status code returned by the server
        message: Message extracted from the response body, or the reason phrase
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: int, message: str, endpoint: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"API request failed: {status_code} - {message}")
