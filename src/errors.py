"""Exceptions raised by the configuration layer and the visitors API client."""

from typing import Optional


class ConfigError(ValueError):
    """Raised when settings cannot be loaded or contain invalid values."""


class VisitorApiError(Exception):
    """Base class for failures talking to the visitors REST collection."""


class ApiConnectionError(VisitorApiError):
    """The server could not be reached (refused, DNS failure, timeout)."""


class ServerStatusError(VisitorApiError):
    """The server answered with a non-success status.

    Attributes:
        status_code: HTTP status code of the response.
        message: The `message` field of the JSON error body, if any.
    """

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message or 'Unknown error'}")


class InvalidResponseError(ServerStatusError):
    """The server answered successfully but the body could not be understood."""

    def __init__(self, message: str, status_code: int = 200) -> None:
        super().__init__(status_code, message)
