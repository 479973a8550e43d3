"""Error hierarchy for the resource client.

All client-specific errors extend ResourceClientError. Transport failures
(connection errors, timeouts) are raised by httpx and are never wrapped:
they reach the caller as ``httpx.TransportError`` subclasses.
"""

from __future__ import annotations


class ResourceClientError(Exception):
    """Base error for all resource client errors."""

    message: str = "Resource client error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message if message is not None else self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class ApiError(ResourceClientError):
    """The server answered with a status outside 200/201/202/204.

    ``message`` is the raw response body text, unmodified.
    """

    message = ""

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code)
        self.status_code = status_code


class SerializationError(ResourceClientError):
    """A success body could not be decoded into the expected type."""

    message = "Response body does not match the expected type"
