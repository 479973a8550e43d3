"""Authorization hooks applied to every outgoing request.

A hook receives the freshly built ``httpx.Request`` and mutates its headers in
place, once, before the request is sent. Hooks must not perform I/O.
"""

from __future__ import annotations

from typing import Protocol

import httpx


class AuthorizationHook(Protocol):
    """Callable that attaches credentials to a request."""

    def __call__(self, request: httpx.Request) -> None: ...


def no_authorization(request: httpx.Request) -> None:
    """Default hook: send the request unauthenticated."""


class HeaderAuth:
    """Sets a fixed header, e.g. ``X-API-Key``.

    The header is replaced rather than appended, so applying the hook twice
    leaves the request unchanged.
    """

    def __init__(self, name: str, value: str) -> None:
        self._name = name
        self._value = value

    def __call__(self, request: httpx.Request) -> None:
        request.headers[self._name] = self._value

    def __repr__(self) -> str:
        # Never expose the credential value
        return f"{self.__class__.__name__}(name={self._name!r})"


class BearerTokenAuth(HeaderAuth):
    """Sets ``Authorization: Bearer <token>``."""

    def __init__(self, token: str) -> None:
        super().__init__("Authorization", f"Bearer {token}")
