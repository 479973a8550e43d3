"""Classification and reading of HTTP responses.

| Status          | Outcome            | Action                               |
|-----------------|--------------------|--------------------------------------|
| 200, 201        | SUCCESS_WITH_BODY  | decode the body into the result type |
| 202, 204        | SUCCESS_EMPTY      | return ``None``, body is not read    |
| anything else   | ERROR              | raise ApiError with the raw body     |
"""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

import httpx

from resource_client.errors import ApiError
from resource_client.serialization import SerializationPolicy, default_policy

T = TypeVar("T")

_WITH_BODY: frozenset[int] = frozenset({httpx.codes.OK, httpx.codes.CREATED})
_EMPTY: frozenset[int] = frozenset({httpx.codes.ACCEPTED, httpx.codes.NO_CONTENT})


class ResponseOutcome(str, Enum):
    """How a response status is handled."""

    SUCCESS_WITH_BODY = "success_with_body"
    SUCCESS_EMPTY = "success_empty"
    ERROR = "error"


def classify_status(status_code: int) -> ResponseOutcome:
    if status_code in _WITH_BODY:
        return ResponseOutcome.SUCCESS_WITH_BODY
    if status_code in _EMPTY:
        return ResponseOutcome.SUCCESS_EMPTY
    return ResponseOutcome.ERROR


async def read_text(response: httpx.Response) -> str:
    """Read the whole body and decode it as text."""
    await response.aread()
    return response.text


async def read_response(
    response: httpx.Response,
    type_: type[T],
    policy: SerializationPolicy = default_policy,
) -> T | None:
    """Read the whole body and decode it into ``type_``.

    Raises
    ------
    SerializationError
        If the body does not decode into ``type_``.
    """
    text = await read_text(response)
    return policy.deserialize(text, type_)


async def handle_error(response: httpx.Response) -> None:
    """Raise ApiError carrying the response body verbatim."""
    body = await read_text(response)
    raise ApiError(body, status_code=response.status_code)


async def process_response(
    response: httpx.Response,
    type_: Any,
    policy: SerializationPolicy = default_policy,
) -> Any:
    """Apply the classification table to ``response``.

    Returns the decoded body, or ``None`` for success-empty statuses.
    """
    outcome = classify_status(response.status_code)
    if outcome is ResponseOutcome.SUCCESS_WITH_BODY:
        return await read_response(response, type_, policy)
    if outcome is ResponseOutcome.SUCCESS_EMPTY:
        return None
    await handle_error(response)
    return None
