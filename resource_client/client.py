"""Generic async client for one REST resource collection.

Every operation follows the same path: build the request, let the
authorization hook decorate it, send it on a fresh ``httpx.AsyncClient``,
classify the status and read the body accordingly. The client holds no
mutable state between calls, so one instance can serve concurrent callers.

Errors are never logged, retried or swallowed here: ApiError,
SerializationError and httpx transport errors all reach the caller.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Generic, TypeVar

import httpx

from resource_client.auth import AuthorizationHook, no_authorization
from resource_client.config.settings import ClientSettings
from resource_client.request_builder import (
    HttpMethod,
    add_query_string,
    build_request,
    create_get_request,
)
from resource_client.responses import classify_status, process_response, read_response
from resource_client.serialization import SerializationPolicy, default_policy

logger = logging.getLogger(__name__)

M = TypeVar("M")  # Resource model
C = TypeVar("C")  # Collection response
R = TypeVar("R")  # Create result

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 10.0


class ResourceClient(Generic[M, C, R]):
    """Typed CRUD client for a single resource collection.

    Parameters
    ----------
    base_url:
        Root address of the service (e.g. "https://api.x.com/v1").
    api_end_point:
        Optional sub-path appended to ``base_url`` (e.g. "/widgets").
    timeout:
        Per-request timeout, in seconds or as a timedelta (default 10s).
    model_type:
        Shape of a single resource; decoded by :meth:`get`, sent by :meth:`create`.
    collection_type:
        Shape of a list response; decoded by :meth:`list`.
    result_type:
        Shape returned by :meth:`create`.
    authorization:
        Hook applied to every request before it is sent (default: no-op).
    serialization:
        Codec for request and response bodies.
    transport:
        Optional httpx transport handed to each per-call client. Every call
        closes its client and with it this transport, so a pooling
        ``httpx.AsyncHTTPTransport`` is torn down after each request; leave
        it unset outside tests (``httpx.MockTransport``, ``httpx.ASGITransport``).
    """

    def __init__(
        self,
        base_url: str,
        api_end_point: str | None = None,
        timeout: float | timedelta = DEFAULT_TIMEOUT_SECONDS,
        *,
        model_type: type[M],
        collection_type: type[C],
        result_type: type[R],
        authorization: AuthorizationHook | None = None,
        serialization: SerializationPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._api_end_point = api_end_point or ""
        if isinstance(timeout, timedelta):
            timeout = timeout.total_seconds()
        self._timeout = float(timeout)

        self._model_type = model_type
        self._collection_type = collection_type
        self._result_type = result_type

        self._authorization = authorization or no_authorization
        self._serialization = serialization or default_policy
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        *,
        model_type: type[M],
        collection_type: type[C],
        result_type: type[R],
        **kwargs: Any,
    ) -> ResourceClient[M, C, R]:
        """Build a client from validated settings."""
        return cls(
            settings.base_url,
            settings.api_end_point,
            settings.timeout_seconds,
            model_type=model_type,
            collection_type=collection_type,
            result_type=result_type,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def api_end_point(self) -> str:
        return self._api_end_point

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def endpoint(self) -> str:
        """Effective endpoint: base URL plus the optional sub-path."""
        if not self._api_end_point:
            return self._base_url
        return self._base_url + self._api_end_point

    # ------------------------------------------------------------------
    # Extension points
    # ------------------------------------------------------------------

    def set_authorization(self, request: httpx.Request) -> None:
        """Attach credentials to ``request``; override or pass ``authorization``."""
        self._authorization(request)

    def _get_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def get(self, item_id: str) -> M | None:
        """Fetch one resource by id.

        Raises
        ------
        ApiError
            If the server answers with a non-success status.
        SerializationError
            If the body does not decode into the model type.
        """
        return await self.get_resource(f"{self.endpoint}/{item_id}", result_type=self._model_type)

    async def list(self, params: Mapping[str, str] | None = None) -> C | None:
        """Fetch the collection at the effective endpoint."""
        return await self.get_resource(self.endpoint, params, result_type=self._collection_type)

    async def create(self, resource: M, action: str | None = None) -> R | None:
        """Create a resource, optionally through an action sub-path.

        Returns ``None`` when the server answers 202 or 204.
        """
        url = self.endpoint
        if action:
            url += "/" + action
        return await self.post_resource(resource, url, self._result_type)

    async def delete(self, item_id: str) -> None:
        """Delete a resource by id."""
        await self.post_resource(
            None, f"{self.endpoint}/{item_id}", self._result_type, method=HttpMethod.DELETE
        )

    # ------------------------------------------------------------------
    # Request primitives
    # ------------------------------------------------------------------

    async def get_resource(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
        *,
        result_type: type[T],
    ) -> T | None:
        """Issue a GET on ``url`` (plus optional query) and decode the result."""
        request = create_get_request(add_query_string(url, params))
        return await self._send(request, result_type)

    async def post_resource(
        self,
        entity: Any,
        url: str,
        result_type: type[T],
        method: HttpMethod = HttpMethod.POST,
    ) -> T | None:
        """Issue a POST (or DELETE) with ``entity`` as JSON body, if any."""
        body = self._serialization.serialize(entity) if entity is not None else None
        request = build_request(method, url, body)
        return await self._send(request, result_type)

    async def read_list_response(self, response: httpx.Response) -> C | None:
        """Decode ``response`` into the collection type."""
        return await read_response(response, self._collection_type, self._serialization)

    async def _send(self, request: httpx.Request, result_type: Any) -> Any:
        self.set_authorization(request)

        logger.debug(
            "Sending %s %s",
            request.method,
            request.url,
            extra={"method": request.method, "url": str(request.url)},
        )
        start = time.monotonic()

        async with self._get_http_client() as http_client:
            response = await http_client.send(request, stream=True)
            try:
                logger.debug(
                    "Received %d for %s %s",
                    response.status_code,
                    request.method,
                    request.url,
                    extra={
                        "method": request.method,
                        "url": str(request.url),
                        "status_code": response.status_code,
                        "duration_ms": round((time.monotonic() - start) * 1000, 2),
                        "outcome": classify_status(response.status_code).value,
                    },
                )
                return await process_response(response, result_type, self._serialization)
            finally:
                await response.aclose()
