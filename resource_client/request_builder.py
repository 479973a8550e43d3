"""Construction of outgoing HTTP requests.

GET and DELETE requests never carry a body. POST requests carry the
serialized entity as UTF-8 JSON, or nothing when there is no entity.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

import httpx

JSON_CONTENT_TYPE = "application/json"


class HttpMethod(str, Enum):
    """HTTP verbs issued by the resource client."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


def add_query_string(
    url: str | httpx.URL, params: Mapping[str, str] | None
) -> httpx.URL:
    """Merge ``params`` into the query string of ``url``."""
    target = httpx.URL(url)
    if params is None:
        return target
    return target.copy_merge_params(dict(params))


def create_get_request(url: str | httpx.URL) -> httpx.Request:
    return httpx.Request(HttpMethod.GET.value, url)


def create_post_request(url: str | httpx.URL, body: str | None = None) -> httpx.Request:
    return build_request(HttpMethod.POST, url, body)


def create_delete_request(url: str | httpx.URL) -> httpx.Request:
    return build_request(HttpMethod.DELETE, url)


def build_request(
    method: HttpMethod,
    url: str | httpx.URL,
    body: str | None = None,
) -> httpx.Request:
    """Build a body-capable request shared by create and delete.

    Parameters
    ----------
    method:
        POST or DELETE. Any other verb is issued as DELETE.
    url:
        Fully resolved target URL.
    body:
        Serialized JSON text. Attached with ``Content-Type: application/json``
        only when not ``None``.
    """
    if method is not HttpMethod.POST:
        method = HttpMethod.DELETE

    if body is None:
        return httpx.Request(method.value, url)

    return httpx.Request(
        method.value,
        url,
        content=body.encode("utf-8"),
        headers={"Content-Type": JSON_CONTENT_TYPE},
    )
