"""Shared test fixtures and hypothesis strategies for the resource client suite."""

from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime, timezone

import httpx
import pytest
from hypothesis import strategies as st

from resource_client.client import ResourceClient
from resource_client.config.settings import ClientSettings
from tests.widgets import Color, Priority, Widget, WidgetCollection, WidgetCreated

BASE_URL = "https://api.x.com/v1"
API_END_POINT = "/widgets"


# ---------------------------------------------------------------------------
# Ensure required env vars are set for ClientSettings in tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set minimal env vars so ClientSettings can be instantiated in tests."""
    defaults = {
        "RESOURCE_CLIENT_BASE_URL": BASE_URL,
    }
    for key, value in defaults.items():
        if key not in os.environ:
            monkeypatch.setenv(key, value)


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> ClientSettings:
    """Test settings with safe defaults."""
    return ClientSettings(
        base_url=BASE_URL,
        api_end_point=API_END_POINT,
        timeout_seconds=5.0,
    )


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Requests observed by the mock transport, in order."""
    return []


@pytest.fixture
def make_client(
    sent_requests: list[httpx.Request],
) -> Callable[..., ResourceClient[Widget, WidgetCollection, WidgetCreated]]:
    """Factory for a widget client whose transport records and answers via ``handler``."""

    def _make(handler: Handler, **kwargs: object) -> ResourceClient[Widget, WidgetCollection, WidgetCreated]:
        def _recording_handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return handler(request)

        kwargs.setdefault("api_end_point", API_END_POINT)
        return ResourceClient(
            BASE_URL,
            model_type=Widget,
            collection_type=WidgetCollection,
            result_type=WidgetCreated,
            transport=httpx.MockTransport(_recording_handler),
            **kwargs,
        )

    return _make


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

colors = st.sampled_from(list(Color))
priorities = st.sampled_from(list(Priority))

utc_datetimes = st.datetimes(
    min_value=datetime(1970, 1, 1),
    max_value=datetime(2100, 1, 1),
    timezones=st.just(timezone.utc),
)

item_ids = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_",
    min_size=1,
    max_size=24,
)

widgets = st.builds(
    Widget,
    id=item_ids,
    color=colors,
    display_name=st.none() | st.text(max_size=40),
    priority=priorities,
    tags=st.lists(colors, max_size=5),
    created_at=st.none() | utc_datetimes,
)

success_with_body_codes = st.sampled_from([200, 201])
success_empty_codes = st.sampled_from([202, 204])
error_codes = st.integers(min_value=100, max_value=599).filter(
    lambda code: code not in {200, 201, 202, 204}
)
