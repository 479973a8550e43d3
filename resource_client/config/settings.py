"""Pydantic Settings for the resource client.

All environment variables use the RESOURCE_CLIENT_ prefix.
Example: RESOURCE_CLIENT_BASE_URL=https://api.x.com/v1,
RESOURCE_CLIENT_API_END_POINT=/widgets
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """Resource client configuration validated from environment variables."""

    # Service
    base_url: str  # e.g. "https://api.x.com/v1"
    api_end_point: str = ""  # Sub-path appended to base_url, e.g. "/widgets"

    # Transport
    timeout_seconds: float = Field(default=10.0, gt=0)

    log_level: str = "INFO"  # Passed to configure_logging()

    model_config = {"env_prefix": "RESOURCE_CLIENT_"}
