"""Generic async client for a REST resource collection with JSON payloads.

Typical wiring from the environment::

    settings = ClientSettings()
    configure_logging(settings.log_level)
    client = ResourceClient.from_settings(
        settings, model_type=Widget, collection_type=Widgets, result_type=Widget
    )
"""

from resource_client.auth import AuthorizationHook, BearerTokenAuth, HeaderAuth, no_authorization
from resource_client.client import ResourceClient
from resource_client.config.settings import ClientSettings
from resource_client.errors import ApiError, ResourceClientError, SerializationError
from resource_client.logging_config import JsonFormatter, configure_logging
from resource_client.request_builder import HttpMethod
from resource_client.responses import ResponseOutcome, classify_status
from resource_client.serialization import ResourceModel, SerializationPolicy

__all__ = [
    "ApiError",
    "AuthorizationHook",
    "BearerTokenAuth",
    "ClientSettings",
    "HeaderAuth",
    "HttpMethod",
    "JsonFormatter",
    "ResourceClient",
    "ResourceClientError",
    "ResourceModel",
    "ResponseOutcome",
    "SerializationError",
    "SerializationPolicy",
    "classify_status",
    "configure_logging",
    "no_authorization",
]
