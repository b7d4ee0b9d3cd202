"""halcyon_client package exports."""

from .client import DOCS_SUFFIX, Embed, HalEndpointClient, load_entry_point
from .config import HalcyonSettings, create_fetcher_from_env, load_env_config
from .errors import (
    HalcyonClientError,
    HalcyonConnectionError,
    HalcyonHTTPError,
    HalcyonModelValidationError,
    HalcyonParseError,
    HalcyonResponseError,
    HalError,
    UnknownRelationError,
    UnsupportedContentTypeError,
    classify_error,
)
from .fetcher import Fetcher, HttpxFetcher, RetryConfig
from .hal import HALCYON_JSON_MIME_TYPE, JSON_MIME_TYPE, split_envelope
from .models import HalEndpointDoc, HalLink, HalLinkInfo
from .multipart import FileInfo, FormData, json_to_form_data
from .protocol import HalcyonProtocol, LoadOptions
from .query import compose_query_link

__all__ = [
    # Client
    "HalEndpointClient",
    "Embed",
    "load_entry_point",
    "DOCS_SUFFIX",
    "HalcyonProtocol",
    "LoadOptions",
    # Transport
    "Fetcher",
    "HttpxFetcher",
    "RetryConfig",
    # Models
    "HalLink",
    "HalLinkInfo",
    "HalEndpointDoc",
    # Exceptions
    "HalcyonClientError",
    "UnknownRelationError",
    "UnsupportedContentTypeError",
    "HalcyonParseError",
    "HalcyonModelValidationError",
    "HalcyonConnectionError",
    "HalcyonResponseError",
    "HalcyonHTTPError",
    "HalError",
    "classify_error",
    # HAL utilities
    "HALCYON_JSON_MIME_TYPE",
    "JSON_MIME_TYPE",
    "split_envelope",
    "compose_query_link",
    "FileInfo",
    "FormData",
    "json_to_form_data",
    # Config helpers
    "HalcyonSettings",
    "load_env_config",
    "create_fetcher_from_env",
]
