"""freshservice_toolkit package exports."""

from .core import (
    ChoiceCache,
    Environment,
    EnvironmentBinding,
    ErrorKind,
    FreshserviceClient,
    FreshserviceClientError,
    FreshserviceHTTPError,
    FreshserviceParseError,
    FreshserviceTransportError,
    RateLimitedError,
    create_client_from_env,
    encode_multipart,
)

__all__ = [
    "FreshserviceClient",
    "Environment",
    "EnvironmentBinding",
    "create_client_from_env",
    "ChoiceCache",
    "encode_multipart",
    "ErrorKind",
    "FreshserviceClientError",
    "FreshserviceHTTPError",
    "FreshserviceParseError",
    "FreshserviceTransportError",
    "RateLimitedError",
]
