"""Core domain surface for freshservice-toolkit (transport-agnostic)."""

from .choices import DEFAULT_CHOICES, ChoiceCache
from .client import FreshserviceClient
from .config import (
    Environment,
    EnvironmentBinding,
    create_client_from_env,
    default_environment_from_env,
    load_env_config,
)
from .errors import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    ConflictError,
    ErrorKind,
    FreshserviceClientError,
    FreshserviceHTTPError,
    FreshserviceParseError,
    FreshserviceTransportError,
    MethodNotAllowedError,
    RateLimitedError,
    ServerError,
)
from .models import Attachment, FieldError
from .multipart import MultipartBody, encode_multipart
from .pagination import extract_records, paginate
from .payload import compact, full_name, project_field
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)

__all__ = [
    # Client
    "FreshserviceClient",
    # Config
    "Environment",
    "EnvironmentBinding",
    "create_client_from_env",
    "default_environment_from_env",
    "load_env_config",
    # Exceptions
    "ErrorKind",
    "FreshserviceClientError",
    "FreshserviceTransportError",
    "FreshserviceParseError",
    "FreshserviceHTTPError",
    "BadRequestError",
    "AuthenticationError",
    "AuthorizationError",
    "MethodNotAllowedError",
    "ConflictError",
    "RateLimitedError",
    "ServerError",
    "FieldError",
    # Bodies
    "Attachment",
    "MultipartBody",
    "encode_multipart",
    # Pagination / payload helpers
    "paginate",
    "extract_records",
    "project_field",
    "compact",
    "full_name",
    # Choices
    "ChoiceCache",
    "DEFAULT_CHOICES",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
