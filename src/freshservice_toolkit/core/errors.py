"""Structured errors raised by the Freshservice client."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Type

import httpx
from pydantic import ValidationError

from .models import FieldError


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    BAD_REQUEST = "bad_request"
    FIELD_VALIDATION = "field_validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    UNCLASSIFIED = "unclassified"


class FreshserviceClientError(Exception):
    """Base error for client failures."""


class FreshserviceTransportError(FreshserviceClientError):
    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, *, original: Exception):
        super().__init__(message)
        self.original = original


class FreshserviceParseError(FreshserviceClientError):
    pass


class FreshserviceHTTPError(FreshserviceClientError):
    kind = ErrorKind.UNCLASSIFIED

    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        path_and_query: str,
        description: str,
        field_errors: Optional[List[FieldError]] = None,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {path_and_query}: {description}")
        self.status_code = status_code
        self.method = method
        self.path_and_query = path_and_query
        self.description = description
        self.field_errors = list(field_errors or [])
        self.response_json = response_json
        self.response_text = response_text


class BadRequestError(FreshserviceHTTPError):
    @property
    def kind(self) -> ErrorKind:  # type: ignore[override]
        if self.field_errors:
            return ErrorKind.FIELD_VALIDATION
        return ErrorKind.BAD_REQUEST


class AuthenticationError(FreshserviceHTTPError):
    kind = ErrorKind.AUTHENTICATION


class AuthorizationError(FreshserviceHTTPError):
    kind = ErrorKind.AUTHORIZATION


class MethodNotAllowedError(FreshserviceHTTPError):
    kind = ErrorKind.METHOD_NOT_ALLOWED


class ConflictError(FreshserviceHTTPError):
    kind = ErrorKind.CONFLICT


class RateLimitedError(FreshserviceHTTPError):
    kind = ErrorKind.RATE_LIMITED

    def __init__(self, *, retry_after: Optional[int] = None, **kwargs: Any):
        super().__init__(**kwargs)
        self.retry_after = retry_after


class ServerError(FreshserviceHTTPError):
    kind = ErrorKind.SERVER_ERROR


_STATUS_ERRORS: Dict[int, Type[FreshserviceHTTPError]] = {
    400: BadRequestError,
    401: AuthenticationError,
    403: AuthorizationError,
    405: MethodNotAllowedError,
    409: ConflictError,
    429: RateLimitedError,
    500: ServerError,
}


def path_and_query(url: httpx.URL) -> str:
    raw = url.raw_path.decode("ascii", errors="replace")
    return raw or "/"


def _parse_field_errors(payload: Dict[str, Any]) -> List[FieldError]:
    raw_errors = payload.get("errors")
    if not isinstance(raw_errors, list):
        return []
    errors: List[FieldError] = []
    for item in raw_errors:
        if not isinstance(item, dict):
            continue
        try:
            errors.append(FieldError.model_validate(item))
        except ValidationError:
            continue
    return errors


def _describe(
    status: int,
    method: str,
    url: httpx.URL,
    payload: Optional[Dict[str, Any]],
    text: Optional[str],
) -> str:
    if status == 400:
        if payload:
            reason = payload.get("description") or payload.get("message")
            if isinstance(reason, str) and reason:
                return reason
        return text or "bad request"
    if status == 401:
        return "missing or incorrect authorization"
    if status == 403:
        return "forbidden"
    if status == 405:
        return f"method {method} is not allowed for this resource"
    if status == 409:
        return "resource is in an inconsistent or conflicting state"
    if status == 429:
        return "rate limit exceeded"
    if status == 500:
        return (
            f"server error calling {url}; verify the request input "
            "before contacting Freshservice support"
        )
    if payload:
        return str(payload.get("description") or payload.get("message") or "request failed")
    return text or "request failed"


def classify_response(
    resp: httpx.Response, *, method: str, retry_after: Optional[int] = None
) -> FreshserviceHTTPError:
    """Map a non-2xx (and non-404) response to its Structured Error."""
    url = resp.request.url
    response_json: Optional[Dict[str, Any]] = None
    response_text: Optional[str] = None

    try:
        parsed = resp.json()
        if isinstance(parsed, dict):
            response_json = parsed
        else:
            response_text = (resp.text or "")[:500]
    except ValueError:
        response_text = (resp.text or "")[:500]

    status = resp.status_code
    field_errors = _parse_field_errors(response_json) if status == 400 and response_json else []
    error_cls = _STATUS_ERRORS.get(status, FreshserviceHTTPError)

    kwargs: Dict[str, Any] = dict(
        status_code=status,
        method=method,
        path_and_query=path_and_query(url),
        description=_describe(
            status,
            method,
            url,
            response_json,
            response_text or (resp.text[:500] if response_json else None),
        ),
        field_errors=field_errors,
        response_json=response_json,
        response_text=response_text,
    )
    if error_cls is RateLimitedError:
        return RateLimitedError(retry_after=retry_after, **kwargs)
    return error_cls(**kwargs)


__all__ = [
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
    "classify_response",
    "path_and_query",
]
