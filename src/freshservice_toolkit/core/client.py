import json as jsonlib
import logging
import time
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    Mapping,
    Optional,
    Tuple,
    Union,
)

import httpx

from .config import (
    DEFAULT_MAX_RETRY_AFTER_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    Environment,
    EnvironmentBinding,
    resolve_environment,
)
from .errors import (
    FreshserviceClientError,
    FreshserviceParseError,
    FreshserviceTransportError,
    classify_response,
)
from .multipart import MultipartBody
from .pagination import paginate
from .payload import project_field

JSON_CONTENT_TYPE = "application/json"
DEFAULT_RETRY_AFTER_SECONDS = 30

# Returned by _write when the target answered 404.
_ABSENT = object()

Body = Union[Mapping[str, Any], MultipartBody, bytes, None]
EnvironmentLike = Union[Environment, str, None]


def _retry_after_seconds(resp: httpx.Response) -> int:
    raw = (resp.headers.get("Retry-After") or "").strip()
    try:
        return max(0, int(raw))
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS


class FreshserviceClient:
    """
    Shared HTTP client for the Freshservice v2 REST API.
    - One binding (host + API key) per Environment; calls never cross them
    - Maps status codes to structured errors, 404 to "no result"
    - Waits out a 429 once, then gives up
    - No business logic; tools own resource shapes
    """

    def __init__(
        self,
        *,
        environments: Mapping[Environment, EnvironmentBinding],
        default_environment: EnvironmentLike = Environment.LIVE,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_retry_after_seconds: float = DEFAULT_MAX_RETRY_AFTER_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.Client] = None,
    ):
        if not environments:
            raise ValueError("at least one environment binding must be provided.")

        self._environments: Dict[Environment, EnvironmentBinding] = {
            Environment.parse(k): v for k, v in environments.items()
        }
        self.default_environment = Environment.parse(
            default_environment or Environment.LIVE
        )
        if self.default_environment not in self._environments:
            raise ValueError(
                f"default environment {self.default_environment.value!r} "
                "has no configured binding."
            )

        self.timeout_seconds = timeout_seconds
        self.max_retry_after_seconds = max_retry_after_seconds
        self._sleep = sleep
        self.log = logger or logging.getLogger("freshservice_toolkit.client")

        self._auth = {
            env: httpx.BasicAuth(binding.api_key, "X")
            for env, binding in self._environments.items()
        }

        self._owns_http = http is None
        self.http = http or httpx.Client(
            headers={"Accept": JSON_CONTENT_TYPE},
            timeout=timeout_seconds,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "FreshserviceClient":
        from .config import create_client_from_env

        return create_client_from_env(**kwargs)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "FreshserviceClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def environments(self) -> Tuple[Environment, ...]:
        return tuple(self._environments)

    def binding(self, environment: EnvironmentLike = None) -> EnvironmentBinding:
        env = resolve_environment(environment, self.default_environment)
        try:
            return self._environments[env]
        except KeyError:
            raise FreshserviceClientError(
                f"Environment {env.value!r} is not configured."
            ) from None

    def url_for(self, path: str, environment: EnvironmentLike = None) -> str:
        if path.startswith(("https://", "http://")):
            return path
        return f"{self.binding(environment).base_url}/{path.lstrip('/')}"

    # --- send and classify ------------------------------------------------ #

    def _send(
        self,
        method: str,
        url: str,
        *,
        environment: Environment,
        content: Optional[bytes] = None,
        content_type: Optional[str] = None,
        allow_retry: bool = True,
    ) -> Optional[httpx.Response]:
        """
        Send one request and classify the outcome.
        - Returns the response on 2xx, None on 404
        - On 429 sleeps for Retry-After and reissues the request once
        - Raises a FreshserviceHTTPError subclass for every other status
        """
        method = method.upper()
        headers = {"Content-Type": content_type} if content_type else None
        start = time.perf_counter()

        try:
            resp = self.http.request(
                method,
                url,
                content=content,
                headers=headers,
                auth=self._auth[environment],
            )
        except httpx.TransportError as exc:
            raise FreshserviceTransportError(
                f"Network/timeout error calling {method} {url}: {exc}",
                original=exc,
            ) from exc

        self.log.debug(
            "fs.request",
            extra={
                "method": method,
                "url": str(resp.request.url),
                "status": resp.status_code,
                "duration_ms": int((time.perf_counter() - start) * 1000),
                "attempt": 0 if allow_retry else 1,
                "environment": environment.value,
            },
        )

        if 200 <= resp.status_code < 300:
            return resp
        if resp.status_code == 404:
            return None

        if resp.status_code == 429:
            retry_after = _retry_after_seconds(resp)
            if allow_retry and retry_after <= self.max_retry_after_seconds:
                self.log.warning(
                    "fs.rate_limited",
                    extra={
                        "method": method,
                        "url": str(resp.request.url),
                        "retry_after": retry_after,
                        "environment": environment.value,
                    },
                )
                self._sleep(retry_after)
                return self._send(
                    method,
                    url,
                    environment=environment,
                    content=content,
                    content_type=content_type,
                    allow_retry=False,
                )
            raise classify_response(resp, method=method, retry_after=retry_after)

        raise classify_response(resp, method=method)

    def _safe_json(self, resp: httpx.Response) -> Dict[str, Any]:
        # Handle empty responses (204 No Content, etc.)
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise FreshserviceParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise FreshserviceParseError(
                f"Expected top-level JSON object from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data

    def _next_link(
        self, resp: httpx.Response, environment: Environment
    ) -> Optional[str]:
        """
        The `rel="next"` target resolved against the page it came from.
        Targets outside the environment's scheme and host are refused.
        """
        href = resp.links.get("next", {}).get("url")
        if not href:
            return None
        url = resp.url.join(href)
        base = httpx.URL(self.binding(environment).base_url)
        if (url.scheme, url.netloc) != (base.scheme, base.netloc):
            raise FreshserviceClientError(
                f"Refusing to follow next link to {url.scheme}://{url.host}; "
                f"environment {environment.value!r} is bound to {base.host!r}."
            )
        return str(url)

    @staticmethod
    def _encode_body(
        body: Body, content_type: Optional[str]
    ) -> Tuple[Optional[bytes], Optional[str]]:
        if body is None:
            return None, None
        if isinstance(body, MultipartBody):
            return body.content, body.content_type
        if isinstance(body, (bytes, bytearray)):
            return bytes(body), content_type or "application/octet-stream"
        return (
            jsonlib.dumps(dict(body)).encode("utf-8"),
            content_type or JSON_CONTENT_TYPE,
        )

    def _write(
        self,
        method: str,
        path: str,
        field_name: Optional[str],
        body: Body,
        content_type: Optional[str],
        environment: EnvironmentLike,
    ) -> Any:
        env = resolve_environment(environment, self.default_environment)
        content, ctype = self._encode_body(body, content_type)
        resp = self._send(
            method,
            self.url_for(path, env),
            environment=env,
            content=content,
            content_type=ctype,
        )
        if resp is None:
            return _ABSENT
        return project_field(self._safe_json(resp), field_name)

    # --- public operations ------------------------------------------------ #

    def get(
        self,
        path: str,
        field_name: Optional[str] = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        environment: EnvironmentLike = None,
    ) -> Iterator[Any]:
        """
        Lazily yield the records at `field_name`, following pagination.
        A 404 yields nothing. Requests are only sent as the iterator is consumed.
        """
        env = resolve_environment(environment, self.default_environment)
        first_url = self.url_for(path, env)
        if params:
            first_url = str(httpx.URL(first_url).copy_merge_params(dict(params)))

        def fetch_page(url: str):
            resp = self._send("GET", url, environment=env)
            if resp is None:
                return None
            return self._safe_json(resp), self._next_link(resp, env)

        return paginate(fetch_page, first_url, field_name)

    def get_one(
        self,
        path: str,
        field_name: Optional[str] = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        environment: EnvironmentLike = None,
    ) -> Any:
        """First record of a query, or None when there is none."""
        return next(
            iter(self.get(path, field_name, params=params, environment=environment)),
            None,
        )

    def post(
        self,
        path: str,
        field_name: Optional[str] = None,
        body: Body = None,
        *,
        content_type: Optional[str] = None,
        environment: EnvironmentLike = None,
    ) -> Any:
        result = self._write("POST", path, field_name, body, content_type, environment)
        return None if result is _ABSENT else result

    def put(
        self,
        path: str,
        field_name: Optional[str] = None,
        body: Body = None,
        *,
        content_type: Optional[str] = None,
        environment: EnvironmentLike = None,
    ) -> Any:
        result = self._write("PUT", path, field_name, body, content_type, environment)
        return None if result is _ABSENT else result

    def delete(
        self,
        path: str,
        field_name: Optional[str] = None,
        *,
        environment: EnvironmentLike = None,
    ) -> Any:
        """
        Without `field_name`: True when deleted, False when the resource was
        already absent (404). With it: the value at `field_name`, or None.
        """
        result = self._write("DELETE", path, field_name, None, None, environment)
        if field_name is None:
            return result is not _ABSENT
        return None if result is _ABSENT else result


__all__ = ["FreshserviceClient", "JSON_CONTENT_TYPE", "DEFAULT_RETRY_AFTER_SECONDS"]
