from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from dotenv import load_dotenv

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRY_AFTER_SECONDS = 300


class Environment(str, Enum):
    """Which of the two configured Freshservice backends a call targets."""

    LIVE = "live"
    SANDBOX = "sandbox"

    @classmethod
    def parse(cls, value: "Environment | str") -> "Environment":
        if isinstance(value, Environment):
            return value
        key = (value or "").strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(
            f"Unknown environment {value!r}; expected one of: "
            + ", ".join(m.value for m in cls)
        )


@dataclass(frozen=True)
class EnvironmentBinding:
    host: str
    api_key: str

    def __post_init__(self) -> None:
        host = (self.host or "").strip()
        for prefix in ("https://", "http://"):
            if host.lower().startswith(prefix):
                host = host[len(prefix) :]
        host = host.split("/", 1)[0]
        if not host:
            raise ValueError("host must be provided.")
        if not (self.api_key or "").strip():
            raise ValueError("api_key must be provided.")
        object.__setattr__(self, "host", host)
        object.__setattr__(self, "api_key", self.api_key.strip())

    @property
    def base_url(self) -> str:
        return f"https://{self.host}/api/v2"

    def __repr__(self) -> str:
        return f"EnvironmentBinding(host={self.host!r}, api_key='***')"


def _env_prefix(environment: Environment) -> str:
    return f"FRESHSERVICE_{environment.value.upper()}"


def load_env_config(*, use_dotenv: bool = True) -> Dict[Environment, EnvironmentBinding]:
    """Load per-environment domain and API key from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    bindings: Dict[Environment, EnvironmentBinding] = {}
    for environment in Environment:
        prefix = _env_prefix(environment)
        host = os.getenv(f"{prefix}_DOMAIN", "").strip()
        api_key = os.getenv(f"{prefix}_API_KEY", "").strip()
        if host and api_key:
            bindings[environment] = EnvironmentBinding(host=host, api_key=api_key)
    return bindings


def default_environment_from_env() -> Environment:
    return Environment.parse(os.getenv("FRESHSERVICE_ENVIRONMENT", "live"))


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def create_client_from_env(**kwargs):
    """Create a FreshserviceClient from environment variables."""
    from .client import FreshserviceClient

    environments = load_env_config()
    if not environments:
        raise ValueError(
            "Missing FRESHSERVICE_LIVE_DOMAIN/FRESHSERVICE_LIVE_API_KEY "
            "(or the SANDBOX equivalents) in environment."
        )
    kwargs.setdefault("default_environment", default_environment_from_env())
    kwargs.setdefault(
        "timeout_seconds", _float_env("FRESHSERVICE_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)
    )
    kwargs.setdefault(
        "max_retry_after_seconds",
        _float_env("FRESHSERVICE_MAX_RETRY_AFTER", DEFAULT_MAX_RETRY_AFTER_SECONDS),
    )
    return FreshserviceClient(environments=environments, **kwargs)


def resolve_environment(
    environment: Optional["Environment | str"], default: Environment
) -> Environment:
    if environment is None:
        return default
    return Environment.parse(environment)


__all__ = [
    "Environment",
    "EnvironmentBinding",
    "load_env_config",
    "default_environment_from_env",
    "create_client_from_env",
    "resolve_environment",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_MAX_RETRY_AFTER_SECONDS",
]
