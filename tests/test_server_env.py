import pytest
from mcp.server.fastmcp import FastMCP
from freshservice_toolkit import server
from freshservice_toolkit.core import config
from freshservice_toolkit.core.choices import ChoiceCache


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # Prevent load_dotenv from repopulating values from .env
    monkeypatch.setattr(config, "load_dotenv", lambda *a, **k: False)
    for name in (
        "FRESHSERVICE_LIVE_DOMAIN",
        "FRESHSERVICE_LIVE_API_KEY",
        "FRESHSERVICE_SANDBOX_DOMAIN",
        "FRESHSERVICE_SANDBOX_API_KEY",
        "FRESHSERVICE_ENVIRONMENT",
        "FRESHSERVICE_LOAD_CHOICES",
    ):
        monkeypatch.delenv(name, raising=False)


def test_build_app_missing_vars():
    with pytest.raises(ValueError) as exc:
        server.build_app()

    assert "Missing FRESHSERVICE_LIVE_DOMAIN" in str(exc.value)


def test_build_app_skips_choice_load_by_default(monkeypatch):
    monkeypatch.setenv("FRESHSERVICE_LIVE_DOMAIN", "acme.freshservice.com")
    monkeypatch.setenv("FRESHSERVICE_LIVE_API_KEY", "k")
    calls = []
    monkeypatch.setattr(ChoiceCache, "load", lambda self, *a, **k: calls.append(a))

    app = server.build_app()

    assert isinstance(app, FastMCP)
    assert calls == []


def test_build_app_loads_choices_when_asked(monkeypatch):
    monkeypatch.setenv("FRESHSERVICE_SANDBOX_DOMAIN", "acme-sb.freshservice.com")
    monkeypatch.setenv("FRESHSERVICE_SANDBOX_API_KEY", "k")
    monkeypatch.setenv("FRESHSERVICE_ENVIRONMENT", "sandbox")
    monkeypatch.setenv("FRESHSERVICE_LOAD_CHOICES", "true")
    calls = []
    monkeypatch.setattr(ChoiceCache, "load", lambda self, *a, **k: calls.append(a))

    server.build_app()

    assert len(calls) == 1
    assert calls[0][0].default_environment.value == "sandbox"
