import inspect
from types import ModuleType

import pytest
from mcp.server.fastmcp import FastMCP
from freshservice_toolkit.core.choices import ChoiceCache
from freshservice_toolkit.core.client import FreshserviceClient
from freshservice_toolkit.core.config import Environment, EnvironmentBinding
from freshservice_toolkit.core.registry import (
    discover_tool_modules,
    register_discovered_tools,
)


def _make_module(name: str, code: str) -> ModuleType:
    module = ModuleType(name)
    exec(code, module.__dict__)
    return module


def _client() -> FreshserviceClient:
    return FreshserviceClient(
        environments={
            Environment.LIVE: EnvironmentBinding(host="live.freshservice.test", api_key="k")
        }
    )


class RecordingApp:
    def __init__(self):
        self.registered = []

    def tool(self, name):
        def decorator(fn):
            self.registered.append((name, fn))
            return fn

        return decorator


def test_register_discovered_tools_registers_valid_tools_only():
    code = """
def tool_fn(client, *, foo: int = 1):
    return (client.default_environment.value, foo)

def _private(client):
    return None

def wrong_first(arg1, client):
    return None
"""
    mod = _make_module("fake_mod", code)
    app = RecordingApp()

    register_discovered_tools(app, _client(), modules=[mod])

    assert [n for n, _ in app.registered] == ["tool_fn"]

    # wrapper signature should not expose client
    sig = inspect.signature(app.registered[0][1])
    assert "client" not in sig.parameters

    # call wrapper to ensure client injection works
    assert app.registered[0][1](foo=5) == ("live", 5)


def test_choices_are_injected_and_hidden():
    code = """
def label_tool(client, code: int, choices=None):
    return choices.label("status", code)
"""
    mod = _make_module("choice_mod", code)
    app = RecordingApp()
    choices = ChoiceCache({"status": {9: "Parked"}})

    register_discovered_tools(app, _client(), modules=[mod], choices=choices)

    name, wrapped = app.registered[0]
    assert "choices" not in inspect.signature(wrapped).parameters
    assert wrapped(code=9) == "Parked"


def test_register_discovered_tools_duplicate_names_raise():
    mod1 = _make_module("mod1", "def tool_fn(client): return None")
    mod2 = _make_module("mod2", "def tool_fn(client): return None")

    with pytest.raises(ValueError):
        register_discovered_tools(FastMCP("test"), _client(), modules=[mod1, mod2])


def test_app_without_tool_decorator_rejected():
    with pytest.raises(TypeError):
        register_discovered_tools(object(), _client(), modules=[])


def test_real_tool_modules_register_on_fastmcp():
    app = FastMCP("test")

    names = register_discovered_tools(app, _client())

    assert "list_tickets" in names
    assert "create_ticket" in names
    assert "list_custom_object_records" in names
    assert not any(n.startswith("_") for n in names)


def test_discover_tool_modules_skips_private_and_failures(monkeypatch, caplog):
    import importlib
    import pkgutil

    class Info:
        def __init__(self, name):
            self.name = name

    def fake_iter_modules(path, prefix):
        return [Info(prefix + "good"), Info(prefix + "bad"), Info(prefix + "_common")]

    good_mod = _make_module(
        "freshservice_toolkit.tools.good", "def tool_fn(client): return None"
    )

    real_import_module = importlib.import_module

    def fake_import_module(name, *args, **kwargs):
        if name == "freshservice_toolkit.tools.bad":
            raise ImportError("boom")
        if name == "freshservice_toolkit.tools.good":
            return good_mod
        return real_import_module(name, *args, **kwargs)

    monkeypatch.setattr(pkgutil, "iter_modules", fake_iter_modules)
    monkeypatch.setattr(importlib, "import_module", fake_import_module)

    with caplog.at_level("ERROR"):
        modules = discover_tool_modules()

    assert [m.__name__ for m in modules] == ["freshservice_toolkit.tools.good"]
    assert any("Failed importing tool module" in rec.message for rec in caplog.records)
