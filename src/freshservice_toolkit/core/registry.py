from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Callable, Iterable, List, Optional, Set, get_type_hints

from .choices import ChoiceCache
from .client import FreshserviceClient

log = logging.getLogger("freshservice_toolkit.core.registry")

# Parameters supplied by the registry rather than by the tool caller.
INJECTED_PARAMS = ("client", "choices")


# --- Discovery helpers ----------------------------------------------------- #


def discover_tool_modules(
    package_name: str = "freshservice_toolkit.tools",
) -> List[ModuleType]:
    """Import all modules under the given tools package, skipping failures."""
    modules: List[ModuleType] = []
    base_pkg = importlib.import_module(package_name)

    for finder in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        name = finder.name
        if name.rsplit(".", 1)[-1].startswith("_"):
            continue
        try:
            module = importlib.import_module(name)
            modules.append(module)
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", name, exc)
            continue

    return modules


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield functions that satisfy the tool convention."""
    for _, func in inspect.getmembers(module, inspect.isfunction):
        if func.__name__.startswith("_"):
            continue
        if func.__module__ != module.__name__:
            # Skip imported functions
            continue

        params = list(inspect.signature(func).parameters.values())
        if not params or params[0].name != "client":
            log.debug(
                "Skipping %s.%s: first parameter must be 'client'",
                module.__name__,
                func.__name__,
            )
            continue

        yield func


# --- Wrapping / registration ---------------------------------------------- #


def _wrap_tool(
    func: Callable,
    client_provider: Callable[[], FreshserviceClient],
    choices: Optional[ChoiceCache],
) -> Callable:
    """Return a wrapper that injects client/choices and hides them from the signature."""
    original_sig = inspect.signature(func)
    type_hints = get_type_hints(func)

    new_params = []
    for name, param in original_sig.parameters.items():
        if name in INJECTED_PARAMS:
            continue
        ann = type_hints.get(name, param.annotation)
        new_params.append(param.replace(annotation=ann))

    return_ann = type_hints.get("return", original_sig.return_annotation)
    new_sig = inspect.Signature(parameters=new_params, return_annotation=return_ann)
    wants_choices = "choices" in original_sig.parameters

    def wrapped(*args, **kwargs):
        if wants_choices:
            kwargs["choices"] = choices
        return func(client_provider(), *args, **kwargs)

    wrapped.__name__ = func.__name__
    wrapped.__doc__ = func.__doc__
    wrapped.__module__ = func.__module__
    wrapped.__signature__ = new_sig  # type: ignore[attr-defined]
    return wrapped


def register_discovered_tools(
    app,
    client_provider: Callable[[], FreshserviceClient] | FreshserviceClient,
    modules: List[ModuleType] | None = None,
    *,
    choices: Optional[ChoiceCache] = None,
) -> List[str]:
    """Register discovered tools on an app that exposes a .tool decorator."""
    if isinstance(client_provider, FreshserviceClient):
        _client = client_provider

        def client_provider():
            return _client

    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    modules = modules if modules is not None else discover_tool_modules()
    seen_names: Set[str] = set()
    registered: List[str] = []

    for module in modules:
        for func in iter_tool_functions(module):
            name = func.__name__
            if name in seen_names:
                raise ValueError(f"Duplicate tool name detected: {name}")

            wrapped = _wrap_tool(func, client_provider, choices)
            app.tool(name=name)(wrapped)
            seen_names.add(name)
            registered.append(name)
            log.info("Registered tool: %s (%s)", name, module.__name__)

    return registered


__all__ = [
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
    "INJECTED_PARAMS",
]
