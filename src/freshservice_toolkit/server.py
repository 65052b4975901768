from __future__ import annotations

import logging
import os

from mcp.server.fastmcp import FastMCP

from freshservice_toolkit.core.choices import ChoiceCache
from freshservice_toolkit.core.config import create_client_from_env
from freshservice_toolkit.core.logging import setup_logging
from freshservice_toolkit.core.registry import register_discovered_tools

log = logging.getLogger("freshservice_toolkit.server")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def build_app() -> FastMCP:
    client = create_client_from_env()
    choices = ChoiceCache()
    if _env_flag("FRESHSERVICE_LOAD_CHOICES"):
        choices.load(client)

    app = FastMCP("freshservice-toolkit")
    register_discovered_tools(app, client, choices=choices)
    return app


# --- Entry point ----------------------------------------------------------- #


def main() -> None:
    setup_logging(os.getenv("FRESHSERVICE_LOG_LEVEL", "INFO"))
    app = build_app()
    app.run()


if __name__ == "__main__":
    main()
