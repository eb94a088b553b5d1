"""Main entry point for the AppDNA MCP tool server."""
from __future__ import annotations

import logging
import os
import sys

from dna_tools import __version__
from dna_tools.client import BridgeClient
from dna_tools.config import BridgeConfig, Plane
from dna_tools.server import create_server

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Log to stderr; stdout carries the MCP stdio protocol."""
    level = os.environ.get("APPDNA_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    configure_logging()
    if any(arg in ("-v", "--version") for arg in sys.argv[1:]):
        print(f"appdna-mcp v{__version__}", file=sys.stderr)
        return

    config = BridgeConfig.load()
    logger.info(
        "appdna-mcp v%s using data plane %s and command plane %s",
        __version__,
        config.base_url(Plane.DATA),
        config.base_url(Plane.COMMAND),
    )
    create_server(BridgeClient(config)).run()


if __name__ == "__main__":
    main()
