"""
Bridge configuration for the tool runner.

The host serves two loopback planes:
  data     queries and entity mutations        (default port 3001)
  command  host commands, auth status, model   (default port 3002)
           services

Resolution order for every setting:
  1. Environment (APPDNA_BRIDGE_HOST, APPDNA_DATA_PORT, APPDNA_COMMAND_PORT)
  2. Config file ~/.appdna/bridge.json
       {"host": "127.0.0.1", "data_port": 3001, "command_port": 3002}
  3. Defaults

Usage:
  # Point the tools at a host started on other ports
  export APPDNA_DATA_PORT=4001
  export APPDNA_COMMAND_PORT=4002
  appdna-mcp
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_DATA_PORT = 3001
DEFAULT_COMMAND_PORT = 3002

CONFIG_FILE = Path.home() / ".appdna" / "bridge.json"

# Timeouts (seconds) per exchange class.
AUTH_TIMEOUT = 2.0
MUTATION_TIMEOUT = 5.0
SAVE_TIMEOUT = 10.0
CATALOG_TIMEOUT = 30.0
BULK_TIMEOUT = 120.0


class Plane(str, Enum):
    DATA = "data"
    COMMAND = "command"


@dataclass(frozen=True)
class BridgeConfig:
    """Where the host listens. Injected into BridgeClient; never global."""

    host: str = DEFAULT_HOST
    data_port: int = DEFAULT_DATA_PORT
    command_port: int = DEFAULT_COMMAND_PORT

    @classmethod
    def load(cls, config_file: Path | None = None) -> BridgeConfig:
        """Resolve environment -> config file -> defaults."""
        file_data = _read_file(config_file or CONFIG_FILE)

        host = os.environ.get("APPDNA_BRIDGE_HOST") or file_data.get("host") or DEFAULT_HOST
        data_port = _port(os.environ.get("APPDNA_DATA_PORT"), file_data.get("data_port"), DEFAULT_DATA_PORT)
        command_port = _port(
            os.environ.get("APPDNA_COMMAND_PORT"), file_data.get("command_port"), DEFAULT_COMMAND_PORT
        )
        return cls(host=host, data_port=data_port, command_port=command_port)

    def port(self, plane: Plane) -> int:
        return self.data_port if plane == Plane.DATA else self.command_port

    def base_url(self, plane: Plane) -> str:
        return f"http://{self.host}:{self.port(plane)}"


def _read_file(path: Path) -> dict:
    """Config file contents, or {} when missing or unreadable."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable bridge config %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _port(env_value: str | None, file_value, default: int) -> int:
    for value in (env_value, file_value):
        if value in (None, ""):
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid port %r", value)
    return default
