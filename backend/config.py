"""
Model host configuration. All environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import os


class Settings:
    """Host settings from environment variables."""

    # Model document
    MODEL_FILE: str = os.environ.get("APPDNA_MODEL_FILE", "app-dna.json")

    # Optional JSON file of model services listings, keyed by endpoint
    SERVICE_DATA_FILE: str = os.environ.get("APPDNA_SERVICE_DATA_FILE", "")

    # Bridge planes (loopback only)
    HOST: str = os.environ.get("APPDNA_BRIDGE_HOST", "127.0.0.1")
    DATA_PORT: int = int(os.environ.get("APPDNA_DATA_PORT", "3001"))
    COMMAND_PORT: int = int(os.environ.get("APPDNA_COMMAND_PORT", "3002"))

    # Model services login state reported by /api/auth-status
    LOGGED_IN: bool = os.environ.get("APPDNA_LOGGED_IN", "").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.environ.get("APPDNA_LOG_LEVEL", "INFO").upper()


# Singleton instance
settings = Settings()
