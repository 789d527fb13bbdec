"""
Redis-Mock Configuration Settings

This module contains the configuration defaults for mock connections.
Every value can be overridden per connection through constructor keywords.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == "true"


@dataclass
class Settings:
    """Mock connection configuration settings."""

    # Reply settings
    DECODE_RESPONSES: bool = _env_flag("REDISMOCK_DECODE_RESPONSES", "true")
    ENCODING: str = os.environ.get("REDISMOCK_ENCODING", "utf-8")

    # Pipelining settings
    RECEIVE_WAIT: bool = _env_flag("REDISMOCK_RECEIVE_WAIT", "false")

    # Logging settings
    DEBUG: bool = _env_flag("REDISMOCK_DEBUG", "false")
    LOG_LEVEL: str = os.environ.get("REDISMOCK_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()
