"""
Logging configuration utilities for permshell.

Configures the global structured logger either from a loaded ShellConfig
or straight from the PERMSHELL_LOG_* environment variables.

Usage:
    from permshell.logging_config import configure_from_config

    configure_from_config(load_config(root))
"""

import os
from typing import Optional

from .config import ShellConfig
from .logger import configure_logger, get_logger


def configure_from_config(config: ShellConfig) -> None:
    """Configure the logger from the loaded shell configuration."""
    configure_logger(
        enabled=config.log_enabled,
        level=config.log_level,
        log_directory=config.log_directory or None,
    )
    get_logger().info("logging", "configured", {
        "level": config.log_level,
        "directory": config.log_directory,
    })


def configure_from_environment() -> None:
    """Configure logger from environment variables.

    Environment variables:
        PERMSHELL_LOG_ENABLED: '0', '1', 'true', 'false'
        PERMSHELL_LOG_LEVEL: 'ERROR', 'WARN', 'INFO', 'DEBUG', 'TRACE'
        PERMSHELL_LOG_DIR: Path to log directory
        PERMSHELL_SESSION_ID: Session ID for correlation
    """
    enabled = _parse_bool(os.environ.get("PERMSHELL_LOG_ENABLED"), True)
    level = os.environ.get("PERMSHELL_LOG_LEVEL", "INFO")
    log_dir = os.environ.get("PERMSHELL_LOG_DIR")
    session_id = os.environ.get("PERMSHELL_SESSION_ID")

    configure_logger(
        enabled=enabled,
        level=level,
        log_directory=log_dir or None,
        session_id=session_id,
    )


def _parse_bool(value: Optional[str], default: bool) -> bool:
    """Parse string to boolean."""
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


__all__ = ["configure_from_config", "configure_from_environment"]
