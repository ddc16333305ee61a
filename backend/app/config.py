"""Configuration for the Debug Helper service."""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional


DEFAULT_MAX_INPUT_CHARS = 200_000
DEFAULT_HISTORY_LIMIT = 5
DEFAULT_LOG_LEVEL = "INFO"


@dataclass
class ServiceConfig:
    """Runtime settings shared by the API and the CLI."""

    max_input_chars: int = DEFAULT_MAX_INPUT_CHARS  # larger snippets are rejected with 413
    history_limit: int = DEFAULT_HISTORY_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Create config from environment variables."""
        return cls(
            max_input_chars=int(os.environ.get("DEBUG_HELPER_MAX_INPUT_CHARS", str(DEFAULT_MAX_INPUT_CHARS))),
            history_limit=int(os.environ.get("DEBUG_HELPER_HISTORY_LIMIT", str(DEFAULT_HISTORY_LIMIT))),
            log_level=os.environ.get("DEBUG_HELPER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )


def setup_logging(level: str = DEFAULT_LOG_LEVEL, format_str: Optional[str] = None) -> logging.Logger:
    """
    Setup logging for the service entrypoints.

    Args:
        level: Logging level name (default: INFO)
        format_str: Custom format string

    Returns:
        Configured logger
    """
    if format_str is None:
        format_str = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )

    logger = logging.getLogger("backend")
    logger.setLevel(numeric_level)

    return logger
