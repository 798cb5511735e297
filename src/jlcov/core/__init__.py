"""Core module exports."""

from jlcov.core.errors import (
    ConfigError,
    ErrorCode,
    JlcovError,
    ParseError,
)
from jlcov.core.logging import (
    bind_file,
    configure_logging,
    get_logger,
    unbind_file,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "JlcovError",
    "ParseError",
    # Logging
    "bind_file",
    "configure_logging",
    "get_logger",
    "unbind_file",
]
