"""Config module exports."""

from jlcov.config.loader import load_config
from jlcov.config.models import (
    AmendConfig,
    ExclusionMarkers,
    JlcovConfig,
    LcovConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "AmendConfig",
    "ExclusionMarkers",
    "JlcovConfig",
    "LcovConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
