"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (JLCOV__SECTION__KEY)
3. Repo YAML (.jlcov.yaml)
4. Global YAML (~/.config/jlcov/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    JLCOV__<SECTION>__<KEY>=<VALUE>

Examples:
    JLCOV__LOGGING__LEVEL=DEBUG
    JLCOV__AMEND__ENABLED=false
    JLCOV__AMEND__DEFAULT_SYNTAX_VERSION=1.10
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from jlcov.config.constants import (
    DEFAULT_SYNTAX_VERSION,
    EXCLUDE_LINE_MARKER,
    EXCLUDE_START_MARKER,
    EXCLUDE_STOP_MARKER,
    LCOV_TRACE_SUFFIX,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        JLCOV__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG lists every skipped file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ExclusionMarkers(BaseModel):
    """Comment tokens that force lines out of coverage accounting."""

    start: str = Field(default=EXCLUDE_START_MARKER, min_length=1)
    stop: str = Field(default=EXCLUDE_STOP_MARKER, min_length=1)
    line: str = Field(default=EXCLUDE_LINE_MARKER, min_length=1)


class AmendConfig(BaseModel):
    """Source amendment configuration.

    Env vars:
        JLCOV__AMEND__ENABLED: Reclassify never-compiled function lines to 0
        JLCOV__AMEND__DEFAULT_SYNTAX_VERSION: Fallback Julia syntax version
    """

    enabled: bool = Field(
        default=True,
        description="Mark lines inside never-compiled functions as 0 instead of null. "
        "Disabling reports only what the runtime compiled.",
    )
    default_syntax_version: str = Field(
        default=DEFAULT_SYNTAX_VERSION,
        description="Syntax version used when no project or VERSION file pins one.",
    )
    markers: ExclusionMarkers = Field(default_factory=ExclusionMarkers)

    @field_validator("default_syntax_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        major, _, minor = v.partition(".")
        if not (major.isdigit() and minor.isdigit()):
            raise ValueError(f"Syntax version must look like MAJOR.MINOR, got {v!r}")
        return v


class LcovConfig(BaseModel):
    """LCOV trace configuration.

    Env vars:
        JLCOV__LCOV__TRACE_SUFFIX: Suffix of trace files read from folders
    """

    trace_suffix: str = Field(
        default=LCOV_TRACE_SUFFIX,
        description="Files with this suffix are read by readfolder.",
    )


class JlcovConfig(BaseModel):
    """Root configuration for jlcov.

    All settings can be configured via:
    1. Environment variables: JLCOV__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    amend: AmendConfig = Field(default_factory=AmendConfig)
    lcov: LcovConfig = Field(default_factory=LcovConfig)
