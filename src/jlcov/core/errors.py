"""jlcov error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Source parsing (amendment)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Parse (3xxx)
    PARSE_ERROR = 3001
    PARSE_NO_PROGRESS = 3002
    PARSE_INCOMPLETE = 3003


@dataclass(frozen=True, slots=True)
class JlcovError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(JlcovError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ParseError(JlcovError):
    """Source text could not be parsed while amending coverage.

    Always carries the filename and the best-known 1-based line.
    """

    @property
    def filename(self) -> str:
        return str(self.details.get("filename", ""))

    @property
    def line(self) -> int | None:
        return self.details.get("line")

    @classmethod
    def at(
        cls,
        filename: str,
        line: int,
        reason: str = "",
        *,
        code: ErrorCode = ErrorCode.PARSE_ERROR,
    ) -> "ParseError":
        message = f"parsing error in {filename}:{line}"
        if reason:
            message = f"{message}: {reason}"
        return cls(
            code=code,
            message=message,
            details={"filename": filename, "line": line, "reason": reason},
        )

    @classmethod
    def no_progress(cls, filename: str, line: int) -> "ParseError":
        return cls.at(filename, line, "parser did not advance", code=ErrorCode.PARSE_NO_PROGRESS)

    @classmethod
    def incomplete(cls, filename: str, line: int) -> "ParseError":
        return cls.at(filename, line, "incomplete expression", code=ErrorCode.PARSE_INCOMPLETE)

