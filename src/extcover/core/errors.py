"""go-ext-cover error types with typed error codes.

Error code ranges:
- 1xxx: Profile
- 2xxx: Source
- 3xxx: Output
- 4xxx: Config
- 9xxx: Internal

Every error is fatal for the run: no partial report is ever written.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Profile (1xxx)
    PROFILE_NOT_FOUND = 1001
    PROFILE_PARSE_ERROR = 1002
    PROFILE_INCONSISTENT_BLOCK = 1003

    # Source (2xxx)
    SOURCE_NOT_FOUND = 2001
    SOURCE_PARSE_ERROR = 2002

    # Output (3xxx)
    OUTPUT_WRITE_ERROR = 3001

    # Config (4xxx)
    CONFIG_PARSE_ERROR = 4001
    CONFIG_INVALID_VALUE = 4002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class ExtCoverError(Exception):
    """Base error with structured context for logs and CLI output."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PROFILE_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured log output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ProfileParseError(ExtCoverError):
    """Malformed or unreadable coverage profile."""

    @classmethod
    def not_found(cls, path: str, reason: str) -> "ProfileParseError":
        return cls(
            code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Cannot read coverage profile {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def bad_line(cls, path: str, line_no: int, reason: str) -> "ProfileParseError":
        return cls(
            code=ErrorCode.PROFILE_PARSE_ERROR,
            message=f"{path}:{line_no}: {reason}",
            details={"path": path, "line": line_no, "reason": reason},
        )

    @classmethod
    def inconsistent_block(cls, path: str, line_no: int, file_name: str) -> "ProfileParseError":
        return cls(
            code=ErrorCode.PROFILE_INCONSISTENT_BLOCK,
            message=f"{path}:{line_no}: inconsistent NumStmt for duplicate block in {file_name}",
            details={"path": path, "line": line_no, "file": file_name},
        )


class SourceResolutionError(ExtCoverError):
    """A file named in the profile cannot be located in the source tree."""

    @classmethod
    def not_found(cls, name: str, candidates: list[str]) -> "SourceResolutionError":
        return cls(
            code=ErrorCode.SOURCE_NOT_FOUND,
            message=f"can't find {name!r} (tried {len(candidates)} locations)",
            details={"file": name, "candidates": candidates},
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "SourceResolutionError":
        return cls(
            code=ErrorCode.SOURCE_NOT_FOUND,
            message=f"Cannot read source file {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class SourceParseError(ExtCoverError):
    """A located source file is not syntactically valid."""

    @classmethod
    def syntax(cls, path: str, line: int, column: int) -> "SourceParseError":
        return cls(
            code=ErrorCode.SOURCE_PARSE_ERROR,
            message=f"{path}:{line}:{column}: syntax error",
            details={"path": path, "line": line, "column": column},
        )


class OutputWriteError(ExtCoverError):
    """The report directory or file cannot be written."""

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "OutputWriteError":
        return cls(
            code=ErrorCode.OUTPUT_WRITE_ERROR,
            message=f"Failed to write coverage report to {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ConfigError(ExtCoverError):
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


class InternalError(ExtCoverError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
