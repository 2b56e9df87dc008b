"""Core module exports."""

from extcover.core.errors import (
    ConfigError,
    ErrorCode,
    ExtCoverError,
    InternalError,
    OutputWriteError,
    ProfileParseError,
    SourceParseError,
    SourceResolutionError,
)
from extcover.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from extcover.core.progress import pluralize, spinner, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "ExtCoverError",
    "InternalError",
    "OutputWriteError",
    "ProfileParseError",
    "SourceParseError",
    "SourceResolutionError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "pluralize",
    "spinner",
    "status",
]
