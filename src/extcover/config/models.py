"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI options)
2. Environment variables (EXTCOVER__SECTION__KEY)
3. Project YAML (.extcover/config.yaml in the working directory)
4. Global YAML (~/.config/extcover/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    EXTCOVER__<SECTION>__<KEY>=<VALUE>

Examples:
    EXTCOVER__LOGGING__LEVEL=DEBUG
    EXTCOVER__REPORT__OUTPUT_DIR=build/coverage
    EXTCOVER__SOURCE__MODULE_ROOT=/src/myservice
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

DEFAULT_PROFILE_PATH = "coverage.out"
DEFAULT_OUTPUT_FILE = "coverage.json"


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v == "stderr":
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        EXTCOVER__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. INFO traces each pipeline stage, DEBUG each function.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ReportConfig(BaseModel):
    """Input profile and output report locations.

    Env vars:
        EXTCOVER__REPORT__PROFILE_PATH: Coverage profile to read
        EXTCOVER__REPORT__OUTPUT_FILE: Report file name
        EXTCOVER__REPORT__OUTPUT_DIR: Report directory (created if absent)
        EXTCOVER__REPORT__WORKERS: Parallel per-file matching workers
    """

    profile_path: str = Field(
        default=DEFAULT_PROFILE_PATH,
        description="Go coverage profile produced by 'go test -coverprofile'.",
    )
    output_file: str = Field(
        default=DEFAULT_OUTPUT_FILE,
        description="Name of the JSON report file.",
    )
    output_dir: str | None = Field(
        default=None,
        description="Directory for the report. Defaults to the working directory.",
    )
    workers: int = Field(
        default=1,
        description="Per-file matching workers. Results are identical for any value.",
    )

    @field_validator("output_file")
    @classmethod
    def validate_output_file(cls, v: str) -> str:
        if not v or v.endswith(("/", "\\")):
            raise ValueError(f"Output file must be a file name, got {v!r}")
        return v

    @field_validator("workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Workers must be >= 1, got {v}")
        return v


class SourceConfig(BaseModel):
    """Where profiled file identifiers are looked up.

    Env vars:
        EXTCOVER__SOURCE__MODULE_ROOT: Directory holding go.mod
        EXTCOVER__SOURCE__GOPATH: GOPATH override (defaults to $GOPATH)
        EXTCOVER__SOURCE__GOROOT: GOROOT override (defaults to $GOROOT)
    """

    module_root: str | None = Field(
        default=None,
        description="Directory containing go.mod. Default: nearest go.mod above the "
        "working directory.",
    )
    gopath: str | None = Field(
        default_factory=lambda: os.environ.get("GOPATH"),
        description="GOPATH list (os.pathsep separated) searched under src/.",
    )
    goroot: str | None = Field(
        default_factory=lambda: os.environ.get("GOROOT"),
        description="GOROOT searched under src/ for standard library files.",
    )
    search_paths: list[str] = Field(
        default_factory=list,
        description="Extra roots searched for <root>/<import path>.",
    )


class ExtCoverConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
