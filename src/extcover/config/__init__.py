"""Config module exports."""

from extcover.config.loader import ExtCoverSettings, load_config
from extcover.config.models import (
    ExtCoverConfig,
    LoggingConfig,
    LogOutputConfig,
    ReportConfig,
    SourceConfig,
)

__all__ = [
    "load_config",
    "ExtCoverConfig",
    "ExtCoverSettings",
    "LoggingConfig",
    "LogOutputConfig",
    "ReportConfig",
    "SourceConfig",
]
