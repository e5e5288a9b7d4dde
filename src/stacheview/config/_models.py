"""Configuration models.

This module provides the Pydantic models for stacheview settings.
"""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class ViewsConfig(BaseModel):
    """View resolution configuration section.

    Attributes:
        root: Directory that relative filesystem locations resolve against.
        prefix: Prepended to view, partial and parent names. May carry a
            location scheme, e.g. ``package:myapp/views/`` or an
            ``https://`` base URL.
        suffix: Appended to top-level view names.
        cache: Memoize compiled templates instead of recompiling per request.
        encoding: Character encoding of template files.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    root: str = "."
    prefix: str = ""
    suffix: str = ""
    cache: bool = False
    encoding: str = "utf-8"
