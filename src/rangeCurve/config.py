"""Configuration management for rangeCurve using Pydantic Settings."""

from __future__ import annotations

import logging
import sys
from enum import Enum
from functools import lru_cache
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class SampleFormat(str, Enum):
    """Supported file formats for curve samples."""

    CSV = "csv"
    JSON = "json"


class LoaderSettings(BaseModel):
    """How curve samples are read from files."""

    model_config = ConfigDict(extra="ignore")

    format: SampleFormat | None = Field(
        default=None, description="Sample file format; None detects it from the file suffix."
    )
    x_column: str = Field(default="x", min_length=1, description="CSV column holding x values.")
    y_column: str = Field(default="y", min_length=1, description="CSV column holding y values.")
    delimiter: str = Field(default=",", min_length=1, max_length=1, description="CSV delimiter.")
    gap_tokens: tuple[str, ...] = Field(
        default=("", "nan", "na", "null", "none"),
        description="Cell values (case-insensitive) read as a missing y value.",
    )

    @field_validator("gap_tokens")
    @classmethod
    def _normalize_gap_tokens(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Ensure gap tokens are stripped and lowercase."""
        return tuple(dict.fromkeys(token.strip().lower() for token in value))

    def is_gap(self, cell: str | None) -> bool:
        """Return True if a raw cell denotes a missing value."""
        if cell is None:
            return True
        return cell.strip().lower() in self.gap_tokens


class OutputSettings(BaseModel):
    """Text rendering of query results."""

    model_config = ConfigDict(extra="ignore")

    precision: int = Field(
        default=10, ge=1, le=17, description="Significant digits printed for each number."
    )
    empty_marker: str = Field(
        default="empty", min_length=1, description="Printed in place of min/max for empty results."
    )

    def format_number(self, value: float) -> str:
        return f"{value:.{self.precision}g}"


class LoggingSettings(BaseModel):
    """
    Logging for one ``range-curve`` run.

    Records go to a small rotating log file that is only created once something
    is logged. Console output is off by default and goes to stderr, so it never
    mixes with query results on stdout.
    """

    model_config = ConfigDict(extra="ignore")

    level: str = Field(default="INFO", description="Root logger level.")
    fmt: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Logging format string.",
    )
    datefmt: str = Field(default="%Y-%m-%d %H:%M:%S", description="Datetime format used in logs.")
    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory for the log file, relative to the working directory.",
    )
    file_name: str = Field(default="range_curve.log", description="Log file name.")
    max_bytes: int = Field(
        default=1024 * 1024, gt=0, description="Log file size (bytes) that triggers rotation."
    )
    backup_count: int = Field(default=2, ge=0, description="Rotated log files kept.")
    console_enabled: bool = Field(default=False, description="Also log to stderr.")
    console_level: str | None = Field(default=None, description="Level for stderr logging.")
    file_level: str | None = Field(default=None, description="Level for the log file.")
    propagate: bool = Field(
        default=True, description="Propagation for loggers listed in ``loggers``."
    )
    loggers: dict[str, str] = Field(
        default_factory=dict,
        description="Per-logger level overrides (name -> level).",
    )

    @field_validator("level", "console_level", "file_level")
    @classmethod
    def _known_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if not isinstance(logging.getLevelName(value.upper()), int):
            msg = f"Unknown logging level: {value}"
            raise ValueError(msg)
        return value.upper()

    @property
    def log_file(self) -> Path:
        log_dir = self.log_dir if self.log_dir.is_absolute() else Path.cwd() / self.log_dir
        return log_dir.resolve() / self.file_name


class AppSettings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="RANGE_CURVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    loader: LoaderSettings = Field(default_factory=LoaderSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class StderrStreamHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stderr`` is at emit time."""

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr
        super().emit(record)


_LOGGING_CONFIGURED = False
_ACTIVE_LOGGING_SETTINGS: LoggingSettings | None = None
_INSTALLED_HANDLERS: list[logging.Handler] = []


def _file_handler(logging_settings: LoggingSettings) -> RotatingFileHandler:
    log_file = logging_settings.log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        log_file,
        maxBytes=logging_settings.max_bytes,
        backupCount=logging_settings.backup_count,
        encoding="utf-8",
        delay=True,
    )


def configure_logging(logging_settings: LoggingSettings | None = None) -> LoggingSettings:
    """
    Attach the run's log handlers to the root logger.

    Only the first call has an effect; later calls return the settings already
    applied until :func:`reset_logging` is called. Without arguments the
    ``logging`` section of :func:`get_settings` is used.

    Handlers already on the root logger (e.g. installed by a test runner) are
    left in place.

    Returns
    -------
    LoggingSettings
        The logging configuration in effect.

    """
    global _LOGGING_CONFIGURED
    global _ACTIVE_LOGGING_SETTINGS

    if _LOGGING_CONFIGURED:
        assert _ACTIVE_LOGGING_SETTINGS is not None
        return _ACTIVE_LOGGING_SETTINGS

    if logging_settings is None:
        logging_settings = get_settings().logging

    handlers: list[tuple[logging.Handler, str | None]] = [
        (_file_handler(logging_settings), logging_settings.file_level)
    ]
    if logging_settings.console_enabled:
        handlers.append((StderrStreamHandler(), logging_settings.console_level))

    formatter = logging.Formatter(logging_settings.fmt, logging_settings.datefmt)
    root_logger = logging.getLogger()
    root_logger.setLevel(logging_settings.level)
    for handler, level in handlers:
        handler.setLevel(level or logging_settings.level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _INSTALLED_HANDLERS.append(handler)

    for name, level in logging_settings.loggers.items():
        named_logger = logging.getLogger(name)
        named_logger.setLevel(level.upper())
        named_logger.propagate = logging_settings.propagate

    _ACTIVE_LOGGING_SETTINGS = logging_settings
    _LOGGING_CONFIGURED = True
    return logging_settings


def reset_logging() -> None:
    """Remove the handlers installed by :func:`configure_logging` and allow reconfiguration."""
    global _LOGGING_CONFIGURED
    global _ACTIVE_LOGGING_SETTINGS

    if not _LOGGING_CONFIGURED:
        return
    root_logger = logging.getLogger()
    while _INSTALLED_HANDLERS:
        handler = _INSTALLED_HANDLERS.pop()
        root_logger.removeHandler(handler)
        handler.close()
    _ACTIVE_LOGGING_SETTINGS = None
    _LOGGING_CONFIGURED = False


@lru_cache
def get_settings(**overrides: object) -> AppSettings:
    """Return a cached instance of application settings."""
    return AppSettings(**overrides)


# Global settings instance
settings = get_settings()
