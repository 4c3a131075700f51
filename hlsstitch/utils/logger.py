"""Setup the logger functionality."""

import logging
from logging import FileHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, field_validator
from rich.console import Console
from rich.highlighter import NullHighlighter
from rich.logging import RichHandler
from rich.theme import Theme

LOG_LEVELS = [
    "TRACE",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

SIMPLE_LOG_FORMAT = "%(levelname)s:%(message)s"
SIMPLE_LOG_FORMAT_DEBUG = "%(levelname)s:%(name)s:%(message)s"
TRACE_LEVEL_NUM = 5

MIN_LOG_LEVEL_INT = 0
MAX_LOG_LEVEL_INT = 50

FILE_HANDLER_MAX_BYTES = 1000000  # 1MB
FILE_HANDLER_BACKUP_COUNT = 3

# Third party loggers that are too chatty at our level
_QUIET_LOGGERS = {
    "aiohttp.access": logging.WARNING,
    "asyncio": logging.WARNING,
    "python_multipart": logging.WARNING,
    "watchfiles": logging.WARNING,
}


def _normalise_level(level: str | int) -> str | int:
    """Upper-case named levels, fall back to INFO for anything we can't use."""
    if isinstance(level, int):
        if MIN_LOG_LEVEL_INT <= level <= MAX_LOG_LEVEL_INT:
            return level
        logger.warning(
            "Invalid logging level %s, must be between %s and %s, using INFO",
            level,
            MIN_LOG_LEVEL_INT,
            MAX_LOG_LEVEL_INT,
        )
        return "INFO"

    level = level.strip().upper()
    if level in LOG_LEVELS:
        return level

    logger.warning("Invalid logging level '%s', must be one of %s, using INFO", level, ", ".join(LOG_LEVELS))
    return "INFO"


class LoggingConf(BaseModel):
    """Logging configuration definition."""

    level: str | int = "INFO"
    level_http: str | int = "WARNING"
    path: Path | None = None
    simple: bool = False

    @field_validator("level", "level_http", mode="after")
    @classmethod
    def validate_level(cls, value: str | int) -> str | int:
        """Both levels accept a name or a number."""
        return _normalise_level(value)

    @field_validator("path", mode="before")
    @classmethod
    def validate_path(cls, value: str | Path | None) -> Path | None:
        """Blank paths mean no file logging."""
        if isinstance(value, str):
            value = value.strip() or None

        return Path(value) if value is not None else None

    def setup_verbosity_cli(self, verbosity: int) -> None:
        """Map a -v count to a level, -vv and up is trace."""
        levels = [logging.INFO, logging.DEBUG]
        verbosity = max(verbosity, 0)
        self.level = levels[verbosity] if verbosity < len(levels) else TRACE_LEVEL_NUM


class CustomLogger(logging.Logger):
    """Logger with a trace level, keeps mypy happy."""

    def trace(self, message: Any, *args: Any, **kws: Any) -> None:  # noqa: ANN401 Logging handles this
        """Log at trace level."""
        if self.isEnabledFor(TRACE_LEVEL_NUM):
            self._log(TRACE_LEVEL_NUM, message, args, **kws)


logging.addLevelName(TRACE_LEVEL_NUM, "TRACE")
logging.setLoggerClass(CustomLogger)

# Not using get_logger() so this can sit above it
logger = cast("CustomLogger", logging.getLogger(__name__))


def setup_logger(
    settings: LoggingConf | None = None,
    in_logger: logging.Logger | str | None = None,
) -> None:
    """Setup the logger, set configuration per logging_config."""
    if settings is None:
        settings = LoggingConf()

    if isinstance(in_logger, str):
        in_logger = logging.getLogger(in_logger)

    if not in_logger:  # in_logger should only be passed in by PyTest.
        in_logger = logging.getLogger()

    if not any(isinstance(handler, (RichHandler, StreamHandler)) for handler in in_logger.handlers):
        _add_console_handler(settings, in_logger)

    _set_log_level(settings.level, in_logger)

    if not any(isinstance(handler, FileHandler) for handler in in_logger.handlers) and settings.path:
        _add_file_handler(in_logger, settings.path)

    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    access_logger = logging.getLogger("uvicorn.access")
    access_logger.propagate = False
    _set_log_level(settings.level_http, access_logger)

    logger.debug("Logger configuration set!")


def get_logger(name: str) -> CustomLogger:
    """Get a logger with the name provided."""
    return cast("CustomLogger", logging.getLogger(name))


def _add_console_handler(
    settings: LoggingConf,
    in_logger: logging.Logger,
) -> None:
    """Add a rich console handler, or a plain one when simple logging is set."""
    handler: logging.Handler
    if settings.simple:
        handler = StreamHandler()
        verbose = _get_log_level_int(settings.level) <= TRACE_LEVEL_NUM
        handler.setFormatter(logging.Formatter(SIMPLE_LOG_FORMAT_DEBUG if verbose else SIMPLE_LOG_FORMAT))
    else:
        handler = RichHandler(
            console=Console(theme=Theme({"logging.level.trace": "dim"})),
            show_time=False,
            rich_tracebacks=True,
            highlighter=NullHighlighter(),
        )

    in_logger.addHandler(handler)


def _get_log_level_int(level: str | int) -> int:
    """Get the log level as an int, TRACE included."""
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def _set_log_level(level: str | int, in_logger: logging.Logger) -> None:
    """Set the log level of the logger."""
    if isinstance(level, str):
        level = level.upper()
        if level not in LOG_LEVELS:
            in_logger.setLevel("INFO")
            logger.warning("Invalid logging level: %s, defaulting to INFO", level)
            return

    in_logger.setLevel(level)
    logger.debug("Set log level of '%s': %s", in_logger.name, level)


def _add_file_handler(in_logger: logging.Logger, log_path: Path) -> None:
    """Add a file handler to the logger."""
    try:
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=FILE_HANDLER_MAX_BYTES,
            backupCount=FILE_HANDLER_BACKUP_COUNT,
        )
    except IsADirectoryError as exc:
        err = "You are trying to log to a directory, try a file"
        raise IsADirectoryError(err) from exc
    except PermissionError as exc:
        err = "The user running this does not have access to the file: " + str(log_path.resolve())
        raise PermissionError(err) from exc

    formatter = logging.Formatter(SIMPLE_LOG_FORMAT_DEBUG)
    file_handler.setFormatter(formatter)
    in_logger.addHandler(file_handler)
    logger.info("Logging to file: %s", log_path)
