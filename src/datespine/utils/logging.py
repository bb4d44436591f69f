"""
Logging configuration for datespine.

Everything logs under the ``datespine`` logger. Console output goes through
rich's ``RichHandler`` (or a plain stderr handler for schedulers that capture
raw output) and an optional file receives a parseable one-line-per-record
format.
"""

import logging
import sys
import traceback
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "datespine"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_MAP = {name: getattr(logging, name) for name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")}


class FileFormatter(logging.Formatter):
    """``timestamp [LEVEL] logger: message``, followed by the traceback when there is one."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s", datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        if record.exc_info and not record.exc_text:
            line = f"{line}\n{''.join(traceback.format_exception(*record.exc_info))}"
        return line


class PlainFormatter(logging.Formatter):
    """``LEVEL: timestamp - message``; errors also name the source file and line."""

    def __init__(self) -> None:
        super().__init__(datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        prefix = f"{record.levelname}: {self.formatTime(record)}"
        if record.levelno >= logging.ERROR and record.pathname:
            prefix = f"{prefix} - {Path(record.pathname).name}:{record.lineno}"
        return f"{prefix} - {record.getMessage()}"


def _parse_level(level: str | int) -> int:
    """Level name or number; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    return LEVEL_MAP.get(str(level).upper(), logging.INFO)


def _console_handler(level: int, use_rich: bool, console: Console | None, format_string: str | None) -> logging.Handler:
    if use_rich:
        return RichHandler(
            level=level,
            console=console or Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string) if format_string else PlainFormatter())
    return handler


def _file_handler(log_file: str | Path, mode: str) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode=mode)
    # The logger's own level decides what reaches the file
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(FileFormatter())
    return handler


def setup_logging(
    level: str | int = logging.INFO,
    log_file: str | Path | None = None,
    format_string: str | None = None,
    file_mode: str = "a",
    console: Console | None = None,
    console_enabled: bool = True,
    use_rich: bool = True,
) -> logging.Logger:
    """
    (Re)configure the ``datespine`` logger.

    Calling it again replaces the handlers it installed before, so a long
    lived process can switch level or log file between runs.

    Args:
        level: Level name (DEBUG, INFO, ...) or number
        log_file: Also write to this file
        format_string: Format for the plain console handler
        file_mode: ``a`` to append to the log file, ``w`` to truncate it
        console: Rich console to log to (default: stderr)
        console_enabled: Log to the console at all
        use_rich: RichHandler instead of the plain stderr handler

    Returns:
        The ``datespine`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    numeric_level = _parse_level(level)
    logger.setLevel(numeric_level)
    if console_enabled:
        logger.addHandler(_console_handler(numeric_level, use_rich, console, format_string))
    if log_file:
        logger.addHandler(_file_handler(log_file, file_mode))
    return logger


def setup_logging_from_config(
    config: dict[str, Any], project_dir: Path | None = None, console: Console | None = None
) -> logging.Logger:
    """
    Apply the ``logging`` section of config.yaml.

    Keys: ``level``, ``file`` (or ``log_file``), ``file_enabled``,
    ``file_mode``, ``format``, ``console_enabled`` and ``console_type``
    (``rich`` or ``plain``). A relative ``file`` is resolved against
    ``project_dir``.
    """
    section = config.get("logging") or {}

    log_file = None
    if section.get("file_enabled", True):
        log_file = section.get("file") or section.get("log_file")
    if log_file and project_dir is not None and not Path(log_file).is_absolute():
        log_file = Path(project_dir) / log_file

    return setup_logging(
        level=section.get("level", logging.INFO),
        log_file=log_file,
        format_string=section.get("format"),
        file_mode=section.get("file_mode", "a"),
        console=console,
        console_enabled=section.get("console_enabled", True),
        use_rich=section.get("console_type", "rich") == "rich",
    )


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Logger in the ``datespine`` hierarchy, e.g. ``get_logger("datespine.watermark")``."""
    return logging.getLogger(name)
