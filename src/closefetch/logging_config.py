import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Any, cast

from loguru import logger
from loguru._defaults import LOGURU_FORMAT

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]

# Standard-library loggers forwarded to Loguru, with their minimum level.
# httpcore is left alone: its DEBUG output is per-socket noise.
INTERCEPTED_LOGGERS: dict[str, int] = {"httpx": logging.INFO}


class InterceptHandler(logging.Handler):
    """Forwards records of a standard-library logger to Loguru.

    httpx reports each request through `logging`; this handler lets those
    lines share the console and file sinks with the rest of the run. The
    originating logger name is kept in the record's `extra`.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip the frames inside `logging` so Loguru reports the httpx caller.
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = cast(Any, frame.f_back)
            depth += 1

        logger.bind(stdlib_logger=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def _format_exception(record: dict[str, Any]) -> str | None:
    """Returns the record's traceback as text, or None when there is none."""
    if not record["exception"]:
        return None
    exc_type, exc_value, exc_tb = record["exception"]
    return "".join(traceback.format_exception(exc_type, exc_value, exc_tb))


def _json_formatter(record: dict[str, Any]) -> str:
    """Custom formatter to structure log records as JSON lines."""
    log_object = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "source": {
            "name": record["name"],
            "file": f"{record['file'].name}:{record['line']}",
            "function": record["function"],
        },
        "exception": _format_exception(record),
        "extra": {k: v for k, v in record["extra"].items() if k != "json"},
    }
    # Loguru formats the returned template again, so the JSON goes via extra.
    record["extra"]["json"] = json.dumps(log_object, default=str)
    return "{extra[json]}\n"


def _intercept_stdlib_loggers() -> None:
    """Routes the loggers in INTERCEPTED_LOGGERS to Loguru, and only those."""
    for name, level in INTERCEPTED_LOGGERS.items():
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.setLevel(level)
        std_logger.propagate = False


def setup_logging(
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    log_dir: Path | None = None,
) -> None:
    """Configures the application-wide Loguru logger.

    This function removes any default handlers, sets up a console sink on
    stderr with a readable format, and an optional daily file sink with
    structured JSON output. It also forwards httpx's standard-library
    logging to Loguru.

    Both levels are checked before any sink is touched, so a bad level
    leaves the previous configuration in place.

    Args:
        console_level: The minimum log level for console output.
        file_level: The minimum log level for file output.
        log_dir: Directory to store log files. If None, file logging is disabled.

    Raises:
        ValueError: If a level is not a known Loguru level.
    """
    for level in (console_level, file_level):
        logger.level(level.upper())

    logger.remove()
    logger.add(
        sys.stderr,
        level=console_level.upper(),
        format=LOGURU_FORMAT,
        colorize=True,
    )

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_dir / "closefetch_{time:YYYY-MM-DD}.log"),
            level=file_level.upper(),
            format=_json_formatter,
            rotation="00:00",  # New file at midnight
            retention="7 days",
            encoding="utf-8",
            backtrace=False,
            diagnose=False,
        )

    _intercept_stdlib_loggers()

    logger.debug("Logging configured successfully.")
