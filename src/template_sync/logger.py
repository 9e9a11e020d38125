import json
import logging
import os
import sys

from .config_schema import LoggingConfig


class JsonFormatter(logging.Formatter):
    """Single-line JSON formatter for structured debug output.

    Produces one JSON object per log record with fields: ts, level, logger, msg.
    Exception info is included as an "exc" field when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _make_formatter(debug_format: str, with_name: bool) -> logging.Formatter:
    if debug_format == "json":
        return JsonFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    fmt = (
        "[%(asctime)s] [%(levelname)s] %(name)s %(message)s"
        if with_name
        else "[%(asctime)s] [%(levelname)s] %(message)s"
    )
    return logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    debug: bool = False,
    log_file: str | None = None,
    debug_format: str = "text",
    level: str | None = None,
) -> None:
    """
    Configure logging for the host process.

    Logs always go to stderr so they never mix with generated output; a
    log file can be added alongside.

    Args:
        debug: If True, overrides the level to DEBUG.
        log_file: Optional log file path (also written to stderr).
        debug_format: "text" (default) or "json" for structured output.
        level: Level name from configuration, used when the
            TEMPLATE_SYNC_LOG_LEVEL environment variable is unset.

    Environment variables:
        TEMPLATE_SYNC_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR).
                                 Default: INFO.
    """
    env_level = os.getenv(
        "TEMPLATE_SYNC_LOG_LEVEL", level or "INFO"
    ).upper()

    if debug:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, env_level, logging.INFO)

    handlers: list[logging.Handler] = []
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(_make_formatter(debug_format, False))
    handlers.append(stderr_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(_make_formatter(debug_format, True))
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
    )

    # Silence third-party libs unless DEBUG
    if log_level != logging.DEBUG:
        logging.getLogger("charset_normalizer").setLevel(logging.WARNING)


def setup_logging_from_config(
    config: LoggingConfig, debug: bool = False, debug_format: str = "text"
) -> None:
    """Configure logging from the ``logging`` section of the config."""
    setup_logging(
        debug=debug,
        log_file=config.file,
        debug_format=debug_format,
        level=config.level,
    )
