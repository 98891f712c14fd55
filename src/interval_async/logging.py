"""Logging configuration for applications using interval_async.

The library itself only emits records through module loggers. Applications
that want them on a console can call configure_logging() once at startup.

Logging Levels:
- DEBUG: Handle lifecycle (started, stopped), config loading
- WARNING: Handler failures, when observers.log_failure is wired in
- ERROR: A failure observer raised
"""

import logging
import os

LOG_LEVEL_ENV_VAR = "INTERVAL_ASYNC_LOG_LEVEL"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - interval_async.scheduler -> scheduler
    - interval_async.observers -> observers
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "interval_async":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return super().format(record)


def resolve_level(level: str | None = None) -> int:
    """Resolve a log level name, falling back to the env var, then INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    level = level.upper()
    if level not in VALID_LEVELS:
        level = "INFO"
    return getattr(logging, level)


def configure_logging(level: str | None = None, use_rich: bool = False) -> None:
    """Configure console logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses INTERVAL_ASYNC_LOG_LEVEL env var or INFO.
        use_rich: Use Rich handler for colorful output.
    """
    log_level = resolve_level(level)

    if use_rich:
        from rich.logging import RichHandler

        console_handler: logging.Handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=True,
        )
        console_handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(component)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(
        level=log_level,
        handlers=[console_handler],
        force=True,
    )
