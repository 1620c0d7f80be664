"""Structured logging setup for Blockmark.

Blockmark is used both as a library and as a command line tool. Until an
application calls configure_logging() (the CLI does so on every command),
loggers fall back to a quiet default: warnings and errors only, written to
stderr, so rendering never writes to stdout.
"""

import os
import sys
from pathlib import Path
from typing import IO, Any, Optional

import structlog


VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

# Log file opened by the last configure_logging() call
_log_handle: Optional[IO[str]] = None
_log_path: Optional[Path] = None


def default_log_file() -> Path:
    """Location of the log file: ~/.cache/blockmark/logs/blockmark.log."""
    return Path.home() / ".cache" / "blockmark" / "logs" / "blockmark.log"


def install_default_logging() -> None:
    """Route log events to stderr at WARNING level.

    Does nothing if structlog has already been configured, by
    configure_logging() or by the application embedding Blockmark.
    """
    if structlog.is_configured():
        return

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger("WARNING"),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # sys.stderr is looked up per logger; it may be replaced after import
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(log_file: Optional[Path] = None, level: Optional[str] = None) -> None:
    """
    Configure structlog for JSON logging to ~/.cache/blockmark/logs/blockmark.log.

    Log level can be controlled via BLOCKMARK_LOG_LEVEL environment variable:
    - Set to "DEBUG" to see every block renderer lookup
    - Defaults to "INFO" if not set

    Log levels:
    - DEBUG: Missing renderers, per-document render details
    - INFO: Config loading, renderer builds, documents rendered
    - WARNING: Blocks omitted because no renderer exists
    - ERROR: Render failures, invalid configuration

    Calling it again switches to the new file and closes the previous one.

    Args:
        log_file: Override for the log file location
        level: Override for the log level (takes precedence over the environment)

    Example:
        # Enable debug logging
        BLOCKMARK_LOG_LEVEL=DEBUG blockmark render page.json

        # View logs with jq for readability:
        tail -f ~/.cache/blockmark/logs/blockmark.log | jq .
    """
    global _log_handle, _log_path

    if log_file is None:
        log_file = default_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    log_level = (level or os.environ.get("BLOCKMARK_LOG_LEVEL", "INFO")).upper()
    if log_level not in VALID_LEVELS:
        log_level = "INFO"

    if _log_handle is None or _log_handle.closed or _log_path != log_file:
        if _log_handle is not None and not _log_handle.closed:
            _log_handle.close()
        _log_handle = open(log_file, "a", encoding="utf-8")
        _log_path = log_file

    # Loggers are not cached, so none of them keeps a closed file
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=_log_handle),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Installs the quiet default configuration if logging has not been
    configured yet.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Structured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("document_rendered", flavor="html", blocks=12)
    """
    install_default_logging()
    return structlog.get_logger(name)
