from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import typer

_LOGGING_CONFIGURED = False


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure CLI-wide logging once.

    Sets up basic logging configuration for the CLI. Safe to call multiple
    times; only configures on first call. Later calls only adjust the root
    level, so ``--verbose`` can lower it after import-time setup.

    Args:
        level: Logging level (defaults to WARNING).

    Side Effects:
        - Configures Python logging module globally.
        - Sets module-level flag to prevent reconfiguration.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        logging.getLogger().setLevel(level)
        return

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    _LOGGING_CONFIGURED = True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger hooked into the shared CLI configuration."""
    return logging.getLogger(name)


def _message(color: str, message: str, *params: Any) -> None:
    typer.secho(message % params if params else message, fg=color, bold=True, err=True)


def error_message(message: str, *params: Any) -> None:
    """Print a bold red message to stderr, ``%``-formatted with ``params``."""
    _message(typer.colors.RED, message, *params)


def warning_message(message: str, *params: Any) -> None:
    """Print a bold yellow message to stderr, ``%``-formatted with ``params``."""
    _message(typer.colors.YELLOW, message, *params)


@contextmanager
def handle_errors(
    operation: str,
    *,
    logger: logging.Logger | None = None,
) -> Generator[None, None, None]:
    """Provide consistent exception handling for CLI operations.

    Context manager that catches exceptions, logs them, displays user-friendly
    error messages, and exits with code 1. Re-raises typer.Exit to allow
    normal CLI exit flow.

    Args:
        operation: Human-readable operation name for error messages.
        logger: Logger instance. Defaults to module logger if None.

    Raises:
        typer.Exit: Always exits with code 1 on exception (except typer.Exit
            which is re-raised).

    Logs:
        - DEBUG: "Error during {operation}" with full exception traceback.

    User Output:
        - Prints "✗ {operation} failed: {exc}" in red via error_message().
    """
    logger = logger or get_logger(__name__)
    try:
        yield
    except typer.Exit:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.debug("Error during %s", operation, exc_info=True)
        error_message("✗ %s failed: %s", operation, exc)
        raise typer.Exit(1) from exc
