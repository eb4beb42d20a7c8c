"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

import structlog


def configure_logging(
    level: int = logging.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> None:
    """Configure structured logging for the application.

    Sets up structlog with JSON or console output and standard processors
    for timestamps, log levels, and context binding.

    Args:
        level: Logging level (default: INFO).
        output: Output stream (default: current stderr).
        json_format: Whether to use JSON format (default: True).
    """
    stream = output if output is not None else sys.stderr

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    # Loggers are bound at client construction; caching them would pin the
    # first configuration for the rest of the process.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )

    # httpx logs every request through the standard library at INFO
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=max(level, logging.WARNING),
    )


def get_logger(component: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a logger, bound to a component name when one is given.

    Args:
        component: Component name such as ``fetch`` or ``media``.

    Returns:
        Bound logger instance.
    """
    logger: structlog.typing.FilteringBoundLogger = structlog.get_logger()
    if component is None:
        return logger
    return logger.bind(component=component)


def bind_command_context(command: str, mode: str) -> None:
    """Bind CLI command context to all subsequent log messages.

    Args:
        command: CLI command name.
        mode: Runtime mode the command runs in.
    """
    structlog.contextvars.bind_contextvars(command=command, mode=mode)


def clear_command_context() -> None:
    """Clear CLI command context from log messages."""
    structlog.contextvars.unbind_contextvars("command", "mode")
