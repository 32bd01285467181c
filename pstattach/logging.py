"""Structured logging for extraction runs, using structlog over stdlib logging."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

import structlog

from pstattach.config.extraction_config import LoggingConfig


def _timestamper(json_output: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.TimeStamper(fmt="iso", utc=True)
    return structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False)


def _renderer(json_output: bool, stream: TextIO) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def setup_logging(
    config: Optional[LoggingConfig] = None,
    *,
    verbose: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Route structlog and stdlib log records to one handler on the root logger.

    Args:
        config: Level and output format (default: LoggingConfig())
        verbose: Log at DEBUG whatever config.level says
        stream: Destination of log lines (default: sys.stderr, leaving
            stdout free for command output)

    Notes:
        - Records from stdlib loggers go through the same timestamp and
          level processors, so library warnings look like our own events
        - Tracebacks are rendered into the JSON line in json_output mode;
          the console renderer prints them itself
    """
    config = config or LoggingConfig()
    stream = stream or sys.stderr
    timestamper = _timestamper(config.json_output)

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        timestamper,
    ]
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        *pre_chain,
        structlog.processors.StackInfoRenderer(),
    ]
    if config.json_output:
        processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(config.json_output, stream),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel("DEBUG" if verbose else config.level)
