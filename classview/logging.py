"""Structured logging for the parser, batch scanner, CLI and API.

structlog events are routed through stdlib logging so that library users keep
control of handlers. Importing classview never configures structlog; call
configure_logging() to install the stdlib routing.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, List, Optional

import structlog

_LEVEL_MAP = {
	"DEBUG": logging.DEBUG,
	"INFO": logging.INFO,
	"WARN": logging.WARNING,
	"WARNING": logging.WARNING,
	"ERROR": logging.ERROR,
	"CRITICAL": logging.CRITICAL,
}


def configure_logging(*, level: str = "WARNING", json_format: bool = False) -> None:
	"""Configure structlog and install a single stderr handler.

	Args:
		level: Root log level name.
		json_format: Render JSON lines instead of console output.
	"""
	default_level = _LEVEL_MAP.get(level.upper(), logging.WARNING)

	shared_processors: List[Any] = [
		structlog.contextvars.merge_contextvars,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
	]

	structlog.configure(
		processors=[
			structlog.stdlib.filter_by_level,
			*shared_processors,
			structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
		],
		wrapper_class=structlog.stdlib.BoundLogger,
		context_class=dict,
		logger_factory=structlog.stdlib.LoggerFactory(),
		# loggers re-read the configuration on every call
		cache_logger_on_first_use=False,
	)

	if json_format:
		renderer: Any = structlog.processors.JSONRenderer()
	else:
		renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

	handler = logging.StreamHandler(sys.stderr)
	handler.setLevel(default_level)
	handler.setFormatter(
		structlog.stdlib.ProcessorFormatter(
			processor=renderer,
			foreign_pre_chain=shared_processors,
		)
	)

	root_logger = logging.getLogger()
	root_logger.handlers.clear()
	root_logger.setLevel(default_level)
	root_logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> Any:
	# Lazy proxy: the configuration is looked up when an event is logged.
	if name:
		return structlog.get_logger(name)
	return structlog.get_logger()
