"""Configuration loading with pydantic-settings.

Precedence (highest first):
1. Direct kwargs to load_settings()
2. Environment variables (CLASSVIEW_<KEY>)
3. Built-in defaults (this file)

Examples:
    CLASSVIEW_LOG_LEVEL=DEBUG
    CLASSVIEW_SOURCE_SUFFIXES='[".java", ".jav"]'
    CLASSVIEW_PORT=8080
"""

from __future__ import annotations

from typing import Any, Literal, Tuple

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ClassviewSettings(BaseSettings):
	model_config = SettingsConfigDict(
		env_prefix="CLASSVIEW_",
		case_sensitive=False,
	)

	log_level: LogLevel = Field(default="WARNING", description="Root log level.")
	log_format: Literal["console", "json"] = "console"
	source_suffixes: Tuple[str, ...] = Field(
		default=(".java",),
		description="File suffixes picked up when a directory is walked.",
	)
	ignore_dirs: Tuple[str, ...] = (".git", ".svn", ".idea", "node_modules", "build", "target", "out")
	encoding: str = "utf-8"
	host: str = "127.0.0.1"
	port: int = Field(default=8000, ge=0, le=65535)

	@field_validator("log_level", mode="before")
	@classmethod
	def _upper_level(cls, v: Any) -> Any:
		return v.upper() if isinstance(v, str) else v

	@field_validator("source_suffixes")
	@classmethod
	def _normalize_suffixes(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
		suffixes = []
		for suffix in v:
			suffix = suffix.strip().lower()
			if not suffix:
				continue
			suffixes.append(suffix if suffix.startswith(".") else "." + suffix)
		if not suffixes:
			raise ValueError("at least one source suffix is required")
		return tuple(suffixes)


def load_settings(**overrides: Any) -> ClassviewSettings:
	"""Load settings: defaults < env vars < kwargs."""
	try:
		return ClassviewSettings(**overrides)
	except ValidationError as e:
		first = e.errors()[0]
		field = ".".join(str(part) for part in first.get("loc", ())) or "settings"
		raise ConfigError.invalid_value(field, first.get("input"), first.get("msg", str(e))) from e
