"""Error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Source input
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict


class ErrorCode(IntEnum):
	"""Typed error codes for programmatic handling."""

	# Config (2xxx)
	CONFIG_INVALID_VALUE = 2002

	# Source input (3xxx)
	SOURCE_NOT_FOUND = 3001
	SOURCE_READ_FAILED = 3002


@dataclass(eq=False)
class ClassviewError(Exception):
	"""Base error with structured context for CLI and API responses."""

	code: ErrorCode
	message: str
	details: Dict[str, Any] = field(default_factory=dict)

	@property
	def error_name(self) -> str:
		return self.code.name

	def to_dict(self) -> Dict[str, Any]:
		return {
			"code": self.code.value,
			"error": self.error_name,
			"message": self.message,
			"details": self.details,
		}

	def __str__(self) -> str:
		return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ClassviewError):
	"""Configuration-related errors."""

	@classmethod
	def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
		return cls(
			code=ErrorCode.CONFIG_INVALID_VALUE,
			message=f"Invalid value for '{field}': {reason}",
			details={"field": field, "value": str(value), "reason": reason},
		)


class SourceError(ClassviewError):
	"""A source file or directory could not be read."""

	@property
	def path(self) -> str:
		return str(self.details.get("path", ""))

	@property
	def reason(self) -> str:
		return str(self.details.get("reason", self.message))

	@classmethod
	def not_found(cls, path: str) -> "SourceError":
		return cls(
			code=ErrorCode.SOURCE_NOT_FOUND,
			message=f"Source path not found: {path}",
			details={"path": path, "reason": "not found"},
		)

	@classmethod
	def read_failed(cls, path: str, reason: str) -> "SourceError":
		return cls(
			code=ErrorCode.SOURCE_READ_FAILED,
			message=f"Failed to read {path}: {reason}",
			details={"path": path, "reason": reason},
		)
