from __future__ import annotations

import dataclasses
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from .builder import ClassBuilder


class ScopeKind(str, Enum):
	FILE = "file"
	TYPE = "type"
	METHOD = "method"


@dataclass(frozen=True)
class ScopeFrame:
	"""Parser state saved while a nested type or method body is parsed."""

	kind: ScopeKind
	# Package path of the file, or full name of the enclosing type.
	path: str = ""
	imports: Dict[str, str] = field(default_factory=dict)
	builder: Optional[ClassBuilder] = None
	# Cursor the parent resumes at once this frame is popped.
	resume: int = 0

	@property
	def in_method(self) -> bool:
		return self.kind is ScopeKind.METHOD


class ScopeStack:
	def __init__(self) -> None:
		self._frames: List[ScopeFrame] = []

	def reset(self) -> ScopeFrame:
		"""Drop every frame and start a fresh file scope."""
		self._frames = [ScopeFrame(ScopeKind.FILE)]
		return self._frames[0]

	@property
	def current(self) -> ScopeFrame:
		if not self._frames:
			raise RuntimeError("scope stack is empty")
		return self._frames[-1]

	def push(self, frame: ScopeFrame) -> ScopeFrame:
		self._frames.append(frame)
		return frame

	def pop(self) -> ScopeFrame:
		if len(self._frames) <= 1:
			raise RuntimeError("cannot pop the file scope")
		return self._frames.pop()

	def rebind(self, **changes: Any) -> ScopeFrame:
		"""Replace the current frame with a copy carrying `changes`."""
		frame = dataclasses.replace(self.current, **changes)
		self._frames[-1] = frame
		return frame

	def enclosing_type(self) -> Optional[ScopeFrame]:
		for frame in reversed(self._frames):
			if frame.kind is ScopeKind.TYPE:
				return frame
		return None

	@contextmanager
	def entered(self, frame: ScopeFrame) -> Iterator[ScopeFrame]:
		depth = len(self._frames)
		self.push(frame)
		try:
			yield frame
		finally:
			del self._frames[depth:]

	def __len__(self) -> int:
		return len(self._frames)
