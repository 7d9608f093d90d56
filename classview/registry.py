from __future__ import annotations

import re
from typing import Dict, Iterator, List, Optional

from .logging import get_logger
from .model import ClassRecord, qualify

log = get_logger(__name__)

_TYPE_SUFFIX = re.compile(r"(\[\]|\.\.\.)+$")


def base_type_name(type_name: Optional[str]) -> Optional[str]:
	"""Reduce a declared type to the name that can be looked up.

	``Map<String, Foo>`` gives ``Map``, ``Foo[]`` and ``Foo...`` give ``Foo``.
	"""
	if not type_name:
		return None
	name = type_name.split("<", 1)[0]
	name = _TYPE_SUFFIX.sub("", name.strip())
	return name or None


class ClassRegistry:
	"""Append-only store of finished records keyed by full name."""

	def __init__(self) -> None:
		self._records: Dict[str, ClassRecord] = {}

	def add(self, record: ClassRecord) -> bool:
		"""Register `record`. The first record registered under a name wins."""
		full_name = record.full_name
		existing = self._records.get(full_name)
		if existing is not None:
			log.warning(
				"duplicate_type_ignored",
				full_name=full_name,
				source=record.source,
				first_source=existing.source,
			)
			return False
		self._records[full_name] = record
		log.debug("type_registered", full_name=full_name, kind=record.kind, source=record.source)
		return True

	def get(self, full_name: Optional[str]) -> Optional[ClassRecord]:
		if not full_name:
			return None
		return self._records.get(full_name)

	def records(self) -> List[ClassRecord]:
		return list(self._records.values())

	def __contains__(self, full_name: object) -> bool:
		return full_name in self._records

	def __len__(self) -> int:
		return len(self._records)

	def __iter__(self) -> Iterator[ClassRecord]:
		return iter(list(self._records.values()))

	# Resolution

	def resolve_class(self, scope: ClassRecord, short_name: Optional[str]) -> Optional[ClassRecord]:
		"""Find the record `short_name` refers to when written inside `scope`.

		The import table of `scope` is consulted first, then the name is
		tried relative to the package path of `scope`. When neither matches
		the lookup is repeated from the enclosing type, outwards.
		"""
		if not short_name:
			return None
		current: Optional[ClassRecord] = scope
		while current is not None:
			full_name = current.imports.get(short_name)
			if full_name is None:
				found = self.get(qualify(current.package_path, short_name))
			else:
				found = self.get(full_name)
			if found is not None:
				return found
			current = self.outer_class(current)
		return None

	def resolve_type(self, scope: ClassRecord, type_name: Optional[str]) -> Optional[ClassRecord]:
		"""Like resolve_class() but accepts a declared type such as ``List<Foo>[]``."""
		return self.resolve_class(scope, base_type_name(type_name))

	def super_class(self, record: ClassRecord) -> Optional[ClassRecord]:
		return self.resolve_type(record, record.super_name)

	def interfaces(self, record: ClassRecord) -> List[ClassRecord]:
		found: List[ClassRecord] = []
		for name in record.interface_names:
			info = self.resolve_type(record, name)
			if info is not None:
				found.append(info)
		return found

	def outer_class(self, record: ClassRecord) -> Optional[ClassRecord]:
		# The full name of an enclosing type is its inner type's package path.
		return self.get(record.package_path)
