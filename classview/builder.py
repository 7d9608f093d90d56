from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .model import (
	Accessibility,
	ClassRecord,
	FieldInfo,
	MethodInfo,
	ParameterInfo,
	ValueInfo,
	qualify,
)


class ClassBuilder:
	"""Mutable accumulator for one type while its body is being parsed.

	`path` is the full name of the type (``package.Outer.Name``). The builder
	is turned into a ClassRecord exactly once, when the body is closed.
	"""

	def __init__(self, path: str, kind: Optional[str] = None):
		package_path, _, name = path.rpartition(".")
		self.package_path = package_path
		self.name = name
		self.kind = kind
		self.imports: Dict[str, str] = {}
		self.super_name: Optional[str] = None
		self.outer_name: Optional[str] = None
		self.interface_names: List[str] = []
		self.fields: List[FieldInfo] = []
		self.methods: List[MethodInfo] = []
		self._frozen = False

	@property
	def full_name(self) -> str:
		return qualify(self.package_path, self.name)

	def add_field(
		self,
		name: str,
		type_name: Optional[str] = None,
		accessibility: Accessibility = Accessibility.PACKAGE,
		is_final: bool = False,
		is_static: bool = False,
	) -> FieldInfo:
		info = FieldInfo(
			name=name,
			type_name=type_name,
			accessibility=accessibility,
			is_final=is_final,
			is_static=is_static,
		)
		self.fields.append(info)
		return info

	def add_method(
		self,
		name: str,
		type_name: Optional[str],
		parameters: Sequence[ParameterInfo] = (),
		variables: Sequence[ValueInfo] = (),
		accessibility: Accessibility = Accessibility.PACKAGE,
		is_final: bool = False,
		is_static: bool = False,
	) -> MethodInfo:
		info = MethodInfo(
			name=name,
			type_name=type_name,
			parameters=tuple(parameters),
			variables=tuple(variables),
			accessibility=accessibility,
			is_final=is_final,
			is_static=is_static,
		)
		self.methods.append(info)
		return info

	def add_import(self, short_name: str, full_name: str) -> None:
		self.imports[short_name] = full_name

	def add_imports(self, mapping: Mapping[str, str]) -> None:
		self.imports.update(mapping)

	def add_interface_name(self, name: str) -> None:
		self.interface_names.append(name)

	def fields_as_variables(self) -> Tuple[ValueInfo, ...]:
		# Local declarations are harvested as fields; drop the member-only parts.
		return tuple(
			ValueInfo(name=f.name, type_name=f.type_name, is_final=f.is_final) for f in self.fields
		)

	def to_record(self, source: Optional[str] = None) -> ClassRecord:
		if self._frozen:
			raise RuntimeError(f"{self.full_name} has already been built")
		self._frozen = True
		return ClassRecord(
			package_path=self.package_path,
			name=self.name,
			kind=self.kind or "class",
			super_name=self.super_name,
			outer_name=self.outer_name,
			interface_names=tuple(self.interface_names),
			fields=tuple(self.fields),
			methods=tuple(self.methods),
			imports=dict(self.imports),
			source=source,
		)
