from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, computed_field, model_validator


class Accessibility(str, Enum):
	PUBLIC = "public"
	PRIVATE = "private"
	PROTECTED = "protected"
	PACKAGE = "package"

	@property
	def symbol(self) -> str:
		"""UML visibility marker."""
		return _ACCESS_SYMBOLS[self]


_ACCESS_SYMBOLS: Dict[Accessibility, str] = {
	Accessibility.PUBLIC: "+",
	Accessibility.PRIVATE: "-",
	Accessibility.PROTECTED: "#",
	Accessibility.PACKAGE: "~",
}


class ValueInfo(BaseModel):
	"""Anything with a name and an optional type name."""

	model_config = ConfigDict(frozen=True)

	name: str
	type_name: Optional[str] = None
	is_final: bool = False

	@model_validator(mode="before")
	@classmethod
	def _move_array_suffix(cls, data: Any) -> Any:
		# "String args[]" is the same declaration as "String[] args".
		if not isinstance(data, dict) or not isinstance(data.get("name"), str):
			return data
		name = data["name"]
		stem = name.rstrip("[]")
		if stem == name:
			return data
		data = dict(data)
		data["name"] = stem
		if data.get("type_name") is not None:
			data["type_name"] = data["type_name"] + name[len(stem):]
		return data


class MemberInfo(ValueInfo):
	accessibility: Accessibility = Accessibility.PACKAGE
	is_static: bool = False


class FieldInfo(MemberInfo):
	pass


class ParameterInfo(ValueInfo):
	pass


class MethodInfo(MemberInfo):
	parameters: Tuple[ParameterInfo, ...] = ()
	variables: Tuple[ValueInfo, ...] = ()

	@property
	def is_constructor(self) -> bool:
		return self.type_name is None


class ClassRecord(BaseModel):
	"""Finished, immutable description of one class, interface or enum."""

	model_config = ConfigDict(frozen=True)

	package_path: str
	name: str
	kind: str
	super_name: Optional[str] = None
	outer_name: Optional[str] = None
	interface_names: Tuple[str, ...] = ()
	fields: Tuple[FieldInfo, ...] = ()
	methods: Tuple[MethodInfo, ...] = ()
	imports: Dict[str, str] = {}
	source: Optional[str] = None

	@computed_field  # type: ignore[misc]
	@property
	def full_name(self) -> str:
		return qualify(self.package_path, self.name)


def qualify(path: str, name: str) -> str:
	return f"{path}.{name}" if path else name


class RelationKind(str, Enum):
	DEPENDENCY = "dependency"
	ASSOCIATION = "association"
	REALIZATION = "realization"
	GENERALIZATION = "generalization"

	@property
	def importance(self) -> int:
		return _RELATION_ORDER.index(self)


_RELATION_ORDER: List[RelationKind] = [
	RelationKind.DEPENDENCY,
	RelationKind.ASSOCIATION,
	RelationKind.REALIZATION,
	RelationKind.GENERALIZATION,
]


class Relation(BaseModel):
	kind: RelationKind
	source: str
	target: str


class SourceFailure(BaseModel):
	path: str
	reason: str


class ParseReport(BaseModel):
	files: List[str] = []
	records: List[str] = []
	errors: List[SourceFailure] = []


class AnalyzeResult(BaseModel):
	records: List[ClassRecord]
	relations: List[Relation]
	errors: List[SourceFailure] = []
	summary: str
