from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Optional

from .model import ClassRecord, FieldInfo, MethodInfo, ValueInfo
from .registry import ClassRegistry


def _typed(name: str, type_name: Optional[str], is_final: bool) -> str:
	text = name
	if type_name:
		text += f" : {type_name}"
	if is_final:
		text += " (final)"
	return text


def render_value(value: ValueInfo) -> str:
	return _typed(value.name, value.type_name, value.is_final)


def render_field(info: FieldInfo) -> str:
	return f" {info.accessibility.symbol} {render_value(info)}"


def render_method(info: MethodInfo) -> List[str]:
	params = ", ".join(render_value(p) for p in info.parameters)
	lines = [f" {info.accessibility.symbol} {_typed(f'{info.name}({params})', info.type_name, info.is_final)}"]
	for variable in info.variables:
		lines.append(f"   * {render_value(variable)}")
	return lines


def render_record(record: ClassRecord) -> str:
	header = f"{record.kind} {record.name}"
	if record.super_name:
		header += f" extends {record.super_name}"
	if record.interface_names:
		header += f" implements {', '.join(record.interface_names)}"
	if record.outer_name:
		header += f" inside {record.outer_name}"
	parts: List[str] = [header]
	for field in record.fields:
		parts.append(render_field(field))
	for method in record.methods:
		parts.extend(render_method(method))
	return "\n".join(parts)


def render_registry(records: Iterable[ClassRecord]) -> str:
	return "\n\n".join(render_record(r) for r in records)


def summarize_registry(registry: ClassRegistry) -> str:
	records = registry.records()
	kinds = Counter(r.kind for r in records)
	packages: Dict[str, int] = {}
	for r in records:
		# Nested types count towards the package of their outermost type
		outermost = r
		while True:
			outer = registry.outer_class(outermost)
			if outer is None:
				break
			outermost = outer
		package = outermost.package_path or "(default)"
		packages[package] = packages.get(package, 0) + 1

	parts: List[str] = []
	parts.append(
		f"{len(records)} types: {kinds.get('class', 0)} classes, "
		f"{kinds.get('interface', 0)} interfaces, {kinds.get('enum', 0)} enums"
	)
	for package in sorted(packages):
		parts.append(f"  Package {package}: {packages[package]} types")
	return "\n".join(parts)
