from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .model import ClassRecord, Relation, RelationKind
from .registry import ClassRegistry


class RelationGraph:
	"""Directed relations between registered types, one per (source, target)."""

	def __init__(self):
		self.relations: List[Relation] = []
		self._index: Dict[Tuple[str, str], int] = {}

	def add_relation(self, kind: RelationKind, source: str, target: str) -> Relation:
		"""Add a relation, or upgrade the existing one between the same pair."""
		key = (source, target)
		relation = Relation(kind=kind, source=source, target=target)
		position = self._index.get(key)
		if position is None:
			self._index[key] = len(self.relations)
			self.relations.append(relation)
			return relation
		existing = self.relations[position]
		if kind.importance > existing.kind.importance:
			self.relations[position] = relation
			return relation
		return existing

	def outgoing(self, source: str) -> List[Relation]:
		return [r for r in self.relations if r.source == source]

	def incoming(self, target: str) -> List[Relation]:
		return [r for r in self.relations if r.target == target]

	def __len__(self) -> int:
		return len(self.relations)


def _link(
	graph: RelationGraph,
	kind: RelationKind,
	record: ClassRecord,
	target: Optional[ClassRecord],
) -> None:
	if target is not None:
		graph.add_relation(kind, record.full_name, target.full_name)


def build_relations(registry: ClassRegistry) -> RelationGraph:
	"""Derive the relation graph of every record in `registry`."""
	graph = RelationGraph()
	for record in registry:
		_link(graph, RelationKind.GENERALIZATION, record, registry.super_class(record))
		for interface in registry.interfaces(record):
			_link(graph, RelationKind.REALIZATION, record, interface)
		_link(graph, RelationKind.DEPENDENCY, record, registry.outer_class(record))

		for field in record.fields:
			_link(graph, RelationKind.ASSOCIATION, record, registry.resolve_type(record, field.type_name))

		# Return, parameter and local variable types are plain dependencies
		for method in record.methods:
			_link(graph, RelationKind.DEPENDENCY, record, registry.resolve_type(record, method.type_name))
			for parameter in method.parameters:
				_link(
					graph,
					RelationKind.DEPENDENCY,
					record,
					registry.resolve_type(record, parameter.type_name),
				)
			for variable in method.variables:
				_link(
					graph,
					RelationKind.DEPENDENCY,
					record,
					registry.resolve_type(record, variable.type_name),
				)
	return graph
