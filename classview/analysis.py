from __future__ import annotations

from typing import Iterable, List, Optional

from .config import ClassviewSettings, load_settings
from .fs_scan import parse_path
from .java_parse import JavaParser
from .model import AnalyzeResult, SourceFailure
from .registry import ClassRegistry
from .relations import build_relations
from .summarize import summarize_registry


def _result(registry: ClassRegistry, errors: List[SourceFailure]) -> AnalyzeResult:
	graph = build_relations(registry)
	return AnalyzeResult(
		records=registry.records(),
		relations=graph.relations,
		errors=errors,
		summary=summarize_registry(registry),
	)


def analyze_paths(
	paths: Iterable[str],
	settings: Optional[ClassviewSettings] = None,
) -> AnalyzeResult:
	"""Parse every path into one registry and derive its relations.

	Raises SourceError when a path does not exist.
	"""
	settings = settings or load_settings()
	parser = JavaParser(settings=settings)
	errors: List[SourceFailure] = []
	for path in paths:
		report = parse_path(parser, path, settings)
		errors.extend(report.errors)
	return _result(parser.registry, errors)


def analyze_source(
	code: str,
	filename: Optional[str] = None,
	settings: Optional[ClassviewSettings] = None,
) -> AnalyzeResult:
	parser = JavaParser(settings=settings)
	parser.parse(code, source=filename)
	return _result(parser.registry, [])
