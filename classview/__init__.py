"""classview: structural facts about Java-like source without a compiler.

Modules:
- scanner.py: Cuts source text into token statements.
- java_parse.py: Interprets statements into class records.
- scope.py: Explicit scope stack for nested type and method bodies.
- builder.py: Mutable accumulator for one type being parsed.
- registry.py: Record store and short-name resolution.
- model.py: Data structures for records, members and relations.
- relations.py: Relation graph between registered types.
- fs_scan.py: Source discovery and batch parsing.
- summarize.py: Deterministic textual rendering of records.
"""

__all__ = [
	"scanner",
	"java_parse",
	"scope",
	"builder",
	"registry",
	"model",
	"relations",
	"fs_scan",
	"summarize",
	"config",
	"errors",
	"logging",
]
