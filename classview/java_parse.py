"""Declaration interpreter for Java-like source.

JavaParser drives a StatementScanner over one source text and classifies each
statement as a package or import declaration, a type declaration, a member
declaration or, inside method bodies, a local variable declaration. Type and
method bodies are parsed recursively on an explicit ScopeStack; every finished
type is frozen and added to the parser's ClassRegistry.

The interpreter is deliberately forgiving. Statements it cannot classify are
skipped, never reported.
"""

from __future__ import annotations

import os
from typing import Dict, List, Optional, Tuple, Union

from .builder import ClassBuilder
from .config import ClassviewSettings, load_settings
from .fs_scan import read_source
from .logging import get_logger
from .model import Accessibility, ClassRecord, ParameterInfo, ValueInfo, qualify
from .registry import ClassRegistry
from .scanner import IGNORED_KEYWORDS, Statement, StatementScanner
from .scope import ScopeFrame, ScopeKind, ScopeStack

log = get_logger(__name__)

_ACCESS_MODIFIERS: Dict[str, Accessibility] = {
	"public": Accessibility.PUBLIC,
	"private": Accessibility.PRIVATE,
	"protected": Accessibility.PROTECTED,
}
_TYPE_KEYWORDS = frozenset({"class", "interface", "enum"})


def _is_identifier(name: str) -> bool:
	if not name:
		return False
	first = name[0]
	if not (first.isalpha() or first in "_$"):
		return False
	return all(c.isalnum() or c in "_$" for c in name[1:])


def _angle_depth(token: str) -> int:
	return token.count("<") - token.count(">")


def _skip_type_parameters(tokens: Tuple[str, ...], i: int) -> int:
	"""Return the index after the ``<...>`` group starting at tokens[i]."""
	depth = 0
	while i < len(tokens):
		depth += _angle_depth(tokens[i])
		i += 1
		if depth <= 0:
			break
	return i


def _split_type_list(token: str) -> List[str]:
	# Split on commas that are not inside generic arguments.
	names: List[str] = []
	depth = 0
	start = 0
	for index, c in enumerate(token):
		if c == "<":
			depth += 1
		elif c == ">":
			depth -= 1
		elif c == "," and depth == 0:
			names.append(token[start:index])
			start = index + 1
	names.append(token[start:])
	return [name for name in names if name]


class JavaParser:
	"""Parses Java-like source into ClassRecords.

	One instance holds the session state for a single parse at a time. Records
	from every parse() call accumulate in `registry`.
	"""

	def __init__(
		self,
		registry: Optional[ClassRegistry] = None,
		settings: Optional[ClassviewSettings] = None,
	):
		self.registry = registry if registry is not None else ClassRegistry()
		self.settings = settings or load_settings()
		self.scopes = ScopeStack()
		self._scanner = StatementScanner("")
		self._source: Optional[str] = None
		self._added: List[ClassRecord] = []

	def parse(self, text: str, source: Optional[str] = None) -> List[ClassRecord]:
		"""Parse one source text and return the records it registered."""
		self._scanner = StatementScanner(text)
		self._source = source
		self._added = []
		self.scopes.reset()
		self._parse_body(0)
		added = self._added
		self._added = []
		log.debug("source_parsed", source=source, records=len(added))
		return added

	def parse_file(self, path: Union[str, "os.PathLike[str]"]) -> List[ClassRecord]:
		"""Read and parse one file. Raises SourceError when it cannot be read."""
		path = os.fspath(path)
		text = read_source(path, self.settings.encoding)
		return self.parse(text, source=path)

	def _parse_body(self, cursor: int) -> int:
		# Parses until the '}' closing the current body, or the end of text.
		depth = 0
		while True:
			statement = self._scanner.next_statement(cursor)
			if statement is None:
				return self._scanner.length
			cursor = statement.end
			handled = self._interpret(statement)
			frame = self.scopes.current
			if statement.terminator == "}":
				if frame.in_method and depth > 0:
					depth -= 1
					continue
				return cursor
			if (
				frame.in_method
				and statement.body_start is not None
				and not handled
				and statement.first != "new"
			):
				# Nested block inside a method: keep harvesting declarations.
				cursor = statement.body_start
				depth += 1

	def _interpret(self, statement: Statement) -> bool:
		"""Apply one statement to the parser state.

		Returns True when the statement's body was consumed by a nested parse.
		"""
		tokens = statement.tokens
		count = len(tokens)
		frame = self.scopes.current
		accessibility = Accessibility.PACKAGE
		is_final = False
		is_static = False
		i = 0
		while i < count:
			token = tokens[i]
			if token in _ACCESS_MODIFIERS:
				accessibility = _ACCESS_MODIFIERS[token]
			elif token == "static":
				is_static = True
			elif token == "final":
				is_final = True
			elif token == "package":
				i += 1
				if i < count:
					frame = self.scopes.rebind(path=tokens[i])
			elif token == "import":
				i += 1
				if i < count and "." in tokens[i]:
					full_name = tokens[i]
					imports = dict(frame.imports)
					imports[full_name.rsplit(".", 1)[1]] = full_name
					frame = self.scopes.rebind(imports=imports)
			elif token in _TYPE_KEYWORDS:
				if i + 1 < count and statement.body_start is not None:
					return self._parse_type(statement, token, i + 1)
			else:
				if frame.in_method:
					if i == 0 and token in IGNORED_KEYWORDS:
						return False
				elif token in IGNORED_KEYWORDS:
					i += 1
					continue
				elif token.startswith("<"):
					i = _skip_type_parameters(tokens, i)
					continue
				if frame.builder is not None:
					return self._parse_member(
						statement, i, frame, accessibility, is_final, is_static
					)
			i += 1
		return False

	def _parse_type(self, statement: Statement, kind: str, i: int) -> bool:
		tokens = statement.tokens
		count = len(tokens)
		frame = self.scopes.current
		name = tokens[i].split("<", 1)[0]
		if not _is_identifier(name):
			return False
		# Type parameters may have been split over several tokens.
		if _angle_depth(tokens[i]) > 0:
			i = _skip_type_parameters(tokens, i) - 1

		full_name = qualify(frame.path, name)
		imports = dict(frame.imports)
		imports[name] = full_name
		builder = ClassBuilder(full_name, kind)
		builder.add_imports(imports)
		active = frame.builder
		if active is not None:
			enclosing = self.scopes.enclosing_type()
			outer = enclosing.builder if enclosing is not None and enclosing.builder else active
			builder.outer_name = outer.name
			active.add_import(name, full_name)
			builder.add_imports(active.imports)

		# A closing '>' ends a token, so one type list may span several tokens.
		i += 1
		if i + 1 < count and tokens[i] == "extends":
			end = i + 1
			while end < count and tokens[end] != "implements":
				end += 1
			extended = _split_type_list("".join(tokens[i + 1 : end]))
			if extended:
				builder.super_name = extended[0]
				# interfaces may extend several interfaces
				for name in extended[1:]:
					builder.add_interface_name(name)
			i = end
		if i + 1 < count and tokens[i] == "implements":
			for interface_name in _split_type_list("".join(tokens[i + 1 :])):
				builder.add_interface_name(interface_name)

		type_frame = ScopeFrame(
			ScopeKind.TYPE,
			path=full_name,
			imports=imports,
			builder=builder,
			resume=statement.end,
		)
		with self.scopes.entered(type_frame):
			self._parse_body(statement.body_start or statement.end)

		record = builder.to_record(self._source)
		if self.registry.add(record):
			self._added.append(record)
		return True

	def _parse_member(
		self,
		statement: Statement,
		i: int,
		frame: ScopeFrame,
		accessibility: Accessibility,
		is_final: bool,
		is_static: bool,
	) -> bool:
		tokens = statement.tokens
		count = len(tokens)
		builder = frame.builder
		if builder is None:
			return False

		if count == 1:
			if frame.in_method:
				return False
			# Enum constants, declared without a type.
			for constant in tokens[i].split(","):
				if _is_identifier(constant):
					builder.add_field(constant, None, Accessibility.PUBLIC)
			return False

		type_name: Optional[str] = tokens[i]
		i += 1
		if i >= count:
			return False
		if tokens[i] == "(":
			# Constructor: no return type.
			name = type_name
			type_name = None
		else:
			name = tokens[i]
			i += 1

		if i < count and tokens[i] == "(":
			if frame.in_method:
				# A call, not a declaration.
				return False
			parameters = self._parse_parameters(tokens, i + 1)
			variables: Tuple[ValueInfo, ...] = ()
			if statement.body_start is not None:
				variables = self._harvest_locals(statement, frame)
			builder.add_method(
				name,
				type_name,
				parameters,
				variables,
				accessibility=accessibility,
				is_final=is_final,
				is_static=is_static,
			)
			return statement.body_start is not None

		for field_name in name.split(","):
			if _is_identifier(field_name.rstrip("[]")):
				builder.add_field(
					field_name,
					type_name,
					accessibility=accessibility,
					is_final=is_final,
					is_static=is_static,
				)
		return False

	@staticmethod
	def _parse_parameters(tokens: Tuple[str, ...], i: int) -> List[ParameterInfo]:
		parameters: List[ParameterInfo] = []
		count = len(tokens)
		while i < count and tokens[i] != ")":
			token = tokens[i]
			is_final = token == "final"
			if is_final:
				i += 1
				if i >= count:
					break
				token = tokens[i]
			name: Optional[str] = None
			type_name: Optional[str] = None
			vararg = token.find("...")
			if vararg != -1:
				# "String... args" arrives as the single token "String...args".
				type_name = token[: vararg + 3]
				name = token[vararg + 3 :]
			elif i + 1 < count and tokens[i + 1] != ")":
				i += 1
				type_name = token
				name = tokens[i]
			if name:
				parameters.append(ParameterInfo(name=name, type_name=type_name, is_final=is_final))
			i += 1
		return parameters

	def _harvest_locals(self, statement: Statement, frame: ScopeFrame) -> Tuple[ValueInfo, ...]:
		owner = frame.builder
		if owner is None or statement.body_start is None:
			return ()
		locals_builder = ClassBuilder("<locals>")
		locals_builder.add_imports(owner.imports)
		method_frame = ScopeFrame(
			ScopeKind.METHOD,
			path=frame.path,
			imports=frame.imports,
			builder=locals_builder,
			resume=statement.end,
		)
		with self.scopes.entered(method_frame):
			self._parse_body(statement.body_start)
		return locals_builder.fields_as_variables()
