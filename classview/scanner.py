"""Statement scanner for Java-like source text.

The scanner does not build a syntax tree. It walks the text once and cuts it
into statements, each a short list of tokens such as
``["private", "final", "int", "a,b"]``. Commas, dots, angle and square
brackets glue neighbouring words together so that qualified names, generic
types, array suffixes and multi-declarator lists arrive as single tokens.
Parenthesis characters are the only punctuation emitted as tokens.

Bodies are never tokenized in place: when a statement reaches a ``{`` the
scanner skips to the matching ``}`` and reports where the body started, and
the caller decides whether to descend into it.

Nothing in here raises on malformed input. An unterminated comment, string or
bracket simply runs the scan to the end of the text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Optional, Tuple

# Statements starting with one of these are not declarations.
IGNORED_KEYWORDS: FrozenSet[str] = frozenset(
	{
		"abstract",
		"assert",
		"break",
		"case",
		"continue",
		"default",
		"do",
		"else",
		"finally",
		"for",
		"if",
		"native",
		"new",
		"return",
		"strictfp",
		"switch",
		"synchronized",
		"throw",
		"transient",
		"try",
		"volatile",
		"while",
	}
)

_WORD_BREAKS = frozenset("().,<>[]={?")
_JOINERS = frozenset(".,<>[]?")
_CLOSING_JOINERS = frozenset(">]?")
_TERMINATORS = frozenset(":;{}=")
_QUOTES = frozenset("'\"")
_BRACKET_PAIRS = {"[": "]", "{": "}", "(": ")"}
# Words that may precede the type parameters of a generic method.
_TYPE_PARAMETER_PREFIXES = frozenset(
	{
		"abstract",
		"default",
		"final",
		"native",
		"private",
		"protected",
		"public",
		"static",
		"strictfp",
		"synchronized",
	}
)


@dataclass(frozen=True)
class Statement:
	tokens: Tuple[str, ...]
	# Cursor where scanning resumes after this statement.
	end: int
	# One of ";", "{", "}", ":" or "=".
	terminator: str
	# First character inside the skipped body when the statement opened one.
	body_start: Optional[int] = None

	@property
	def opens_body(self) -> bool:
		return self.body_start is not None

	@property
	def first(self) -> Optional[str]:
		return self.tokens[0] if self.tokens else None


class StatementScanner:
	"""Cuts one immutable source text into statements on demand."""

	def __init__(self, text: str) -> None:
		self.text = text
		self.length = len(text)

	def skip_whitespace(self, index: int) -> int:
		text = self.text
		while index < self.length and text[index].isspace():
			index += 1
		return index

	def skip_comment(self, index: int) -> int:
		"""Skip a comment starting at the '/' at `index`.

		Returns the cursor after the comment, or just after the '/' when it
		does not start a comment (a division operator).
		"""
		text = self.text
		index += 1
		if index < self.length:
			if text[index] == "/":
				newline = text.find("\n", index)
				return self.length if newline == -1 else newline + 1
			if text[index] == "*":
				close = text.find("*/", index)
				return self.length if close == -1 else close + 2
		return index

	def skip_brackets(self, index: int, opening: str, closing: str) -> int:
		"""Skip from the `opening` character at `index` past its match.

		String literals and comments are honored. Returns the cursor after
		the matching `closing` character, or the end of the text.
		"""
		text = self.text
		length = self.length
		depth = 0
		quote = ""
		while index < length:
			c = text[index]
			if quote:
				if c == quote:
					quote = ""
				elif c == "\\":
					index += 1
			elif c == "/":
				index = self.skip_comment(index) - 1
			elif c == opening:
				depth += 1
			elif c == closing:
				depth -= 1
			elif c in _QUOTES:
				quote = c
			index += 1
			if depth <= 0:
				break
		return min(index, length)

	def skip_initializer(self, index: int) -> Tuple[int, bool]:
		"""Skip the initializer after the '=' at `index`.

		Stops at the first ',' or ';' outside brackets, braces, parentheses
		and strings. Returns ``(cursor, more)``: on ',' the cursor points at
		the comma and `more` is True, on ';' the cursor is just past it.
		"""
		text = self.text
		length = self.length
		depth = {"[": 0, "{": 0, "(": 0}
		closers = {v: k for k, v in _BRACKET_PAIRS.items()}
		quote = ""
		index += 1
		while index < length:
			c = text[index]
			if quote:
				if c == quote:
					quote = ""
				elif c == "\\":
					index += 1
			elif c in depth:
				depth[c] += 1
			elif c in closers:
				depth[closers[c]] -= 1
			elif c in _QUOTES:
				quote = c
			elif c in ",;" and not any(depth.values()):
				if c == ",":
					return index, True
				return index + 1, False
			index += 1
		return length, False

	def next_statement(self, cursor: int) -> Optional[Statement]:
		"""Scan the statement starting at `cursor`.

		Returns None when the text ends before the statement does.
		"""
		text = self.text
		length = self.length
		index = self.skip_whitespace(cursor)
		tokens: List[str] = []
		word = ""
		parens = 0
		angles = 0
		quote = ""

		while index < length:
			c = text[index]

			if quote:
				index += 1
				if c == quote:
					quote = ""
				elif c == "\\":
					index += 1
				continue

			is_space = c.isspace()
			if is_space or c == "/" or (word and c in _WORD_BREAKS):
				if is_space:
					index = self.skip_whitespace(index + 1)
					c = text[index] if index < length else ""
					if c == "<" and word in _TYPE_PARAMETER_PREFIXES:
						# "public <T> T get()": the modifier stays its own token
						tokens.append(word)
						word = ""
						continue
				if c == "/":
					index = self.skip_comment(index)
					continue
				if c in _JOINERS:
					if c == "<":
						angles += 1
					elif c == ">":
						angles -= 1
					ahead = self.skip_whitespace(index + 1)
					following = text[ahead] if ahead < length else ""
					if (
						((c != "," or parens == 0) and c not in _CLOSING_JOINERS)
						or angles > 0
						or following == "["
					):
						word += c
						index = ahead
						continue
					if c in _CLOSING_JOINERS:
						word += c
					index += 1
				if word:
					if word[0] == "@":
						# annotation, together with its arguments
						if c == "(":
							index = self.skip_brackets(index, "(", ")")
					else:
						tokens.append(word)
					word = ""
				continue

			if c in _QUOTES:
				quote = c
				index += 1
				continue

			if c == "(":
				tokens.append(c)
				parens += 1
				index += 1
				continue

			if c == ")":
				tokens.append(c)
				parens -= 1
				index = self.skip_whitespace(index + 1)
				following = text[index] if index < length else ""
				if following not in ("{", "t") and tokens[0] not in IGNORED_KEYWORDS:
					word += self._collapse_call(tokens)
				continue

			if c in _TERMINATORS and self._ends_statement(c, tokens, word):
				if parens > 0:
					index += 1
					continue
				if c == "{":
					body_start = index + 1
					index = self.skip_brackets(index, "{", "}")
					if len(tokens) == 1 and tokens[0] not in IGNORED_KEYWORDS:
						# enum constant with a body: VALUE { ... }, OTHER;
						word += tokens.pop()
						continue
					return self._finish(tokens, word, index, c, body_start)
				if c == "=":
					index, more = self.skip_initializer(index)
					if more:
						if tokens:
							word += tokens.pop()
						continue
					return self._finish(tokens, word, index, c)
				return self._finish(tokens, word, index + 1, c)

			if c == "<":
				# type parameters opening a token, as in "<T> T get()"
				angles += 1
			word += c
			index += 1

		return None

	@staticmethod
	def _ends_statement(c: str, tokens: List[str], word: str) -> bool:
		if c != ":":
			return True
		first = tokens[0] if tokens else None
		if first in ("case", "default") or word == "default":
			return True
		return len(tokens) + (1 if word else 0) == 1

	@staticmethod
	def _collapse_call(tokens: List[str]) -> str:
		"""Undo a ``NAME(args)`` group that is not a method declaration.

		Only applies when at most one token precedes the last '('. The group
		is dropped and the name before it is handed back so the caller can
		keep extending it (``A(1), B(2)`` becomes ``A,B``).
		"""
		opener = len(tokens) - 1
		while opener >= 0 and tokens[opener] != "(":
			opener -= 1
		if opener >= 2:
			return ""
		while len(tokens) > 1 and tokens.pop() != "(":
			pass
		return tokens.pop() if tokens else ""

	@staticmethod
	def _finish(
		tokens: List[str],
		word: str,
		end: int,
		terminator: str,
		body_start: Optional[int] = None,
	) -> Statement:
		if word:
			tokens.append(word)
		return Statement(tuple(tokens), end, terminator, body_start)

	def statements(self, cursor: int = 0) -> Iterator[Statement]:
		"""Yield every statement from `cursor` without descending into bodies."""
		while True:
			statement = self.next_statement(cursor)
			if statement is None:
				return
			yield statement
			cursor = statement.end
