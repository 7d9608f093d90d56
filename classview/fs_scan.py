from __future__ import annotations

import os
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional

from .config import ClassviewSettings
from .errors import SourceError
from .logging import get_logger
from .model import ParseReport, SourceFailure

if TYPE_CHECKING:
	from .java_parse import JavaParser

log = get_logger(__name__)


def has_source_suffix(filename: str, suffixes: Iterable[str]) -> bool:
	_, ext = os.path.splitext(filename)
	return ext.lower() in suffixes


def iter_source_files(
	root: str,
	suffixes: Iterable[str] = (".java",),
	ignore_dirs: Iterable[str] = (),
) -> Iterator[str]:
	"""Yield source files under `root` in a stable, sorted order.

	A file given as `root` is yielded as-is, whatever its suffix.
	"""
	if os.path.isfile(root):
		yield root
		return
	suffixes = tuple(suffixes)
	ignored = set(ignore_dirs)
	for dirpath, dirnames, filenames in os.walk(root):
		# Skip ignored dirs, walk the rest in name order
		dirnames[:] = sorted(d for d in dirnames if d not in ignored)
		for filename in sorted(filenames):
			if has_source_suffix(filename, suffixes):
				yield os.path.join(dirpath, filename)


def read_source(path: str, encoding: str = "utf-8") -> str:
	try:
		with open(path, "r", encoding=encoding) as handle:
			return handle.read()
	except (OSError, UnicodeDecodeError) as e:
		raise SourceError.read_failed(path, str(e)) from e


def parse_path(
	parser: "JavaParser",
	path: str,
	settings: Optional[ClassviewSettings] = None,
) -> ParseReport:
	"""Parse a file, or every source file below a directory, into `parser`.

	Files that cannot be read are recorded in the report and skipped.
	"""
	settings = settings or parser.settings
	if not os.path.exists(path):
		raise SourceError.not_found(path)

	files: List[str] = []
	records: List[str] = []
	errors: List[SourceFailure] = []
	for file_path in iter_source_files(path, settings.source_suffixes, settings.ignore_dirs):
		files.append(file_path)
		try:
			parsed = parser.parse_file(file_path)
		except SourceError as e:
			log.warning("source_read_failed", path=file_path, reason=e.reason)
			errors.append(SourceFailure(path=file_path, reason=e.reason))
			continue
		records.extend(r.full_name for r in parsed)

	log.info("batch_parse_complete", root=path, files=len(files), records=len(records), errors=len(errors))
	return ParseReport(files=files, records=records, errors=errors)
