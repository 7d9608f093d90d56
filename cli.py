from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional

import uvicorn

from classview.analysis import analyze_paths
from classview.config import load_settings
from classview.errors import ClassviewError
from classview.logging import configure_logging
from classview.summarize import render_registry


def cmd_analyze(args: argparse.Namespace) -> int:
	overrides = {}
	if args.log_level:
		overrides["log_level"] = args.log_level
	settings = load_settings(**overrides)
	configure_logging(level=settings.log_level, json_format=settings.log_format == "json")

	paths = [os.path.abspath(p) for p in args.paths]
	result = analyze_paths(paths, settings)

	if args.format == "json":
		print(json.dumps(result.model_dump(mode="json"), indent=2))
	else:
		text = render_registry(result.records)
		if text:
			print(text)
			print()
		print(result.summary)
		for failure in result.errors:
			print(f"error: {failure.path}: {failure.reason}", file=sys.stderr)
	return 1 if result.errors else 0


def cmd_serve(args: argparse.Namespace) -> int:
	settings = load_settings()
	configure_logging(level=settings.log_level, json_format=settings.log_format == "json")
	uvicorn.run(
		"api:app",
		host=args.host or settings.host,
		port=args.port or settings.port,
		reload=args.reload,
	)
	return 0


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="classview")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Parse Java sources and print their class records")
	pa.add_argument("paths", nargs="+", help="Source files or directories")
	pa.add_argument("--format", choices=["text", "json"], default="text")
	pa.add_argument("--log-level", default=None)
	pa.set_defaults(func=cmd_analyze)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default=None)
	ps.add_argument("--port", type=int, default=None)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	try:
		return args.func(args)
	except ClassviewError as e:
		print(f"error: {e}", file=sys.stderr)
		return 2


if __name__ == "__main__":
	sys.exit(main())
