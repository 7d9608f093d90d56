from __future__ import annotations

import os
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from classview.analysis import analyze_paths, analyze_source
from classview.errors import SourceError
from classview.model import AnalyzeResult
from classview.summarize import render_registry


app = FastAPI(title="Classview Analyzer")


class AnalyzeRequest(BaseModel):
	root_path: str


class ParseRequest(BaseModel):
	code: str
	filename: Optional[str] = None


def _analyze_root(root_path: str) -> AnalyzeResult:
	root = os.path.abspath(root_path)
	if not os.path.exists(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
	try:
		return analyze_paths([root])
	except SourceError as e:
		raise HTTPException(status_code=400, detail=e.to_dict()) from e


@app.post("/analyze", response_model=AnalyzeResult)
def analyze(req: AnalyzeRequest) -> AnalyzeResult:
	return _analyze_root(req.root_path)


@app.post("/parse", response_model=AnalyzeResult)
def parse(req: ParseRequest) -> AnalyzeResult:
	return analyze_source(req.code, filename=req.filename)


@app.get("/render")
def render(root_path: str) -> Dict[str, str]:
	result = _analyze_root(root_path)
	return {"text": render_registry(result.records)}


def create_app() -> FastAPI:
	return app
