from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, Optional

from ..trace.model import TraceRequest, TraceResult


def utc_timestamp() -> str:
    # e.g. 2026-01-08T12-34-56Z (safe for filenames)
    return time.strftime("%Y-%m-%dT%H-%M-%SZ", time.gmtime())


def trace_document(result: TraceResult, request: Optional[TraceRequest] = None) -> Dict[str, Any]:
    doc = result.to_dict()
    if request is not None:
        doc["request"] = request.model_dump()
    return doc


def trace_to_json(result: TraceResult, request: Optional[TraceRequest] = None) -> str:
    return json.dumps(trace_document(result, request), indent=2, sort_keys=True)


def write_trace(path: str | Path, result: TraceResult, request: Optional[TraceRequest] = None) -> Path:
    """Write the trace as JSON. A directory path gets a timestamped file name."""
    path = Path(path)
    if path.is_dir() or path.suffix == "":
        safe = "".join(ch if ch.isalnum() or ch in {"-", "_"} else "_" for ch in result.algorithm)
        path = path / f"{utc_timestamp()}_{safe}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(trace_to_json(result, request), encoding="utf-8")
    return path
