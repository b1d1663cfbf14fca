# vcp/vcp/results/index.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from .writer import read_json, write_json


def ensure_index(path: Path) -> None:
    if not path.exists():
        write_json([], path)
        return
    txt = path.read_text(encoding="utf-8").strip()
    if txt == "":
        write_json([], path)


def append_run(index_path: Path, entry: Dict[str, Any]) -> None:
    ensure_index(index_path)
    data: List[Dict[str, Any]] = read_json(index_path)
    data.append(entry)
    write_json(data, index_path)


def runs_for(index_path: Path, *, dataset: str | None = None, decoder: str | None = None) -> List[Dict[str, Any]]:
    if not index_path.exists():
        return []
    ensure_index(index_path)
    rows: List[Dict[str, Any]] = read_json(index_path)
    return [
        r for r in rows
        if (dataset is None or r.get("dataset") == dataset)
        and (decoder is None or r.get("decoder") == decoder)
    ]
