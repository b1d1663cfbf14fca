# vcp/vcp/results/writer.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Set


def _json_dump(obj: Any) -> str:
    return json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def produce_output(mapping: Mapping[int, Set[int]]) -> str:
    """
    Submission text:
      <number of non-empty caches>
      <cache_id> <video_id> <video_id> ...   (one line per non-empty cache)
    Caches and videos ascending; empty caches omitted.
    """
    rows = [(c, sorted(vids)) for c, vids in sorted(mapping.items()) if vids]
    out = [f"{len(rows)}\n"]
    for cache_id, video_ids in rows:
        out.append(" ".join(str(x) for x in [cache_id, *video_ids]) + "\n")
    return "".join(out)


def write_submission(mapping: Mapping[int, Set[int]], out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(produce_output(mapping), encoding="utf-8")


def write_run(run: Dict[str, Any], out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(_json_dump(run), encoding="utf-8")


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(obj: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_json_dump(obj), encoding="utf-8")
