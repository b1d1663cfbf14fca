# vcp/vcp/results/schema.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict


SCHEMA_VERSION = "1.0"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def make_run_id(timestamp_utc: str, dataset: str, decoder: str) -> str:
    # timestamp_utc like "2026-10-19T17:04:55.123456Z"
    ts = timestamp_utc.replace("-", "").replace(":", "").replace("T", "_").replace("Z", "")
    ts = ts.split(".")[0]
    return f"{ts}_{dataset}_{decoder}"


def run_skeleton(
    *,
    dataset: str,
    decoder: str,
    scoring_policy: str,
    params: Dict[str, Any],
    cache_info: Dict[str, int],
) -> Dict[str, Any]:
    """Return an empty-but-valid run dict you will populate later."""
    ts = utc_now_iso()
    run_id = make_run_id(ts, dataset, decoder)

    return {
        "schema_version": SCHEMA_VERSION,
        "run_id": run_id,
        "timestamp_utc": ts,
        "dataset": {
            "name": dataset,          # e.g. "kittens"
            "source_path": None,
            "counts": {"videos": None, "endpoints": None, "requests": None},
        },
        "algorithm": {
            "decoder": decoder,       # e.g. "descent"
            "scoring_policy": scoring_policy,
            "params": params,
        },
        "objectives": {
            "score": {"name": "avg_saved_us_per_request", "sense": "max", "value": None},
            "total_saved": {"name": "latency_saved_x_requests", "sense": "max", "value": None},
        },
        "placement": {},              # {cache_id: [video ids]}
        "meta": {
            "cache_info": cache_info,  # {count, capacity}
            "notes": "",
        },
    }
