from __future__ import annotations

import csv
import json
from pathlib import Path
from statistics import mean, median, stdev
from typing import Any, Dict, List, Optional, Tuple
from openpyxl import Workbook

from vcp.configurations import RESULTS_DIR, DECODERS

# ---- CONFIG ----
RESULTS_ROOT = RESULTS_DIR
OUT_FILE_NAME = "vcp"
OUT_DIR = RESULTS_ROOT / "_summary"


def _safe_get(d: Dict[str, Any], keys: List[str], default=None):
    cur: Any = d
    for k in keys:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def read_case(path: Path) -> Optional[Dict[str, Any]]:
    """
    Read one run json and extract the metrics we care about.
    Returns None if file is invalid or missing expected structure.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        obj = data["objectives"]
        algo = data["algorithm"]
        diag = data["meta"]["diagnostics"]

        return {
            "dataset": data["dataset"]["name"],
            "decoder": algo["decoder"],
            "scoring_policy": algo["scoring_policy"],
            "score": int(obj["score"]["value"]),
            "total_saved": int(obj["total_saved"]["value"]),
            "placed": int(diag["placed_count"]),
            "caches_used": int(diag["caches_used"]),
            "served": int(diag["served_requests"]),
            "unserved": int(diag["unserved_requests"]),
            "elapsed": float(diag["elapsed_sec"]),
            "timestamp_utc": _safe_get(data, ["timestamp_utc"], ""),
            "run_id": _safe_get(data, ["run_id"], ""),
        }
    except json.JSONDecodeError as e:
        print(f"[read_case] Invalid JSON in {path}: {e}")
    except KeyError as e:
        print(f"[read_case] Missing key {e} in {path}")
    except (TypeError, ValueError) as e:
        print(f"[read_case] Bad value in {path}: {e}")
    return None


def write_json(path: Path, obj: Any) -> None:
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")


def write_xlsx(path, rows, sheet_name="data"):
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    if not rows:
        wb.save(path)
        return

    headers = list(rows[0].keys())
    ws.append(headers)

    for r in rows:
        ws.append([r.get(h, "") for h in headers])

    wb.save(path)


def write_csv(path: Path, rows: List[Dict[str, Any]], fieldnames: List[str]) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for r in rows:
            w.writerow({k: r.get(k, "") for k in fieldnames})


def std(vals):
    return stdev(vals) if len(vals) > 1 else 0.0


def col(rows, name):
    return [float(r[name]) for r in rows]


def aggregate_results(
    results_root: Path = RESULTS_ROOT,
    out_dir: Path = OUT_DIR,
    decoders: List[str] = DECODERS,
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Produces:
      - flat table: one row per run json (decoder, policy, dataset)
      - summary table: one row per (decoder, policy) with mean/median stats
    Returns (flat_rows, summary_rows).
    """
    flat_rows: List[Dict[str, Any]] = []
    summary_rows: List[Dict[str, Any]] = []

    for decoder in decoders:
        folder = results_root / decoder
        if not folder.is_dir():
            continue

        by_policy: Dict[str, List[Dict[str, Any]]] = {}
        for path in sorted(folder.glob("*.json")):
            r = read_case(path)
            if r is None:
                continue
            flat_rows.append(r)
            by_policy.setdefault(r["scoring_policy"], []).append(r)

        for policy, rows in sorted(by_policy.items()):
            summary_rows.append({
                "decoder": decoder,
                "scoring_policy": policy,
                "n": len(rows),

                # ---- score ----
                "mean_score": round(mean(col(rows, "score")), 4),
                "median_score": round(median(col(rows, "score")), 4),
                "std_score": round(std(col(rows, "score")), 4),
                "min_score": round(min(col(rows, "score")), 4),
                "max_score": round(max(col(rows, "score")), 4),
                "sum_score": int(sum(col(rows, "score"))),

                # ---- placed ----
                "mean_placed": round(mean(col(rows, "placed")), 4),

                # ---- runtime ----
                "mean_time_sec": round(mean(col(rows, "elapsed")), 6),
                "median_time_sec": round(median(col(rows, "elapsed")), 6),
                "std_time_sec": round(std(col(rows, "elapsed")), 6),
                "min_time_sec": round(min(col(rows, "elapsed")), 6),
                "max_time_sec": round(max(col(rows, "elapsed")), 6),
            })

    # ---- WRITE OUTPUTS ----
    out_dir.mkdir(parents=True, exist_ok=True)

    flat_json = out_dir / f"{OUT_FILE_NAME}_flat.json"
    flat_csv = out_dir / f"{OUT_FILE_NAME}_flat.csv"
    flat_xlsx = out_dir / f"{OUT_FILE_NAME}_flat.xlsx"

    write_json(flat_json, flat_rows)

    flat_fields = [
        "dataset", "decoder", "scoring_policy",
        "score", "total_saved",
        "placed", "caches_used", "served", "unserved", "elapsed",
        "timestamp_utc", "run_id",
    ]
    write_csv(flat_csv, flat_rows, flat_fields)
    write_xlsx(flat_xlsx, flat_rows, sheet_name="flat")

    summary_json = out_dir / f"{OUT_FILE_NAME}_summary.json"
    summary_csv = out_dir / f"{OUT_FILE_NAME}_summary.csv"
    summary_xlsx = out_dir / f"{OUT_FILE_NAME}_summary.xlsx"

    write_json(summary_json, summary_rows)

    summary_fields = [
        "decoder", "scoring_policy", "n",
        "mean_score", "median_score", "std_score", "min_score", "max_score", "sum_score",
        "mean_placed",
        "mean_time_sec", "median_time_sec", "std_time_sec", "min_time_sec", "max_time_sec",
    ]
    write_csv(summary_csv, summary_rows, summary_fields)
    write_xlsx(summary_xlsx, summary_rows, sheet_name="summary")

    print("Wrote:")
    print(" -", flat_json)
    print(" -", flat_csv)
    print(" -", summary_json)
    print(" -", summary_csv)

    return flat_rows, summary_rows


if __name__ == "__main__":
    aggregate_results()
