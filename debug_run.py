from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple
from time import perf_counter

from vcp.vcp.data.hashcode_input import load_instance
from vcp.vcp.decoders.dispatch import decode
from vcp.vcp.eval.saving import evaluate_placement
from vcp.vcp.index.demand import build_demand_index
from vcp.vcp.index.latency import build_latency_index
from vcp.vcp.results.index import append_run, runs_for
from vcp.vcp.results.schema import run_skeleton
from vcp.vcp.results.writer import write_run, write_submission
from vcp.vcp.viz.fill_viz import plot_cache_fill
from vcp.configurations import (
    AMEND_MAX_ITERATIONS,
    DECODER_KIND,
    INPUT_FILES,
    OUTPUT_DIR,
    PLOT_CACHE_FILL,
    RESOURCES_DIR,
    RESULTS_DIR,
    RUN_INDEX_PATH,
    SCORING_POLICY,
    debug,
    iter_compare_grid,
)


def run_one_instance(
    *,
    path: Path,
    decoder: str = DECODER_KIND,
    scoring_policy: str = SCORING_POLICY,
    max_iterations: Optional[int] = AMEND_MAX_ITERATIONS,
) -> Tuple[Dict[int, Set[int]], Dict[str, Any]]:
    inst = load_instance(path)
    # every mode, including the ones that ignore requests, rejects bad references
    build_demand_index(inst.videos, inst.endpoints, inst.requests)

    t0 = perf_counter()
    mapping = decode(
        decoder,
        inst.cache_info,
        inst.videos,
        inst.endpoints,
        inst.requests,
        scoring_policy=scoring_policy,
        max_iterations=max_iterations,
        debug=debug,
    )
    elapsed = perf_counter() - t0

    latency_index = build_latency_index(inst.cache_info, inst.endpoints)
    metrics = evaluate_placement(mapping, latency_index, inst.requests, inst.videos)

    run = run_skeleton(
        dataset=inst.name,
        decoder=decoder,
        scoring_policy=scoring_policy,
        params={"max_iterations": max_iterations},
        cache_info={"count": inst.cache_info.count, "capacity": inst.cache_info.capacity},
    )

    run["dataset"]["source_path"] = str(path)
    run["dataset"]["counts"] = {
        "videos": len(inst.videos),
        "endpoints": len(inst.endpoints),
        "requests": len(inst.requests),
    }
    run["objectives"]["score"]["value"] = metrics.score
    run["objectives"]["total_saved"]["value"] = metrics.total_saved
    run["placement"] = {str(c): sorted(vids) for c, vids in sorted(mapping.items()) if vids}
    run["meta"]["diagnostics"] = {
        "elapsed_sec": round(elapsed, 6),
        "placed_count": int(sum(len(v) for v in mapping.values())),
        "caches_used": int(sum(1 for v in mapping.values() if v)),
        "total_requests": metrics.total_requests,
        "served_requests": metrics.served_requests,
        "unserved_requests": metrics.unserved_requests,
    }
    run["meta"]["cache_used"] = {str(c): u for c, u in metrics.cache_used.items()}

    if PLOT_CACHE_FILL:
        plot_cache_fill(
            mapping, inst.cache_info, inst.videos,
            title=f"{inst.name} - {decoder} ({scoring_policy})",
            out_path=RESULTS_DIR / decoder / f"{inst.name}_{scoring_policy}_fill.png",
        )

    return mapping, run


def process(
    filename: str,
    *,
    decoder: str = DECODER_KIND,
    scoring_policy: str = SCORING_POLICY,
    write_output: bool = True,
) -> Dict[str, Any]:
    in_path = RESOURCES_DIR / filename
    mapping, run = run_one_instance(path=in_path, decoder=decoder, scoring_policy=scoring_policy)

    name = Path(filename).stem
    if write_output:
        write_submission(mapping, OUTPUT_DIR / f"{filename}.out")

    out_path = RESULTS_DIR / decoder / f"{name}_{scoring_policy}.json"
    write_run(run, out_path)
    append_run(RUN_INDEX_PATH, {
        "run_id": run["run_id"],
        "timestamp_utc": run["timestamp_utc"],
        "dataset": name,
        "decoder": decoder,
        "scoring_policy": scoring_policy,
        "score": run["objectives"]["score"]["value"],
        "path": str(out_path),
    })
    return run


def main(files: List[str] = INPUT_FILES) -> None:
    overall_t0 = perf_counter()

    for filename in files:
        print(f"Processing file {filename}")
        run = process(filename)
        diag = run["meta"]["diagnostics"]
        print(
            f"✅ {filename} score={run['objectives']['score']['value']} "
            f"placed={diag['placed_count']} in {diag['elapsed_sec']:.2f}s"
        )

    print(f"🏁 All done. Total time: {perf_counter() - overall_t0:.2f}s")


def compare(files: List[str] = INPUT_FILES) -> Dict[str, Dict[str, Any]]:
    """
    Every decoder/policy pair from the comparison grid on every file; no submissions written.
    Returns, per dataset, the best-scoring entry recorded in the run index.
    """
    best: Dict[str, Dict[str, Any]] = {}
    for filename in files:
        for cfg in iter_compare_grid():
            run = process(filename, decoder=cfg["decoder"], scoring_policy=cfg["scoring_policy"],
                          write_output=False)
            print(f"{filename:28s} {cfg['decoder']:14s} {cfg['scoring_policy']:20s} "
                  f"score={run['objectives']['score']['value']}")

        name = Path(filename).stem
        # ties keep the earliest run
        top = max(runs_for(RUN_INDEX_PATH, dataset=name), key=lambda r: r["score"])
        best[name] = top
        print(f"🏆 {name}: {top['decoder']} ({top['scoring_policy']}) score={top['score']}")

    return best


if __name__ == "__main__":
    main()
    # compare()
