from __future__ import annotations

from typing import Dict, List, Set

from vcp.vcp.eval.gain import compute_gains, sorted_by_score
from vcp.vcp.index.demand import build_demand_index
from vcp.vcp.index.latency import build_latency_index
from vcp.vcp.models.filled_cache import new_filled_caches, to_mapping
from vcp.vcp.models.items import CacheInfo, Endpoint, Request, Video
from vcp.vcp.polices.scoring import ScoringPolicy


def decode_descent(
    *,
    cache_info: CacheInfo,
    videos: List[Video],
    endpoints: List[Endpoint],
    requests: List[Request],
    scoring_policy: ScoringPolicy | str = ScoringPolicy.PURE_GAIN,
    debug: bool = False,
) -> Dict[int, Set[int]]:
    """
    One-shot greedy descent:
      - score every (video, cache) pair once
      - visit pairs by score desc (ties: video id, then cache id)
      - one try_add per pair, scores are never revised
    """
    demand_index = build_demand_index(videos, endpoints, requests)
    latency_index = build_latency_index(cache_info, endpoints)

    if debug:
        print(f"[descent] scoring {len(videos)} videos x {cache_info.count} caches ({scoring_policy})")
    gains = compute_gains(scoring_policy, cache_info, videos, latency_index, demand_index)

    videos_by_id: Dict[int, Video] = {v.id: v for v in videos}
    filled = new_filled_caches(cache_info)

    accepted = 0
    for pg in sorted_by_score(gains):
        if filled[pg.cache_id].try_add(videos_by_id[pg.video_id]):
            accepted += 1

    if debug:
        print(f"[descent] attempted={len(gains)} accepted={accepted}")

    return to_mapping(filled)
