from __future__ import annotations

import heapq
from typing import Dict, List, Optional, Set, Tuple

from vcp.vcp.eval.gain import PairGain, compute_gains
from vcp.vcp.index.demand import build_demand_index
from vcp.vcp.index.latency import build_latency_index
from vcp.vcp.models.filled_cache import new_filled_caches, to_mapping
from vcp.vcp.models.items import CacheInfo, Endpoint, Request, Video
from vcp.vcp.polices.scoring import ScoringPolicy

HeapEntry = Tuple[int, int, int, int]   # (-score, video_id, cache_id, version)


def discount_shared_endpoints(
    committed: PairGain,
    other: PairGain,
    scoring_policy: ScoringPolicy | str,
) -> bool:
    """
    Remove from `other` the gain `committed` already captures on their common
    endpoints:  new_local(e) = max(old_local(e) - captured(e), 0).
    A negative local gain captures nothing (clients keep the datacenter path).

    Returns True if `other` shared at least one endpoint and was re-scored.
    """
    shared = committed.local_gains.keys() & other.local_gains.keys()
    if not shared:
        return False

    for e in shared:
        captured = max(committed.local_gains[e], 0)
        other.local_gains[e] = max(other.local_gains[e] - captured, 0)

    other.rescore(scoring_policy)
    return True


def decode_descent_amend(
    *,
    cache_info: CacheInfo,
    videos: List[Video],
    endpoints: List[Endpoint],
    requests: List[Request],
    scoring_policy: ScoringPolicy | str = ScoringPolicy.PURE_GAIN,
    max_iterations: Optional[int] = None,
    debug: bool = False,
) -> Dict[int, Set[int]]:
    """
    Greedy descent with marginal re-scoring.

    Keeps a live score table. Each iteration takes the best live pair
    (score desc, then video id, then cache id), drops it from the table and
    tries to store it. After a successful store of video v on cache c, every
    live (v, c') pair is discounted on the endpoints it shares with (v, c)
    and pushed back with its new score.

    Stops when no candidate is left, every cache is full, or after
    `max_iterations` selections (None = unbounded).

    Re-selection uses a heap with lazy invalidation: a re-scored pair gets a
    new version and older heap entries for it are skipped on pop.
    """
    demand_index = build_demand_index(videos, endpoints, requests)
    latency_index = build_latency_index(cache_info, endpoints)
    gains = compute_gains(scoring_policy, cache_info, videos, latency_index, demand_index)

    videos_by_id: Dict[int, Video] = {v.id: v for v in videos}
    filled = new_filled_caches(cache_info)

    live: Dict[Tuple[int, int], PairGain] = dict(gains)
    version: Dict[Tuple[int, int], int] = {key: 0 for key in live}

    heap: List[HeapEntry] = [(-pg.score, pg.video_id, pg.cache_id, 0) for pg in live.values()]
    heapq.heapify(heap)

    open_caches = sum(1 for fc in filled if fc.remaining_capacity > 0)
    iterations = 0
    committed = 0

    while heap and open_caches > 0:
        if max_iterations is not None and iterations >= max_iterations:
            print(
                f"[descent_amend] iteration budget {max_iterations} exhausted "
                f"with {len(live)} candidates left; returning current placement"
            )
            break

        _, video_id, cache_id, ver = heapq.heappop(heap)
        key = (video_id, cache_id)
        pg = live.get(key)
        # skip stale heap entries
        if pg is None or version[key] != ver:
            continue

        iterations += 1
        del live[key]

        fc = filled[cache_id]
        was_open = fc.remaining_capacity > 0
        if not fc.try_add(videos_by_id[video_id]):
            continue

        committed += 1
        if was_open and fc.remaining_capacity == 0:
            open_caches -= 1

        if debug:
            print(f"[descent_amend] commit {pg.placement} score={pg.score}")

        for other_cache in range(cache_info.count):
            other_key = (video_id, other_cache)
            other = live.get(other_key)
            if other is None:
                continue
            if discount_shared_endpoints(pg, other, scoring_policy):
                version[other_key] += 1
                heapq.heappush(heap, (-other.score, video_id, other_cache, version[other_key]))

    if debug:
        print(f"[descent_amend] iterations={iterations} committed={committed} left={len(live)}")

    return to_mapping(filled)
