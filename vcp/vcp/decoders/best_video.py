from __future__ import annotations

from typing import Dict, List, Set

from vcp.vcp.index.demand import build_demand_index
from vcp.vcp.index.latency import build_latency_index
from vcp.vcp.models.filled_cache import new_filled_caches, to_mapping
from vcp.vcp.models.items import CacheInfo, Endpoint, Request, Video
from vcp.vcp.polices.video_order import apply_video_order


def decode_best_video(
    *,
    cache_info: CacheInfo,
    videos: List[Video],
    endpoints: List[Endpoint],
    requests: List[Request],
) -> Dict[int, Set[int]]:
    """
    Demand-priority baseline (latency deltas ignored):
      - videos by total requests desc
      - each video tried on every cache, in id order, that reaches
        at least one endpoint asking for it
    """
    demand_index = build_demand_index(videos, endpoints, requests)
    latency_index = build_latency_index(cache_info, endpoints)
    filled = new_filled_caches(cache_info)

    for video in apply_video_order(videos, "demand_desc", demand_index):
        audience = {e for e, count in demand_index[video.id].items() if count > 0}
        if not audience:
            continue
        for cache_id, fc in enumerate(filled):
            if audience.isdisjoint(latency_index.reachable(cache_id)):
                continue
            fc.try_add(video)

    return to_mapping(filled)
