from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from vcp.vcp.errors import MalformedReferenceError
from vcp.vcp.models.items import CacheInfo, Endpoint


@dataclass(frozen=True)
class LatencyIndex:
    # cache_id -> endpoint_id -> latency; missing endpoint = not reachable from that cache
    cache_endpoint_to_latency: Dict[int, Dict[int, int]]
    # endpoint_id -> datacenter latency
    origin_endpoint_to_latency: Dict[int, int]

    def reachable(self, cache_id: int) -> Dict[int, int]:
        return self.cache_endpoint_to_latency[cache_id]


def build_latency_index(cache_info: CacheInfo, endpoints: List[Endpoint]) -> LatencyIndex:
    by_cache: Dict[int, Dict[int, int]] = {c: {} for c in range(cache_info.count)}
    origin: Dict[int, int] = {}

    for ep in endpoints:
        origin[ep.id] = ep.latency_to_origin
        for cache_id, latency in ep.latency_to_cache.items():
            if cache_id not in by_cache:
                raise MalformedReferenceError(
                    f"Endpoint {ep.id} cites unknown cache {cache_id} "
                    f"(cache ids are 0..{cache_info.count - 1})"
                )
            by_cache[cache_id][ep.id] = latency

    return LatencyIndex(cache_endpoint_to_latency=by_cache, origin_endpoint_to_latency=origin)
