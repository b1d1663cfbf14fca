from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Set

from vcp.vcp.errors import MalformedReferenceError
from vcp.vcp.index.latency import LatencyIndex
from vcp.vcp.models.items import Request, Video


@dataclass(frozen=True)
class SavingMetrics:
    total_saved: int          # sum of (origin - best latency) * count
    total_requests: int
    score: int                # total_saved * 1000 // total_requests

    served_requests: int      # requests answered by some cache
    unserved_requests: int    # requests that still go to the datacenter

    cache_used: Dict[int, int] = field(default_factory=dict)   # cache_id -> used capacity

    def __repr__(self) -> str:
        return (
            "SavingMetrics("
            f"score={self.score}, "
            f"total_saved={self.total_saved}, "
            f"requests={self.total_requests} "
            f"(served={self.served_requests}, unserved={self.unserved_requests})"
            ")"
        )


def evaluate_placement(
    mapping: Mapping[int, Set[int]],
    latency_index: LatencyIndex,
    requests: List[Request],
    videos: List[Video] | None = None,
) -> SavingMetrics:
    """
    For each request the endpoint streams from the fastest source holding the
    video: the datacenter, or any reachable cache that stores it.
    """
    known = latency_index.cache_endpoint_to_latency
    holders: Dict[int, List[int]] = {}
    for cache_id, video_ids in mapping.items():
        if cache_id not in known:
            raise MalformedReferenceError(f"Placement cites unknown cache {cache_id}")
        for v in video_ids:
            holders.setdefault(v, []).append(cache_id)

    total_saved = 0
    total_requests = 0
    served = 0

    origins = latency_index.origin_endpoint_to_latency
    video_ids = {v.id for v in videos} if videos is not None else None
    for req in requests:
        if req.endpoint_id not in origins:
            raise MalformedReferenceError(f"Request cites unknown endpoint {req.endpoint_id}")
        if video_ids is not None and req.video_id not in video_ids:
            raise MalformedReferenceError(f"Request cites unknown video {req.video_id}")
        origin = origins[req.endpoint_id]
        best = origin
        for cache_id in holders.get(req.video_id, []):
            lat = known[cache_id].get(req.endpoint_id)
            if lat is not None and lat < best:
                best = lat

        total_requests += req.count
        if best < origin:
            served += req.count
            total_saved += (origin - best) * req.count

    score = (total_saved * 1000 // total_requests) if total_requests > 0 else 0

    cache_used: Dict[int, int] = {}
    if videos is not None:
        sizes = {v.id: v.size for v in videos}
        cache_used = {c: sum(sizes[v] for v in vids) for c, vids in mapping.items()}

    return SavingMetrics(
        total_saved=total_saved,
        total_requests=total_requests,
        score=score,
        served_requests=served,
        unserved_requests=total_requests - served,
        cache_used=cache_used,
    )
