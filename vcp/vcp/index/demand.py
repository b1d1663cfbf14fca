from __future__ import annotations

from typing import Dict, List

from vcp.vcp.errors import MalformedReferenceError
from vcp.vcp.models.items import Endpoint, Request, Video

DemandIndex = Dict[int, Dict[int, int]]   # video_id -> endpoint_id -> count


def build_demand_index(
    videos: List[Video],
    endpoints: List[Endpoint],
    requests: List[Request],
) -> DemandIndex:
    """
    video_id -> (endpoint_id -> request count).

    Every video gets a key, even with no requests (empty inner dict).
    A repeated (video, endpoint) pair keeps the last count seen.
    """
    index: DemandIndex = {v.id: {} for v in videos}
    endpoint_ids = {e.id for e in endpoints}

    for i, req in enumerate(requests):
        if req.video_id not in index:
            raise MalformedReferenceError(f"Request #{i} cites unknown video {req.video_id}")
        if req.endpoint_id not in endpoint_ids:
            raise MalformedReferenceError(f"Request #{i} cites unknown endpoint {req.endpoint_id}")
        index[req.video_id][req.endpoint_id] = req.count

    return index


def total_demand(index: DemandIndex, video_id: int) -> int:
    return sum(index[video_id].values())
