from __future__ import annotations

from typing import Callable, Dict, List, Optional

from vcp.vcp.index.demand import DemandIndex, total_demand
from vcp.vcp.models.items import Video


# ---------- Policy API ----------

VideoOrderFn = Callable[[List[Video], Optional[DemandIndex]], List[Video]]


def order_input(videos: List[Video], demand_index: Optional[DemandIndex] = None) -> List[Video]:
    return list(videos)


def order_id(videos: List[Video], demand_index: Optional[DemandIndex] = None) -> List[Video]:
    return sorted(videos, key=lambda v: v.id)


def order_demand_desc(videos: List[Video], demand_index: Optional[DemandIndex] = None) -> List[Video]:
    """
    Most requested first (summed over all endpoints), latency ignored.
    Ties: lower video id first.
    """
    if demand_index is None:
        raise ValueError("demand_desc ordering needs a demand index")
    return sorted(videos, key=lambda v: (-total_demand(demand_index, v.id), v.id))


def order_size_asc(videos: List[Video], demand_index: Optional[DemandIndex] = None) -> List[Video]:
    # small first, lets first-fit pack more videos
    return sorted(videos, key=lambda v: (v.size, v.id))


POLICIES: Dict[str, VideoOrderFn] = {
    "input": order_input,
    "id": order_id,
    "demand_desc": order_demand_desc,
    "size_asc": order_size_asc,
}


def apply_video_order(
    videos: List[Video],
    policy: str = "id",
    demand_index: Optional[DemandIndex] = None,
) -> List[Video]:
    """
    Sort videos according to a named policy.
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown video_order policy: {policy}. Available: {list(POLICIES.keys())}")
    return POLICIES[policy](videos, demand_index)
