
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from vcp.vcp.errors import MalformedReferenceError

# raw latency tables carry the datacenter path under this key
ORIGIN_ID = -1


@dataclass(frozen=True)
class Video:
    id: int
    size: int


@dataclass(frozen=True)
class CacheInfo:
    count: int
    capacity: int


@dataclass(frozen=True)
class Endpoint:
    """One client aggregation point. Origin latency is kept apart from the cache table."""
    id: int
    latency_to_cache: Dict[int, int] = field(default_factory=dict)
    latency_to_origin: int = 0

    @classmethod
    def from_raw(cls, endpoint_id: int, raw_table: Mapping[int, int]) -> "Endpoint":
        if ORIGIN_ID not in raw_table:
            raise MalformedReferenceError(
                f"Endpoint {endpoint_id} has no datacenter latency (key {ORIGIN_ID})"
            )
        caches = {c: lat for c, lat in raw_table.items() if c != ORIGIN_ID}
        return cls(id=endpoint_id, latency_to_cache=caches, latency_to_origin=raw_table[ORIGIN_ID])


@dataclass(frozen=True)
class Request:
    video_id: int
    endpoint_id: int
    count: int


@dataclass(frozen=True)
class Placement:
    video_id: int
    cache_id: int


def sizes_to_videos(sizes: List[int]) -> List[Video]:
    # ids are the positions on the sizes line
    return [Video(id=i, size=s) for i, s in enumerate(sizes)]
