from __future__ import annotations

from typing import Dict, List, Set

from vcp.vcp.models.items import CacheInfo, Video


class FilledCache:
    """
    Capacity accumulator for one cache.

    Invariant: remaining_capacity == capacity - sum of contained sizes, never < 0.
    try_add is the only way to change it.
    """

    def __init__(self, capacity: int):
        self.capacity = capacity
        self.remaining_capacity = capacity
        self.videos: Set[int] = set()

    @property
    def used(self) -> int:
        return self.capacity - self.remaining_capacity

    def fits(self, video: Video) -> bool:
        return video.size <= self.remaining_capacity

    def try_add(self, video: Video) -> bool:
        if not self.fits(video):
            return False
        self.remaining_capacity -= video.size
        self.videos.add(video.id)
        return True

    def __repr__(self) -> str:
        return (
            f"FilledCache(used={self.used}/{self.capacity}, "
            f"videos={sorted(self.videos)})"
        )


def new_filled_caches(cache_info: CacheInfo) -> List[FilledCache]:
    # index == cache id
    return [FilledCache(cache_info.capacity) for _ in range(cache_info.count)]


def to_mapping(filled: List[FilledCache]) -> Dict[int, Set[int]]:
    return {cache_id: set(fc.videos) for cache_id, fc in enumerate(filled)}
