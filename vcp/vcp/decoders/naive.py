from __future__ import annotations

from typing import Dict, List, Set

from vcp.vcp.models.filled_cache import new_filled_caches, to_mapping
from vcp.vcp.models.items import CacheInfo, Video
from vcp.vcp.polices.video_order import apply_video_order


def decode_dummy() -> Dict[int, Set[int]]:
    return {}


def decode_spreading(
    cache_info: CacheInfo,
    videos: List[Video],
    video_order: str = "id",
) -> Dict[int, Set[int]]:
    """
    Round-robin:
      - one attempt per video on the current cache
      - cursor advances (wrapping) whether the video fit or not
    """
    filled = new_filled_caches(cache_info)
    if not filled:
        return {}

    current = 0
    for video in apply_video_order(videos, video_order):
        filled[current].try_add(video)
        current = (current + 1) % cache_info.count

    return to_mapping(filled)


def decode_filling(
    cache_info: CacheInfo,
    videos: List[Video],
    video_order: str = "id",
) -> Dict[int, Set[int]]:
    """
    First-fit: each video goes to the lowest cache id that still has room.
    """
    filled = new_filled_caches(cache_info)

    for video in apply_video_order(videos, video_order):
        for fc in filled:
            if fc.try_add(video):
                break

    return to_mapping(filled)
