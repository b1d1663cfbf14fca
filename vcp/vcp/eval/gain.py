# vcp/vcp/eval/gain.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from vcp.vcp.index.demand import DemandIndex
from vcp.vcp.index.latency import LatencyIndex
from vcp.vcp.models.items import CacheInfo, Placement, Video
from vcp.vcp.polices.scoring import ScoringPolicy, score_pair


@dataclass
class PairGain:
    """
    Value of storing one video on one cache.

    local_gains holds, per endpoint that both asks for the video and reaches
    the cache, (origin latency - cache latency) * requests. Entries may be
    negative when the cache link is slower than the datacenter.
    """
    video_id: int
    cache_id: int
    size: int
    local_gains: Dict[int, int] = field(default_factory=dict)
    audience: int = 0       # requests summed over the same endpoints
    score: int = 0

    @property
    def placement(self) -> Placement:
        return Placement(video_id=self.video_id, cache_id=self.cache_id)

    @property
    def raw_gain(self) -> int:
        return sum(self.local_gains.values())

    def rescore(self, policy: ScoringPolicy | str) -> int:
        self.score = score_pair(policy, self.raw_gain, self.size, self.audience)
        return self.score

    def order_key(self) -> Tuple[int, int, int]:
        # best first: score desc, then video id, then cache id
        return (-self.score, self.video_id, self.cache_id)

    def __repr__(self) -> str:
        return (
            f"PairGain(video={self.video_id}, cache={self.cache_id}, "
            f"score={self.score}, raw={self.raw_gain}, audience={self.audience}, "
            f"endpoints={len(self.local_gains)})"
        )


def pair_gain(
    video: Video,
    cache_id: int,
    latency_index: LatencyIndex,
    demand_index: DemandIndex,
    scoring_policy: ScoringPolicy | str = ScoringPolicy.PURE_GAIN,
) -> PairGain:
    reachable = latency_index.reachable(cache_id)
    origin = latency_index.origin_endpoint_to_latency

    pg = PairGain(video_id=video.id, cache_id=cache_id, size=video.size)
    for endpoint_id, count in demand_index[video.id].items():
        if count == 0 or endpoint_id not in reachable:
            continue
        pg.local_gains[endpoint_id] = (origin[endpoint_id] - reachable[endpoint_id]) * count
        pg.audience += count

    pg.rescore(scoring_policy)
    return pg


def compute_gains(
    scoring_policy: ScoringPolicy | str,
    cache_info: CacheInfo,
    videos: List[Video],
    latency_index: LatencyIndex,
    demand_index: DemandIndex,
) -> Dict[Tuple[int, int], PairGain]:
    """
    Every (video_id, cache_id) pair -> PairGain, inserted video-major then cache id.
    Pairs with no shared endpoint are kept with raw gain 0.
    """
    gains: Dict[Tuple[int, int], PairGain] = {}
    for video in videos:
        for cache_id in range(cache_info.count):
            gains[(video.id, cache_id)] = pair_gain(
                video, cache_id, latency_index, demand_index, scoring_policy
            )
    return gains


def sorted_by_score(gains: Dict[Tuple[int, int], PairGain]) -> List[PairGain]:
    return sorted(gains.values(), key=PairGain.order_key)
