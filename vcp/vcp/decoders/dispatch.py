from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Optional, Set

from vcp.vcp.decoders.best_video import decode_best_video
from vcp.vcp.decoders.descent import decode_descent
from vcp.vcp.decoders.descent_amend import decode_descent_amend
from vcp.vcp.decoders.naive import decode_dummy, decode_filling, decode_spreading
from vcp.vcp.models.items import CacheInfo, Endpoint, Request, Video
from vcp.vcp.polices.scoring import ScoringPolicy


class Mode(str, Enum):
    DUMMY = "dummy"
    SPREADING = "spreading"
    FILLING = "filling"
    DESCENT = "descent"
    BEST_VIDEO = "best_video"
    DESCENT_AMEND = "descent_amend"


DecoderFn = Callable[..., Dict[int, Set[int]]]

DECODERS: Dict[str, DecoderFn] = {
    Mode.DUMMY.value: lambda **kw: decode_dummy(),
    Mode.SPREADING.value: lambda **kw: decode_spreading(kw["cache_info"], kw["videos"]),
    Mode.FILLING.value: lambda **kw: decode_filling(kw["cache_info"], kw["videos"]),
    Mode.DESCENT.value: lambda **kw: decode_descent(
        cache_info=kw["cache_info"],
        videos=kw["videos"],
        endpoints=kw["endpoints"],
        requests=kw["requests"],
        scoring_policy=kw["scoring_policy"],
        debug=kw["debug"],
    ),
    Mode.BEST_VIDEO.value: lambda **kw: decode_best_video(
        cache_info=kw["cache_info"],
        videos=kw["videos"],
        endpoints=kw["endpoints"],
        requests=kw["requests"],
    ),
    Mode.DESCENT_AMEND.value: lambda **kw: decode_descent_amend(
        cache_info=kw["cache_info"],
        videos=kw["videos"],
        endpoints=kw["endpoints"],
        requests=kw["requests"],
        scoring_policy=kw["scoring_policy"],
        max_iterations=kw["max_iterations"],
        debug=kw["debug"],
    ),
}


def decode(
    mode: Mode | str,
    cache_info: CacheInfo,
    videos: List[Video],
    endpoints: List[Endpoint],
    requests: List[Request],
    *,
    scoring_policy: ScoringPolicy | str = ScoringPolicy.PURE_GAIN,
    max_iterations: Optional[int] = None,
    debug: bool = False,
) -> Dict[int, Set[int]]:
    """
    Runs one placement strategy and returns cache_id -> set of video ids.
    """
    key = mode.value if isinstance(mode, Mode) else mode
    if key not in DECODERS:
        raise ValueError(f"Unknown decoder: {mode}. Available: {list(DECODERS.keys())}")
    return DECODERS[key](
        cache_info=cache_info,
        videos=videos,
        endpoints=endpoints,
        requests=requests,
        scoring_policy=scoring_policy,
        max_iterations=max_iterations,
        debug=debug,
    )
