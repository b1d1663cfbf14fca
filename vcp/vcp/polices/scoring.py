from __future__ import annotations
from enum import Enum
from typing import Callable, Dict


class ScoringPolicy(str, Enum):
    PURE_GAIN = "pure_gain"
    GAIN_OVER_COST = "gain_over_cost"
    GAIN_OVER_AUDIENCE = "gain_over_audience"


def div_trunc(num: int, den: int) -> int:
    # integer division rounding toward zero (// floors for negatives)
    q = abs(num) // abs(den)
    return q if (num >= 0) == (den > 0) else -q


# ---------- Policy API ----------

ScoreFn = Callable[[int, int, int], int]   # (raw_gain, size, audience) -> score


def score_pure_gain(raw_gain: int, size: int, audience: int) -> int:
    return raw_gain


def score_gain_over_cost(raw_gain: int, size: int, audience: int) -> int:
    """
    Gain per unit of capacity. A zero-size video costs nothing,
    so it is charged as if it had size 1.
    """
    return div_trunc(raw_gain, max(size, 1))


def score_gain_over_audience(raw_gain: int, size: int, audience: int) -> int:
    """Gain per request served; 0 when no endpoint of the pair asks for the video."""
    if audience == 0:
        return 0
    return div_trunc(raw_gain, audience)


POLICIES: Dict[str, ScoreFn] = {
    ScoringPolicy.PURE_GAIN.value: score_pure_gain,
    ScoringPolicy.GAIN_OVER_COST.value: score_gain_over_cost,
    ScoringPolicy.GAIN_OVER_AUDIENCE.value: score_gain_over_audience,
}


def score_pair(policy: ScoringPolicy | str, raw_gain: int, size: int, audience: int) -> int:
    key = policy.value if isinstance(policy, ScoringPolicy) else policy
    if key not in POLICIES:
        raise ValueError(f"Unknown scoring policy: {policy}. Available: {list(POLICIES.keys())}")
    return POLICIES[key](raw_gain, size, audience)
