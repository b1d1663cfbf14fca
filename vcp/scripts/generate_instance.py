from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple
import random

from vcp.configurations import RESOURCES_DIR

# -----------------------------
# Config defaults
# -----------------------------
N_VIDEOS = 100
N_ENDPOINTS = 10
N_REQUESTS = 300
N_CACHES = 5
CACHE_CAPACITY = 500

VIDEO_SIZE_RANGE = (10, 300)            # MB
ORIGIN_LATENCY_RANGE = (500, 4000)      # ms
CACHE_LATENCY_RATIO = (0.05, 0.9)       # cache latency as a share of origin latency
LINK_PROB = 0.5                         # chance an endpoint reaches a given cache
REQUEST_COUNT_RANGE = (1, 1000)


def generate_instance(
    seed: int,
    *,
    n_videos: int = N_VIDEOS,
    n_endpoints: int = N_ENDPOINTS,
    n_requests: int = N_REQUESTS,
    n_caches: int = N_CACHES,
    capacity: int = CACHE_CAPACITY,
) -> str:
    """
    Seeded random instance in the input text format.
    Request (video, endpoint) pairs are unique, so n_requests is capped at
    n_videos * n_endpoints.
    """
    rng = random.Random(seed)

    sizes = [rng.randint(*VIDEO_SIZE_RANGE) for _ in range(n_videos)]

    lines: List[str] = [
        "",   # header filled once the request count is known
        " ".join(str(s) for s in sizes),
    ]

    for _ in range(n_endpoints):
        origin = rng.randint(*ORIGIN_LATENCY_RANGE)
        links: List[Tuple[int, int]] = []
        for c in range(n_caches):
            if rng.random() < LINK_PROB:
                ratio = rng.uniform(*CACHE_LATENCY_RATIO)
                links.append((c, max(1, int(origin * ratio))))
        lines.append(f"{origin} {len(links)}")
        lines.extend(f"{c} {lat}" for c, lat in links)

    pairs: Dict[Tuple[int, int], int] = {}
    n_target = min(n_requests, n_videos * n_endpoints)
    while len(pairs) < n_target:
        key = (rng.randrange(n_videos), rng.randrange(n_endpoints))
        if key not in pairs:
            pairs[key] = rng.randint(*REQUEST_COUNT_RANGE)

    lines.extend(f"{v} {e} {n}" for (v, e), n in pairs.items())
    lines[0] = f"{n_videos} {n_endpoints} {len(pairs)} {n_caches} {capacity}"
    return "\n".join(lines) + "\n"


def main() -> None:
    for seed in range(3):
        out = RESOURCES_DIR / f"synthetic_{seed}.in"
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(generate_instance(seed), encoding="utf-8")
        print(f"✅ seed {seed} -> {out}")


if __name__ == "__main__":
    main()
