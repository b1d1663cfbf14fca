# vcp/vcp/data/hashcode_input.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Tuple

from vcp.vcp.errors import InputFormatError
from vcp.vcp.models.items import ORIGIN_ID, CacheInfo, Endpoint, Request, Video, sizes_to_videos


@dataclass(frozen=True)
class Instance:
    name: str               # "kittens", "me_at_the_zoo", ...
    cache_info: CacheInfo
    videos: List[Video]
    endpoints: List[Endpoint]
    requests: List[Request]
    source_path: Path | None = None


def _as_ints(line: str, expected: int | None, what: str, lineno: int) -> List[int]:
    parts = line.split()
    if expected is not None and len(parts) != expected:
        raise InputFormatError(
            f"Line {lineno}: {what} needs {expected} values, got {len(parts)}"
        )
    try:
        values = [int(p) for p in parts]
    except ValueError as e:
        raise InputFormatError(f"Line {lineno}: non-integer value in {what} ({e})") from e
    if any(v < 0 for v in values):
        raise InputFormatError(f"Line {lineno}: negative value in {what}")
    return values


def _next_line(lines: Iterator[Tuple[int, str]], what: str) -> Tuple[int, str]:
    try:
        return next(lines)
    except StopIteration:
        raise InputFormatError(f"Unexpected end of input while reading {what}") from None


def parse_instance(text: str, name: str = "instance") -> Instance:
    """
    Parses the text format:
      V E R C X
      size_0 ... size_{V-1}
      per endpoint: "Ld K" then K lines "cache_id latency"
      R lines "video_id endpoint_id count"
    """
    lines = iter(enumerate(text.split("\n"), start=1))

    lineno, line = _next_line(lines, "header")
    n_videos, n_endpoints, n_requests, n_caches, capacity = _as_ints(line, 5, "header", lineno)

    lineno, line = _next_line(lines, "video sizes")
    sizes = _as_ints(line, n_videos, "video sizes", lineno)
    videos = sizes_to_videos(sizes)

    endpoints: List[Endpoint] = []
    for endpoint_id in range(n_endpoints):
        lineno, line = _next_line(lines, f"endpoint {endpoint_id}")
        origin_latency, n_links = _as_ints(line, 2, f"endpoint {endpoint_id} header", lineno)

        table: Dict[int, int] = {ORIGIN_ID: origin_latency}
        for _ in range(n_links):
            lineno, line = _next_line(lines, f"endpoint {endpoint_id} latencies")
            cache_id, latency = _as_ints(line, 2, f"endpoint {endpoint_id} latency", lineno)
            table[cache_id] = latency

        endpoints.append(Endpoint.from_raw(endpoint_id, table))

    requests: List[Request] = []
    for _ in range(n_requests):
        lineno, line = _next_line(lines, "requests")
        video_id, endpoint_id, count = _as_ints(line, 3, "request", lineno)
        requests.append(Request(video_id=video_id, endpoint_id=endpoint_id, count=count))

    # blank lines after the last request are fine, anything else is not
    for lineno, line in lines:
        if line.strip():
            raise InputFormatError(f"Line {lineno}: unexpected content after {n_requests} requests")

    return Instance(
        name=name,
        cache_info=CacheInfo(count=n_caches, capacity=capacity),
        videos=videos,
        endpoints=endpoints,
        requests=requests,
    )


def load_instance(path: str | Path) -> Instance:
    """
    Loads one input file, e.g. resources/kittens.in
    The instance name is the file stem.
    """
    src = Path(path)
    if not src.exists():
        raise InputFormatError(f"File not found: {src}")

    inst = parse_instance(src.read_text(encoding="utf-8"), name=src.stem)
    return Instance(
        name=inst.name,
        cache_info=inst.cache_info,
        videos=inst.videos,
        endpoints=inst.endpoints,
        requests=inst.requests,
        source_path=src,
    )
