"""Shared fixtures for vcp tests."""

from __future__ import annotations

import pytest

from vcp.vcp.models.items import CacheInfo, Endpoint, Request, Video


SAMPLE_INPUT = """5 2 4 3 100
50 50 80 30 110
1000 3
0 100
2 100
1 300
500 0
3 0 1500
0 1 1000
4 0 500
1 0 1000
"""


@pytest.fixture
def sample_text() -> str:
    """Five videos, two endpoints (the second one reaches no cache), three caches."""
    return SAMPLE_INPUT


@pytest.fixture
def scenario_a():
    """1 cache (500), 1 video (100), origin 200 / cache 100, 1000 requests."""
    cache_info = CacheInfo(count=1, capacity=500)
    videos = [Video(0, 100)]
    endpoints = [Endpoint.from_raw(0, {-1: 200, 0: 100})]
    requests = [Request(0, 0, 1000)]
    return cache_info, videos, endpoints, requests


@pytest.fixture
def scenario_b(scenario_a):
    """Scenario A plus a second video (200) with 1500 requests on the same endpoint."""
    cache_info, videos, endpoints, requests = scenario_a
    return (
        cache_info,
        videos + [Video(1, 200)],
        endpoints,
        requests + [Request(1, 0, 1500)],
    )


@pytest.fixture
def scenario_c():
    """1 video, 2 endpoints: cache latency 200 vs 100, origin 300 for both."""
    cache_info = CacheInfo(count=1, capacity=500)
    videos = [Video(0, 100)]
    endpoints = [
        Endpoint.from_raw(0, {-1: 300, 0: 200}),
        Endpoint.from_raw(1, {-1: 300, 0: 100}),
    ]
    requests = [Request(0, 0, 1000), Request(0, 1, 1500)]
    return cache_info, videos, endpoints, requests


@pytest.fixture
def overlap_instance():
    """
    Two caches of 100. Endpoint 0 reaches both caches, endpoint 1 only cache 1.
    Video 0 (popular on endpoint 0) scores the same on both caches; video 1
    is only useful on cache 1.
    """
    cache_info = CacheInfo(count=2, capacity=100)
    videos = [Video(0, 100), Video(1, 100)]
    endpoints = [
        Endpoint.from_raw(0, {-1: 1000, 0: 100, 1: 100}),
        Endpoint.from_raw(1, {-1: 1000, 1: 100}),
    ]
    requests = [Request(0, 0, 1000), Request(1, 1, 500)]
    return cache_info, videos, endpoints, requests
