"""Unit tests for the named video orderings."""

import pytest

from vcp.vcp.decoders.naive import decode_filling
from vcp.vcp.index.demand import build_demand_index
from vcp.vcp.models.items import CacheInfo, Endpoint, Request, Video
from vcp.vcp.polices.video_order import POLICIES, apply_video_order


VIDEOS = [Video(2, 40), Video(0, 70), Video(1, 40)]


class TestApplyVideoOrder:
    def test_input_keeps_order(self):
        assert [v.id for v in apply_video_order(VIDEOS, "input")] == [2, 0, 1]

    def test_id(self):
        assert [v.id for v in apply_video_order(VIDEOS, "id")] == [0, 1, 2]

    def test_size_asc_ties_by_id(self):
        assert [v.id for v in apply_video_order(VIDEOS, "size_asc")] == [1, 2, 0]

    def test_demand_desc(self):
        endpoints = [Endpoint.from_raw(0, {-1: 100}), Endpoint.from_raw(1, {-1: 100})]
        index = build_demand_index(VIDEOS, endpoints, [Request(2, 0, 5), Request(2, 1, 5), Request(0, 0, 10)])
        # 0 and 2 both have 10 requests, lower id first
        assert [v.id for v in apply_video_order(VIDEOS, "demand_desc", index)] == [0, 2, 1]

    def test_demand_desc_needs_index(self):
        with pytest.raises(ValueError):
            apply_video_order(VIDEOS, "demand_desc")

    def test_unknown(self):
        with pytest.raises(ValueError):
            apply_video_order(VIDEOS, "random")

    def test_registry(self):
        assert set(POLICIES) == {"input", "id", "demand_desc", "size_asc"}


class TestOrderedFilling:
    def test_size_asc_packs_more(self):
        by_id = decode_filling(CacheInfo(1, 80), VIDEOS)
        by_size = decode_filling(CacheInfo(1, 80), VIDEOS, video_order="size_asc")
        assert by_id == {0: {0}}
        assert by_size == {0: {1, 2}}
