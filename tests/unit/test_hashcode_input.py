"""Unit tests for the input text reader."""

import pytest

from vcp.scripts.generate_instance import generate_instance
from vcp.vcp.data.hashcode_input import load_instance, parse_instance
from vcp.vcp.errors import InputFormatError


class TestParseInstance:
    def test_end_to_end(self, sample_text):
        inst = parse_instance(sample_text, name="example")
        assert inst.name == "example"
        assert inst.cache_info.count == 3
        assert inst.cache_info.capacity == 100

        assert [v.size for v in inst.videos] == [50, 50, 80, 30, 110]
        assert [v.id for v in inst.videos] == [0, 1, 2, 3, 4]

        assert len(inst.endpoints) == 2
        ep0, ep1 = inst.endpoints
        assert ep0.latency_to_origin == 1000
        assert ep0.latency_to_cache == {0: 100, 2: 100, 1: 300}
        assert ep1.latency_to_origin == 500
        assert ep1.latency_to_cache == {}

        assert len(inst.requests) == 4
        first = inst.requests[0]
        assert (first.video_id, first.endpoint_id, first.count) == (3, 0, 1500)
        last = inst.requests[3]
        assert (last.video_id, last.endpoint_id, last.count) == (1, 0, 1000)

    def test_without_trailing_newline(self, sample_text):
        inst = parse_instance(sample_text.rstrip("\n"))
        assert len(inst.requests) == 4

    def test_cache_info_and_videos_only(self):
        inst = parse_instance("2 0 0 123 456\n12 34")
        assert inst.cache_info.count == 123
        assert inst.cache_info.capacity == 456
        assert [v.size for v in inst.videos] == [12, 34]
        assert inst.endpoints == []
        assert inst.requests == []

    def test_zero_videos(self):
        inst = parse_instance("0 0 0 5 500\n\n")
        assert inst.videos == []
        assert inst.cache_info.count == 5

    def test_zero_video_instance_from_generator(self):
        inst = parse_instance(generate_instance(0, n_videos=0, n_endpoints=0, n_requests=0))
        assert inst.videos == []
        assert inst.endpoints == []
        assert inst.requests == []

    def test_blank_lines_after_requests(self, sample_text):
        inst = parse_instance(sample_text + "\n\n  \n")
        assert len(inst.requests) == 4


class TestParseErrors:
    def test_invalid_header(self):
        with pytest.raises(InputFormatError):
            parse_instance("0 0 0 0")

    def test_missing_video_line(self):
        with pytest.raises(InputFormatError):
            parse_instance("0 0 0 0 0")

    def test_video_count_mismatch(self):
        with pytest.raises(InputFormatError):
            parse_instance("1 0 0 0 0\n\n")

    def test_non_integer(self):
        with pytest.raises(InputFormatError):
            parse_instance("1 0 0 1 10\nabc")

    def test_negative_value(self):
        with pytest.raises(InputFormatError):
            parse_instance("1 0 0 1 10\n-5")

    def test_truncated_endpoint_block(self):
        with pytest.raises(InputFormatError):
            parse_instance("1 1 0 1 10\n5\n1000 2\n0 100")

    def test_missing_requests(self):
        with pytest.raises(InputFormatError):
            parse_instance("1 1 2 1 10\n5\n1000 0\n0 0 10")

    def test_extra_request_line(self):
        with pytest.raises(InputFormatError):
            parse_instance("1 1 1 1 10\n5\n1000 0\n0 0 10\n0 0 20")


class TestLoadInstance:
    def test_name_from_file_stem(self, tmp_path, sample_text):
        path = tmp_path / "kittens.in"
        path.write_text(sample_text, encoding="utf-8")
        inst = load_instance(path)
        assert inst.name == "kittens"
        assert inst.source_path == path
        assert len(inst.videos) == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFormatError):
            load_instance(tmp_path / "nope.in")
