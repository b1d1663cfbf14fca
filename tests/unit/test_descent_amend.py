"""Unit tests for greedy descent with marginal re-scoring."""

from vcp.vcp.decoders.descent import decode_descent
from vcp.vcp.decoders.descent_amend import decode_descent_amend, discount_shared_endpoints
from vcp.vcp.eval.gain import PairGain
from vcp.vcp.eval.saving import evaluate_placement
from vcp.vcp.index.latency import build_latency_index
from vcp.vcp.models.items import CacheInfo
from vcp.vcp.polices.scoring import ScoringPolicy


def _kw(instance):
    cache_info, videos, endpoints, requests = instance
    return dict(cache_info=cache_info, videos=videos, endpoints=endpoints, requests=requests)


class TestDiscount:
    def test_shared_endpoint_reduced(self):
        placed = PairGain(video_id=0, cache_id=0, size=10, local_gains={0: 500, 1: 100})
        other = PairGain(video_id=0, cache_id=1, size=10, local_gains={0: 800, 2: 50}, audience=4)
        assert discount_shared_endpoints(placed, other, ScoringPolicy.PURE_GAIN) is True
        assert other.local_gains == {0: 300, 2: 50}
        assert other.score == 350

    def test_floor_at_zero(self):
        placed = PairGain(video_id=0, cache_id=0, size=10, local_gains={0: 500})
        other = PairGain(video_id=0, cache_id=1, size=10, local_gains={0: 200})
        discount_shared_endpoints(placed, other, ScoringPolicy.PURE_GAIN)
        assert other.local_gains == {0: 0}
        assert other.score == 0

    def test_negative_capture_ignored(self):
        placed = PairGain(video_id=0, cache_id=0, size=10, local_gains={0: -500})
        other = PairGain(video_id=0, cache_id=1, size=10, local_gains={0: 200})
        discount_shared_endpoints(placed, other, ScoringPolicy.PURE_GAIN)
        assert other.local_gains == {0: 200}

    def test_no_shared_endpoint(self):
        placed = PairGain(video_id=0, cache_id=0, size=10, local_gains={0: 500})
        other = PairGain(video_id=0, cache_id=1, size=10, local_gains={1: 200}, score=200)
        assert discount_shared_endpoints(placed, other, ScoringPolicy.PURE_GAIN) is False
        assert other.local_gains == {1: 200}

    def test_rescored_with_policy(self):
        placed = PairGain(video_id=0, cache_id=0, size=10, local_gains={0: 500})
        other = PairGain(video_id=0, cache_id=1, size=10, local_gains={0: 800}, audience=2)
        discount_shared_endpoints(placed, other, ScoringPolicy.GAIN_OVER_AUDIENCE)
        assert other.score == 150


class TestDecodeDescentAmend:
    def test_single_pair(self, scenario_a):
        assert decode_descent_amend(**_kw(scenario_a)) == {0: {0}}

    def test_avoids_double_credit(self, overlap_instance):
        plain = decode_descent(**_kw(overlap_instance))
        amended = decode_descent_amend(**_kw(overlap_instance))
        assert plain == {0: {0}, 1: {0}}
        assert amended == {0: {0}, 1: {1}}

        cache_info, videos, endpoints, requests = overlap_instance
        li = build_latency_index(cache_info, endpoints)
        saved_plain = evaluate_placement(plain, li, requests).total_saved
        saved_amended = evaluate_placement(amended, li, requests).total_saved
        assert saved_plain == 900000
        assert saved_amended == 1350000

    def test_iteration_budget(self, overlap_instance, capsys):
        out = decode_descent_amend(**_kw(overlap_instance), max_iterations=1)
        assert out == {0: {0}, 1: set()}
        assert "iteration budget" in capsys.readouterr().out

    def test_zero_caches(self, scenario_a):
        _, videos, _, _ = scenario_a
        out = decode_descent_amend(cache_info=CacheInfo(0, 100), videos=videos,
                                   endpoints=[], requests=[])
        assert out == {}

    def test_deterministic(self, sample_text):
        from vcp.vcp.data.hashcode_input import parse_instance

        inst = parse_instance(sample_text)
        kw = dict(cache_info=inst.cache_info, videos=inst.videos,
                  endpoints=inst.endpoints, requests=inst.requests)
        assert decode_descent_amend(**kw) == decode_descent_amend(**kw)

    def test_respects_capacity(self, sample_text):
        from vcp.vcp.data.hashcode_input import parse_instance

        inst = parse_instance(sample_text)
        sizes = {v.id: v.size for v in inst.videos}
        out = decode_descent_amend(cache_info=inst.cache_info, videos=inst.videos,
                                   endpoints=inst.endpoints, requests=inst.requests)
        for vids in out.values():
            assert sum(sizes[v] for v in vids) <= inst.cache_info.capacity
