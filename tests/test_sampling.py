import math

import pytest

from vidtext_pipeline.models import SamplingMode
from vidtext_pipeline.transcript.sampling import sample


def test_fits_budget_returns_everything():
    res = sample(list(range(5)), "smart", 5)
    assert res.segments == [0, 1, 2, 3, 4]
    assert res.is_truncated is False
    assert res.message is None


def test_full_mode_head_truncation():
    res = sample(list(range(10)), "full", 3)
    assert res.segments == [0, 1, 2]
    assert res.is_truncated is True
    assert "3 of 10" in res.message


def test_summary_twelve_into_ten():
    res = sample(list(range(12)), SamplingMode.SUMMARY, 10)
    # intro=1, middle=2 (stride 2), conclusion=7
    assert res.segments == [0, 1, 3, 5, 6, 7, 8, 9, 10, 11]
    assert res.is_truncated is True
    assert "1 intro + 2 middle samples + 7 conclusion" in res.message


def test_smart_long_list():
    res = sample(list(range(100)), "smart", 10)
    # intro=2, middle=3 sampled across [2, 95), conclusion=5
    assert res.segments == [0, 1, 2, 33, 64, 95, 96, 97, 98, 99]
    assert "2 intro + 3 middle samples + 5 conclusion from 100" in res.message


def test_smart_short_list():
    res = sample(list(range(12)), "smart", 10)
    assert res.segments == [0, 1, 2, 3, 5, 7, 8, 9, 10, 11]


def test_unknown_mode_falls_back_to_smart():
    assert sample(list(range(100)), "bogus", 10) == sample(list(range(100)), "smart", 10)


@pytest.mark.parametrize("mode", ["full", "smart", "summary"])
@pytest.mark.parametrize("budget", [0, -3])
def test_non_positive_budget(mode, budget):
    res = sample(list(range(5)), mode, budget)
    assert res.segments == []
    assert res.is_truncated is True


@pytest.mark.parametrize("mode", ["full", "smart", "summary"])
def test_budget_order_and_truncation_properties(mode):
    for n in range(0, 60):
        items = list(range(n))
        for budget in range(0, 25):
            res = sample(items, mode, budget)
            out = res.segments
            assert len(out) <= max(budget, 0)
            assert out == sorted(set(out))
            assert res.is_truncated == (n > budget)
            intro = {"full": budget, "smart": math.floor(budget * 0.2), "summary": math.floor(budget * 0.1)}[mode]
            if out and intro > 0:
                assert out[0] == 0


def test_sampling_segments_keeps_timeline_order(make_segments):
    segs = make_segments(50)
    res = sample(segs, "summary", 20)
    starts = [s.start for s in res.segments]
    assert starts == sorted(starts)
    assert res.segments[-1] is segs[-1]
