import math

import pytest

from nordic_analyzer.domain.stats import tracker
from nordic_analyzer.schemas.metrics_dto import MetricSeries
from tests.test_helpers import assert_average_consistent


def test_new_series_defaults():
    s = MetricSeries()
    assert s.current == 0.0
    assert s.max == 0.0
    assert math.isinf(s.min)
    assert s.values == []
    assert s.average == 0.0


def test_record_updates_all_fields():
    s = MetricSeries()
    for v in (10.0, 30.0, 20.0):
        assert tracker.record(s, v) is True

    assert s.current == 20.0
    assert s.max == 30.0
    assert s.min == 10.0
    assert s.values == [10.0, 30.0, 20.0]
    assert s.average == pytest.approx(20.0)


@pytest.mark.parametrize("value", [None, float("nan"), float("inf")])
def test_record_ignores_missing_values(value):
    s = MetricSeries()
    tracker.record(s, 5.0)
    assert tracker.record(s, value) is False
    assert s.values == [5.0]
    assert s.current == 5.0


def test_average_rederivable_from_values():
    s = MetricSeries()
    for v in [3.5, 7.25, 1.0, 99.0, 42.0, 0.5]:
        tracker.record(s, v)
        assert_average_consistent(s)


def test_fifo_cap_keeps_last_300():
    """301개 기록 → 300개, 가장 오래된 값 제거. max/min은 유지"""
    s = MetricSeries()
    tracker.record(s, 1000.0)
    for v in range(1, 301):
        tracker.record(s, float(v))

    assert len(s.values) == 300
    assert s.values[0] == 1.0
    assert s.values[-1] == 300.0
    # 밀려난 값도 max에는 남아 있다
    assert s.max == 1000.0
    assert s.min == 1.0
    assert_average_consistent(s)


def test_custom_cap():
    s = MetricSeries()
    for v in range(10):
        tracker.record(s, float(v), cap=3)
    assert s.values == [7.0, 8.0, 9.0]
    assert s.average == pytest.approx(8.0)


def test_set_current_only_touches_current():
    s = MetricSeries()
    tracker.record(s, 50.0)
    tracker.set_current(s, 300.0)
    assert s.current == 300.0
    assert s.max == 50.0
    assert s.values == [50.0]


def test_reset_restores_initial_state():
    s = MetricSeries()
    tracker.record(s, 12.0)
    tracker.reset(s)
    assert s == MetricSeries()


def test_combined_extremes():
    a, b = MetricSeries(), MetricSeries()
    tracker.record(a, 30.0)
    tracker.record(b, 50.0)
    tracker.record(b, 40.0)
    assert tracker.combined_extremes([a, b]) == pytest.approx((50.0, 30.0, 40.0))
    assert tracker.combined_extremes([MetricSeries()]) is None
