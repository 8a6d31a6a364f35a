"""Unit tests for the aggregation window."""

from __future__ import annotations

from datetime import datetime

import pytest

from eltakoms.aggregator.window import AggregationWindow, round_half_away
from eltakoms.shared.models import Reading

# 1_700_000_040 is a multiple of 60 and of 10
BOUNDARY = 1_700_000_040


def _reading(**overrides) -> Reading:
    values = dict(
        temperature_tenths=76,
        sun_south=1,
        sun_west=63,
        sun_east=0,
        obscure=False,
        dawn=999,
        wind_tenths=12,
        raining=False,
    )
    values.update(overrides)
    return Reading(**values)


def _feed(window: AggregationWindow, timestamps) -> list:
    closes = []
    for ts in timestamps:
        window.accumulate(_reading())
        if window.should_close(ts):
            closes.append(ts)
            window.finalize(ts)
    return closes


@pytest.mark.parametrize(
    "total, count, expected",
    [(153, 2, 77), (152, 2, 76), (-11, 2, -6), (-10, 3, -3), (5, 3, 2), (0, 4, 0)],
)
def test_round_half_away(total, count, expected) -> None:
    assert round_half_away(total, count) == expected


def test_closes_twice_in_125_seconds() -> None:
    window = AggregationWindow(60)
    closes = _feed(window, range(BOUNDARY, BOUNDARY + 125))
    assert closes == [BOUNDARY + 60, BOUNDARY + 120]


def test_first_reading_never_closes() -> None:
    window = AggregationWindow(60)
    window.accumulate(_reading())
    assert window.should_close(BOUNDARY + 59) is False


def test_phase_is_recorded_when_not_closing() -> None:
    window = AggregationWindow(60)
    window.should_close(BOUNDARY + 30)
    assert window.previous_phase == 30
    window.should_close(BOUNDARY + 31)
    assert window.previous_phase == 31


def test_gap_of_a_whole_interval_closes() -> None:
    window = AggregationWindow(60)
    closes = _feed(window, [BOUNDARY + 10, BOUNDARY + 75])
    assert closes == [BOUNDARY + 75]


def test_explicit_interval_argument_overrides_default() -> None:
    window = AggregationWindow(60)
    window.should_close(BOUNDARY + 9)
    assert window.should_close(BOUNDARY + 10, interval_seconds=10) is True


def test_finalize_averages_maxima_and_flags() -> None:
    window = AggregationWindow(60)
    window.accumulate(_reading(temperature_tenths=-5, sun_south=10, dawn=100,
                               wind_tenths=30, raining=True))
    window.accumulate(_reading(temperature_tenths=-6, sun_south=11, dawn=101,
                               wind_tenths=80, obscure=True))
    window.accumulate(_reading(temperature_tenths=-7, sun_south=11, dawn=101,
                               wind_tenths=50))

    record = window.finalize(BOUNDARY + 30)

    assert record.sample_count == 3
    assert record.temperature_tenths == -6
    assert record.sun_south == 11  # 32 / 3 = 10.67
    assert record.dawn == 101  # 302 / 3 = 100.67
    assert record.wind_tenths == 80
    # a later dry reading does not clear the flag
    assert record.raining is True
    assert record.obscure is True
    assert record.timestamp == datetime.fromtimestamp(BOUNDARY + 30)


def test_finalize_resets_accumulators() -> None:
    window = AggregationWindow(60)
    window.accumulate(_reading(raining=True, wind_tenths=99))
    window.finalize(BOUNDARY)

    assert window.count == 0
    assert window.temperature_sum == 0
    assert window.wind_max == 0
    assert window.raining is False


def test_finalize_of_empty_window_returns_none() -> None:
    window = AggregationWindow(60)
    assert window.finalize(BOUNDARY) is None

    window.accumulate(_reading())
    assert window.finalize(BOUNDARY) is not None
    assert window.finalize(BOUNDARY) is None


def test_summary_time_snaps_to_boundary_early_in_window() -> None:
    window = AggregationWindow(60)
    assert window.summary_time(BOUNDARY + 2) == datetime.fromtimestamp(BOUNDARY)
    assert window.summary_time(BOUNDARY + 3) == datetime.fromtimestamp(BOUNDARY)
    assert window.summary_time(BOUNDARY + 4) == datetime.fromtimestamp(BOUNDARY + 4)


def test_interval_below_minimum_is_rejected() -> None:
    with pytest.raises(ValueError):
        AggregationWindow(9)


def test_summary_time_follows_interval_used_for_closing() -> None:
    window = AggregationWindow(60)
    window.accumulate(_reading())
    window.should_close(BOUNDARY + 15, interval_seconds=20)
    assert window.should_close(BOUNDARY + 21, interval_seconds=20) is True

    record = window.finalize(BOUNDARY + 21)

    # one second into a 20 s interval snaps; 21 s into a 60 s one would not
    assert record.timestamp == datetime.fromtimestamp(BOUNDARY + 20)
