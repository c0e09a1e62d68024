"""Tests for the per-iteration statistics aggregator."""
import pytest

from antsim import InvalidStateError, IterationStats, StatsAggregator
from antsim.stats import CSV_HEADER


@pytest.mark.parametrize("iteration", [0, -1, 5])
def test_start_iteration_does_not_raise(iteration):
    StatsAggregator().start_iteration(iteration)


def test_stop_iteration_with_none_raises():
    agg = StatsAggregator()
    agg.start_iteration(0)
    with pytest.raises(TypeError):
        agg.stop_iteration(None)


def test_stop_iteration_with_empty_lengths_raises():
    agg = StatsAggregator()
    agg.start_iteration(0)
    with pytest.raises(ValueError):
        agg.stop_iteration([])


def test_stop_without_start_raises():
    with pytest.raises(InvalidStateError):
        StatsAggregator().stop_iteration([0.0])


def test_stop_twice_raises():
    agg = StatsAggregator()
    agg.start_iteration(0)
    agg.stop_iteration([1.0])
    with pytest.raises(InvalidStateError):
        agg.stop_iteration([1.0])


def test_single_iteration_summary():
    agg = StatsAggregator()
    agg.start_iteration(1)
    item = agg.stop_iteration([1.0, 2.0, 3.0, 4.0])
    assert agg.iteration_stats == [item]
    assert item.iteration == 1
    assert item.average_tour_length == pytest.approx(2.5)
    assert item.best_tour_length == 1.0
    assert item.elapsed_ms >= 0.0


def test_clear_removes_items():
    agg = StatsAggregator()
    agg.start_iteration(1)
    agg.stop_iteration([1.0, 2.0])
    agg.clear()
    assert agg.iteration_stats == []


def test_csv_row_matches_header():
    item = IterationStats(3, 12.5, 100.0, 90.0)
    assert len(item.csv_row()) == len(CSV_HEADER)
    assert item.csv_row() == (3, 12.5, 100.0, 90.0)


def test_items_order_by_iteration():
    items = [IterationStats(2, 0.0, 1.0, 1.0), IterationStats(0, 5.0, 1.0, 1.0)]
    assert [i.iteration for i in sorted(items)] == [0, 2]
