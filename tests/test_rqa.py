import dataclasses
import math

import numpy as np
import pytest

from nonlinsig.rqa import (
    RQAAnalyzer,
    RQAMetrics,
    compute_rqa,
    dynamic_threshold,
    recurrence_matrix,
)


def _random_walk(n, seed=3):
    rng = np.random.default_rng(seed)
    return np.cumsum(rng.normal(scale=0.05, size=(n, 3)), axis=0)


def test_dynamic_threshold_of_symmetric_points():
    points = [[1.0, 0.0, 0.0], [-1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, -1.0, 0.0]]
    assert dynamic_threshold(points, 0.5) == pytest.approx(0.5)


def test_dynamic_threshold_rejects_empty():
    with pytest.raises(ValueError):
        dynamic_threshold(np.zeros((0, 3)), 0.1)


def test_recurrence_matrix_uses_strict_threshold():
    points = [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]]
    assert not recurrence_matrix(points, 1.0).any()
    assert recurrence_matrix(points, 1.01).tolist() == [[False, True], [True, False]]


def test_recurrence_matrix_symmetric_with_empty_diagonal():
    points = _random_walk(60)
    matrix = recurrence_matrix(points, 0.2)
    assert np.array_equal(matrix, matrix.T)
    assert not np.diagonal(matrix).any()
    assert matrix.shape == (60, 60)


def test_recurrence_matrix_rejects_one_dimensional_input():
    with pytest.raises(ValueError):
        recurrence_matrix([1.0, 2.0, 3.0], 0.1)


def test_identical_points_worked_example():
    n = 6
    m = compute_rqa(np.zeros((n, 3)), 0.1, 1, 1)
    assert m.recurrence_rate == pytest.approx((n - 1) / n)
    assert m.lmax == n - 1
    assert m.entropy == pytest.approx(math.log(n - 1))
    assert m.laminarity == pytest.approx(1.0)
    assert m.determinism * 2 == pytest.approx(m.laminarity)
    assert m.trapping_time == pytest.approx(n / 2)


def test_distant_points_give_zero_measures():
    points = np.arange(30, dtype=float).reshape(10, 3) * 10
    m = compute_rqa(points, 0.1, 1, 1)
    assert dataclasses.astuple(m) == (0.0,) * 6


def test_minimum_lengths_longer_than_window_drop_all_lines():
    points = np.zeros((5, 3))
    m = compute_rqa(points, 0.1, 100, 100)
    assert m.recurrence_rate == pytest.approx(4 / 5)
    assert m.determinism == m.lmax == m.entropy == m.laminarity == m.trapping_time == 0


def test_minimum_lengths_are_truncated():
    points = _random_walk(80)
    assert compute_rqa(points, 0.15, 2.9, 3.7) == compute_rqa(points, 0.15, 2, 3)


def test_measures_stay_in_bounds_on_random_data():
    points = _random_walk(120, seed=11)
    m = compute_rqa(points, 0.2, 2, 2)
    assert 0 <= m.recurrence_rate <= 1
    assert 0 <= m.determinism <= m.laminarity <= 1 or 0 <= m.laminarity <= 1
    assert 0 <= m.determinism <= 1
    assert m.lmax <= len(points) - 1
    assert m.entropy >= 0
    assert m.trapping_time == 0 or m.trapping_time >= 2


def test_larger_threshold_never_lowers_recurrence_rate():
    points = _random_walk(90, seed=5)
    small = compute_rqa(points, 0.1, 2, 2)
    large = compute_rqa(points, 0.3, 2, 2)
    assert large.recurrence_rate >= small.recurrence_rate


def test_compute_rqa_rejects_empty():
    with pytest.raises(ValueError):
        compute_rqa(np.zeros((0, 3)), 0.1, 1, 1)


def test_snapshot_is_ordered_oldest_first():
    analyzer = RQAAnalyzer(4, subsample_factor=1, hop_size=100)
    for k in range(6):
        analyzer.process(float(k), 0.0, 0.0)
    assert analyzer.snapshot()[:, 0].tolist() == [2.0, 3.0, 4.0, 5.0]


def test_subsampling_keeps_every_nth_sample():
    analyzer = RQAAnalyzer(2, subsample_factor=2, hop_size=100)
    for k in range(4):
        analyzer.process(float(k), float(k), float(k))
    assert analyzer.snapshot()[:, 1].tolist() == [0.0, 2.0]


def test_metrics_update_after_hop():
    analyzer = RQAAnalyzer(4, subsample_factor=1, hop_size=4, threshold=0.5, l_min=1, v_min=1)
    samples = [(0.0, 0.0, 0.0), (0.1, 0.0, 0.0), (0.2, 0.0, 0.0)]
    for sample in samples:
        assert analyzer.process(*sample) == RQAMetrics()
    result = analyzer.process(0.3, 0.0, 0.0)
    expected = compute_rqa(analyzer.snapshot(), 0.5, 1, 1)
    assert result == expected
    assert analyzer.metrics == expected
    assert result.recurrence_rate > 0


def test_dynamic_threshold_in_analyzer():
    analyzer = RQAAnalyzer(
        5,
        subsample_factor=1,
        hop_size=5,
        use_dynamic_threshold=True,
        dynamic_threshold_factor=0.5,
        l_min=1,
        v_min=1,
    )
    points = _random_walk(5, seed=7)
    for row in points:
        result = analyzer.process(*row)
    snap = analyzer.snapshot()
    assert np.allclose(snap, points)
    assert result == compute_rqa(snap, dynamic_threshold(snap, 0.5), 1, 1)


def test_hop_size_is_fixed_at_construction():
    analyzer = RQAAnalyzer(8, hop_size=3.9)
    assert analyzer.hop_size == 3
    with pytest.raises(AttributeError):
        analyzer.hop_size = 5


def test_invalid_subsample_factor_raises():
    analyzer = RQAAnalyzer(4, subsample_factor=0)
    with pytest.raises(ValueError):
        analyzer.process(0.0, 0.0, 0.0)


def test_invalid_window_size_raises():
    with pytest.raises(ValueError):
        RQAAnalyzer(0)