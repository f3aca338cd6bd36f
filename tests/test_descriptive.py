import logging
import math

import numpy as np
import pytest
from scipy import stats as sps

from traffic_analytics.analysis.descriptive import (
    BasicStats,
    calculate_basic_stats,
    calculate_confidence_interval,
    mean,
    percentile,
    sample_variance,
    z_score,
)


def test_basic_stats_known_values():
    stats = calculate_basic_stats([1, 2, 3, 4, 5])
    assert stats.mean == pytest.approx(3.0)
    assert stats.median == pytest.approx(3.0)
    assert stats.variance == pytest.approx(2.0)
    assert stats.std_dev == pytest.approx(math.sqrt(2.0))
    assert stats.min == 1 and stats.max == 5
    assert stats.q1 == pytest.approx(2.0)
    assert stats.q3 == pytest.approx(4.0)
    assert stats.iqr == pytest.approx(2.0)
    assert stats.skewness == pytest.approx(0.0, abs=1e-12)
    assert stats.kurtosis == pytest.approx(-1.3)


def test_median_of_even_sample():
    assert calculate_basic_stats([4, 1, 3, 2]).median == pytest.approx(2.5)


def test_empty_sample_gives_zeros():
    assert calculate_basic_stats([]) == BasicStats()
    assert mean([]) == 0.0
    assert percentile([], 50) == 0.0


def test_constant_sample_has_no_shape():
    stats = calculate_basic_stats([5.0, 5.0, 5.0, 5.0])
    assert stats.std_dev == 0.0
    assert stats.skewness == 0.0
    assert stats.kurtosis == 0.0


def test_moments_match_scipy(rng):
    data = rng.gamma(2.0, 3.0, size=500)
    stats = calculate_basic_stats(data)
    assert stats.skewness == pytest.approx(sps.skew(data, bias=True), rel=1e-9)
    assert stats.kurtosis == pytest.approx(sps.kurtosis(data, fisher=True, bias=True), rel=1e-9)
    assert stats.min <= stats.q1 <= stats.median <= stats.q3 <= stats.max
    assert stats.min <= stats.mean <= stats.max


def test_sample_variance_uses_n_minus_one():
    assert sample_variance([1, 2, 3, 4, 5]) == pytest.approx(2.5)
    assert sample_variance([7.0]) == 0.0


def test_percentile_interpolates():
    assert percentile([10, 20, 30, 40], 50) == pytest.approx(25.0)
    assert percentile([10, 20, 30, 40], 0) == 10
    assert percentile([10, 20, 30, 40], 100) == 40


def test_confidence_interval_bounds():
    ci = calculate_confidence_interval([1, 2, 3, 4, 5], 0.95)
    expected_margin = 1.96 * math.sqrt(2.0) / math.sqrt(5)
    assert ci.margin_of_error == pytest.approx(expected_margin)
    assert ci.lower_bound < ci.mean < ci.upper_bound
    assert ci.upper_bound - ci.lower_bound == pytest.approx(2 * expected_margin)


def test_wider_level_gives_wider_interval(rng):
    data = rng.normal(10, 2, size=50)
    narrow = calculate_confidence_interval(data, 0.90)
    wide = calculate_confidence_interval(data, 0.99)
    assert wide.margin_of_error > narrow.margin_of_error


def test_unsupported_level_falls_back_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        ci = calculate_confidence_interval([1, 2, 3, 4, 5], 0.80)
    assert "Unsupported confidence level" in caplog.text
    assert ci.margin_of_error == pytest.approx(1.96 * math.sqrt(2.0) / math.sqrt(5))
    assert ci.confidence_level == 0.80


def test_z_scores():
    assert z_score(0.90) == 1.645
    assert z_score(0.99) == 2.576


def test_empty_confidence_interval():
    ci = calculate_confidence_interval([])
    assert (ci.mean, ci.lower_bound, ci.upper_bound, ci.margin_of_error) == (0.0, 0.0, 0.0, 0.0)


def test_to_dict_has_all_fields():
    d = calculate_basic_stats(np.arange(10)).to_dict()
    assert set(d) == {"mean", "median", "std_dev", "variance", "min", "max",
                      "q1", "q3", "iqr", "skewness", "kurtosis"}


@pytest.mark.parametrize("value, n", [(0.1, 3), (0.7, 10), (3.3, 100)])
def test_constant_inexact_sample_has_no_spread(value, n):
    stats = calculate_basic_stats([value] * n)
    assert stats.mean == value
    assert stats.variance == 0.0
    assert stats.std_dev == 0.0
    assert stats.skewness == 0.0
    assert stats.kurtosis == 0.0
    assert sample_variance([value] * n) == 0.0
