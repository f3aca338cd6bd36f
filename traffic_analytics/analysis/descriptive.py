"""
Descriptive statistics and confidence intervals for sample vectors.

Empty input never raises: every function returns a well-defined zero result.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)

Z_SCORES = {
    0.90: 1.645,
    0.95: 1.96,
    0.99: 2.576,
}
DEFAULT_Z_SCORE = 1.96


@dataclass(frozen=True)
class BasicStats:
    mean: float = 0.0
    median: float = 0.0
    std_dev: float = 0.0
    variance: float = 0.0
    min: float = 0.0
    max: float = 0.0
    q1: float = 0.0
    q3: float = 0.0
    iqr: float = 0.0
    skewness: float = 0.0
    kurtosis: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ConfidenceInterval:
    mean: float
    lower_bound: float
    upper_bound: float
    confidence_level: float
    margin_of_error: float

    def to_dict(self) -> dict:
        return asdict(self)


def _as_array(data: Sequence[float]) -> np.ndarray:
    return np.asarray(data, dtype=float).ravel()


def is_constant(values: np.ndarray) -> bool:
    """True for a non-empty sample whose values are all identical."""
    return bool(values.size > 0 and np.ptp(values) == 0)


def mean(data: Sequence[float]) -> float:
    values = _as_array(data)
    if values.size == 0:
        return 0.0
    if is_constant(values):
        return float(values[0])
    return float(np.mean(values))


def sample_variance(data: Sequence[float]) -> float:
    """Unbiased variance (divisor N-1). Returns 0 for fewer than two values."""
    values = _as_array(data)
    if values.size < 2 or is_constant(values):
        return 0.0
    return float(np.sum((values - values.mean()) ** 2) / (values.size - 1))


def percentile(sorted_data: Sequence[float], pct: float) -> float:
    """Linear interpolation between ranked values; `sorted_data` must be ascending."""
    values = _as_array(sorted_data)
    if values.size == 0:
        return 0.0
    index = (pct / 100.0) * (values.size - 1)
    lower = int(math.floor(index))
    upper = int(math.ceil(index))
    if lower == upper:
        return float(values[lower])
    weight = index - lower
    return float(values[lower] * (1 - weight) + values[upper] * weight)


def calculate_basic_stats(data: Sequence[float]) -> BasicStats:
    """
    Summary statistics of a sample.

    Variance and standard deviation use the population divisor N.
    Skewness is the third standardized moment, kurtosis the fourth minus 3
    (excess kurtosis). Both are 0 for a constant sample.
    """
    values = _as_array(data)
    n = values.size
    if n == 0:
        return BasicStats()

    ordered = np.sort(values)
    avg = mean(values)

    if n % 2 == 0:
        median = float((ordered[n // 2 - 1] + ordered[n // 2]) / 2)
    else:
        median = float(ordered[n // 2])

    # Exact zeros for a constant sample, where rounding would leave ~1e-17 residues
    deviations = np.zeros(n) if is_constant(values) else values - avg
    variance = float(np.sum(deviations ** 2) / n)
    std_dev = math.sqrt(variance)

    q1 = percentile(ordered, 25)
    q3 = percentile(ordered, 75)

    if std_dev > 0:
        skewness = float(np.sum(deviations ** 3) / (n * std_dev ** 3))
        kurtosis = float(np.sum(deviations ** 4) / (n * std_dev ** 4) - 3)
    else:
        skewness = 0.0
        kurtosis = 0.0

    return BasicStats(
        mean=avg,
        median=median,
        std_dev=std_dev,
        variance=variance,
        min=float(ordered[0]),
        max=float(ordered[-1]),
        q1=q1,
        q3=q3,
        iqr=q3 - q1,
        skewness=skewness,
        kurtosis=kurtosis,
    )


def z_score(confidence_level: float) -> float:
    for level, z in Z_SCORES.items():
        if math.isclose(level, confidence_level):
            return z
    logger.warning(
        "Unsupported confidence level %s, falling back to z=%.2f (95%%)",
        confidence_level, DEFAULT_Z_SCORE,
    )
    return DEFAULT_Z_SCORE


def calculate_confidence_interval(data: Sequence[float], confidence_level: float = 0.95) -> ConfidenceInterval:
    """
    Normal-approximation interval: mean +/- z * stddev / sqrt(n).

    Uses the population standard deviation and z instead of Student's t,
    so it is not exact for small n.
    """
    values = _as_array(data)
    z = z_score(confidence_level)
    if values.size == 0:
        return ConfidenceInterval(0.0, 0.0, 0.0, confidence_level, 0.0)

    stats = calculate_basic_stats(values)
    margin = z * stats.std_dev / math.sqrt(values.size)
    return ConfidenceInterval(
        mean=stats.mean,
        lower_bound=stats.mean - margin,
        upper_bound=stats.mean + margin,
        confidence_level=confidence_level,
        margin_of_error=margin,
    )
