"""
Hypothesis tests for comparing control strategies.

- Welch's t-test for two strategies (unequal variances)
- One-way ANOVA across several strategies
- Chi-square test of independence on a contingency table
"""

import itertools
import math
from dataclasses import dataclass, asdict
from typing import Dict, List, Sequence

import numpy as np

from traffic_analytics.analysis.descriptive import mean, sample_variance, calculate_basic_stats, is_constant
from traffic_analytics.analysis.distributions import t_cdf, f_cdf, chi_square_cdf

DEFAULT_ALPHA = 0.05


@dataclass(frozen=True)
class TTestResult:
    t_statistic: float
    p_value: float
    degrees_freedom: float
    effect_size: float
    effect_magnitude: str
    significant: bool
    interpretation: str
    test_name: str = "Welch's t-test"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AnovaResult:
    f_statistic: float
    p_value: float
    df_between: int
    df_within: int
    ss_between: float
    ss_within: float
    significant: bool
    interpretation: str
    test_name: str = "One-way ANOVA"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ChiSquareResult:
    chi_square: float
    p_value: float
    degrees_freedom: int
    expected: List[List[float]]
    significant: bool
    interpretation: str
    test_name: str = "Chi-square test"

    def to_dict(self) -> dict:
        return asdict(self)


def effect_magnitude(d: float) -> str:
    """Conventional Cohen's d bands."""
    d = abs(d)
    if d < 0.2:
        return "negligible"
    if d < 0.5:
        return "small"
    if d < 0.8:
        return "medium"
    return "large"


def cohens_d(sample1: Sequence[float], sample2: Sequence[float]) -> float:
    """Standardized mean difference using the pooled standard deviation."""
    n1, n2 = len(sample1), len(sample2)
    v1, v2 = sample_variance(sample1), sample_variance(sample2)
    pooled = math.sqrt(((n1 - 1) * v1 + (n2 - 1) * v2) / (n1 + n2 - 2))
    if pooled == 0:
        return 0.0
    return abs(mean(sample1) - mean(sample2)) / pooled


def welch_t_test(sample1: Sequence[float], sample2: Sequence[float],
                 alpha: float = DEFAULT_ALPHA) -> TTestResult:
    """
    Two-sided Welch's t-test.

    Args:
        sample1, sample2: Samples with at least two values each
        alpha: Significance level

    Returns:
        TTestResult with Welch-Satterthwaite degrees of freedom and Cohen's d
        (pooled from N-1 sample variances)
    """
    n1, n2 = len(sample1), len(sample2)
    if n1 < 2 or n2 < 2:
        raise ValueError(f"t-test needs at least two values per sample, got {n1} and {n2}")

    # Within-strategy variance uses the population divisor N, as in the basic stats
    stats1, stats2 = calculate_basic_stats(sample1), calculate_basic_stats(sample2)
    m1, m2 = stats1.mean, stats2.mean
    se1 = stats1.variance / n1
    se2 = stats2.variance / n2
    se = math.sqrt(se1 + se2)

    if se == 0:
        # Both samples are constant
        same = math.isclose(m1, m2)
        t_stat = 0.0 if same else math.copysign(math.inf, m1 - m2)
        df = float(n1 + n2 - 2)
        p_value = 1.0 if same else 0.0
    else:
        t_stat = (m1 - m2) / se
        df = (se1 + se2) ** 2 / (se1 ** 2 / (n1 - 1) + se2 ** 2 / (n2 - 1))
        p_value = 2.0 * (1.0 - t_cdf(abs(t_stat), df))
        p_value = min(1.0, max(0.0, p_value))

    d = cohens_d(sample1, sample2)
    magnitude = effect_magnitude(d)
    significant = p_value < alpha

    if significant:
        interpretation = (
            f"The difference between the two strategies is statistically significant "
            f"(p < {alpha}). Effect size: {magnitude}"
        )
    else:
        interpretation = (
            f"The difference between the two strategies is NOT statistically significant "
            f"(p >= {alpha})."
        )

    return TTestResult(
        t_statistic=t_stat,
        p_value=p_value,
        degrees_freedom=df,
        effect_size=d,
        effect_magnitude=magnitude,
        significant=significant,
        interpretation=interpretation,
    )


def one_way_anova(groups: Sequence[Sequence[float]], alpha: float = DEFAULT_ALPHA) -> AnovaResult:
    k = len(groups)
    if k < 2:
        raise ValueError(f"ANOVA needs at least two groups, got {k}")
    arrays = [np.asarray(g, dtype=float) for g in groups]
    if any(a.size == 0 for a in arrays):
        raise ValueError("ANOVA groups must not be empty")

    n_total = sum(a.size for a in arrays)
    if n_total <= k:
        raise ValueError(f"ANOVA needs more observations ({n_total}) than groups ({k})")

    # mean() is exact on constant groups, so equal constant groups give SSB = SSW = 0
    grand_mean = mean(np.concatenate(arrays))
    means = [mean(a) for a in arrays]
    ss_between = float(sum(a.size * (m - grand_mean) ** 2 for a, m in zip(arrays, means)))
    ss_within = float(sum(0.0 if is_constant(a) else np.sum((a - m) ** 2) for a, m in zip(arrays, means)))

    df_between = k - 1
    df_within = n_total - k
    ms_between = ss_between / df_between
    ms_within = ss_within / df_within

    if ms_within == 0:
        f_stat = 0.0 if ms_between == 0 else math.inf
    else:
        f_stat = ms_between / ms_within

    p_value = min(1.0, max(0.0, 1.0 - f_cdf(f_stat, df_between, df_within)))
    significant = p_value < alpha

    if significant:
        interpretation = f"There is a statistically significant difference among the {k} strategies (p < {alpha})."
    else:
        interpretation = f"There is NO statistically significant difference among the {k} strategies (p >= {alpha})."

    return AnovaResult(
        f_statistic=f_stat,
        p_value=p_value,
        df_between=df_between,
        df_within=df_within,
        ss_between=ss_between,
        ss_within=ss_within,
        significant=significant,
        interpretation=interpretation,
    )


def chi_square_test(observed: Sequence[Sequence[float]], alpha: float = DEFAULT_ALPHA) -> ChiSquareResult:
    """Pearson chi-square test of independence. Cells with zero expected count are skipped."""
    if len(observed) == 0 or len(observed[0]) == 0:
        raise ValueError("Contingency table must not be empty")
    width = len(observed[0])
    if any(len(row) != width for row in observed):
        raise ValueError("Contingency table rows must all have the same length")

    table = np.asarray(observed, dtype=float)
    rows, cols = table.shape
    if rows < 2 or cols < 2:
        raise ValueError(f"Contingency table must be at least 2x2, got {rows}x{cols}")

    row_totals = table.sum(axis=1)
    col_totals = table.sum(axis=0)
    total = table.sum()
    if total <= 0:
        raise ValueError("Contingency table has no observations")

    expected = np.outer(row_totals, col_totals) / total
    mask = expected > 0
    chi_sq = float(np.sum((table[mask] - expected[mask]) ** 2 / expected[mask]))

    df = (rows - 1) * (cols - 1)
    p_value = min(1.0, max(0.0, 1.0 - chi_square_cdf(chi_sq, df)))
    significant = p_value < alpha

    return ChiSquareResult(
        chi_square=chi_sq,
        p_value=p_value,
        degrees_freedom=df,
        expected=expected.tolist(),
        significant=significant,
        interpretation="Significant association exists" if significant else "No significant association",
    )


def compare_strategies(samples: Dict[str, Sequence[float]], alpha: float = DEFAULT_ALPHA) -> dict:
    """
    Runs the full battery used by the dashboard on one metric:
    a t-test for every pair of strategies plus ANOVA across all of them.
    """
    names = list(samples)
    pairwise = {}
    for a, b in itertools.combinations(names, 2):
        pairwise[(a, b)] = welch_t_test(samples[a], samples[b], alpha=alpha)

    return {
        "t_tests": pairwise,
        "anova": one_way_anova([samples[n] for n in names], alpha=alpha),
    }
