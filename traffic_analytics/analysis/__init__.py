from .descriptive import (
    BasicStats,
    ConfidenceInterval,
    calculate_basic_stats,
    calculate_confidence_interval,
    mean,
    sample_variance,
    percentile,
)
from .distributions import incomplete_beta, t_cdf, f_cdf, chi_square_cdf, normal_cdf
from .hypothesis import (
    TTestResult,
    AnovaResult,
    ChiSquareResult,
    welch_t_test,
    one_way_anova,
    chi_square_test,
    compare_strategies,
)
from .correlation import pearson_correlation, correlation_matrix
from .summary import StrategyMetrics, generate_statistical_summary, summary_frame

__all__ = [
    "BasicStats", "ConfidenceInterval", "calculate_basic_stats", "calculate_confidence_interval",
    "mean", "sample_variance", "percentile",
    "incomplete_beta", "t_cdf", "f_cdf", "chi_square_cdf", "normal_cdf",
    "TTestResult", "AnovaResult", "ChiSquareResult",
    "welch_t_test", "one_way_anova", "chi_square_test", "compare_strategies",
    "pearson_correlation", "correlation_matrix",
    "StrategyMetrics", "generate_statistical_summary", "summary_frame",
]
