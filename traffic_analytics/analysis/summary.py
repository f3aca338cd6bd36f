"""
Per-strategy statistical summaries.

Bundles basic statistics and confidence intervals for each metric a strategy
is evaluated on, and flattens them into pandas frames for reporting.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any

import pandas as pd

from traffic_analytics.analysis.descriptive import calculate_basic_stats, calculate_confidence_interval
from traffic_analytics.analysis.correlation import correlation_matrix


@dataclass
class StrategyMetrics:
    """Sample vectors collected for one strategy"""

    strategy: str
    waiting_times: List[float] = field(default_factory=list)
    queue_lengths: List[float] = field(default_factory=list)
    rewards: List[float] = field(default_factory=list)
    throughputs: List[float] = field(default_factory=list)

    def datasets(self) -> Dict[str, List[float]]:
        return {
            "waiting_time": self.waiting_times,
            "queue_length": self.queue_lengths,
            "reward": self.rewards,
            "throughput": self.throughputs,
        }

    def correlations(self) -> Dict[str, Dict[str, float]]:
        return correlation_matrix(self.datasets())


def generate_statistical_summary(metrics: StrategyMetrics, confidence_level: float = 0.95) -> Dict[str, Any]:
    summary = {"strategy": metrics.strategy}
    for name, data in metrics.datasets().items():
        summary[name] = {
            "stats": calculate_basic_stats(data),
            "confidence_interval": calculate_confidence_interval(data, confidence_level),
        }
    return summary


def summary_frame(summaries: List[Dict[str, Any]]) -> pd.DataFrame:
    """One row per (strategy, metric) with the headline numbers."""
    rows = []
    for summary in summaries:
        for name, entry in summary.items():
            if name == "strategy":
                continue
            stats = entry["stats"]
            ci = entry["confidence_interval"]
            rows.append({
                "Strategy": summary["strategy"],
                "Metric": name,
                "Mean": stats.mean,
                "Std": stats.std_dev,
                "Median": stats.median,
                "IQR": stats.iqr,
                "Skewness": stats.skewness,
                "Kurtosis": stats.kurtosis,
                "CI_Low": ci.lower_bound,
                "CI_High": ci.upper_bound,
            })
    return pd.DataFrame(rows)
