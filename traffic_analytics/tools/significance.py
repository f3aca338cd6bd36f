"""
Hypothesis-test report across all strategies and metrics.

For every metric: Welch's t-test for each strategy pair and a one-way ANOVA
over all three. A chi-square test checks whether congestion (waiting time
above the scenario threshold) depends on the strategy.
"""

import os
import pandas as pd
import numpy as np
from tabulate import tabulate

from traffic_analytics.config import AppConfig
from traffic_analytics.core import generate_strategy_samples
from traffic_analytics.synthetic import SampleGenerator
from traffic_analytics.strategies import METRIC_LABELS
from traffic_analytics.analysis.hypothesis import compare_strategies, chi_square_test


def hypothesis_table(config: AppConfig, scenario=None, generator=None) -> pd.DataFrame:
    """One row per test (pairwise t-tests and ANOVA) for every configured metric."""
    generator = generator or SampleGenerator(seed=config.analysis.seed)
    rows = []
    for metric in config.analysis.metrics:
        samples = generate_strategy_samples(config.analysis, metric, scenario, generator)
        battery = compare_strategies(samples, alpha=config.analysis.alpha)

        for (a, b), res in battery["t_tests"].items():
            rows.append({
                "Metric": METRIC_LABELS.get(metric, metric),
                "Test": f"{a} vs {b}",
                "Statistic": res.t_statistic,
                "p_value": res.p_value,
                "df": res.degrees_freedom,
                "Effect": res.effect_size,
                "Significant": res.significant,
            })

        anova = battery["anova"]
        rows.append({
            "Metric": METRIC_LABELS.get(metric, metric),
            "Test": "ANOVA (all)",
            "Statistic": anova.f_statistic,
            "p_value": anova.p_value,
            "df": anova.df_within,
            "Effect": np.nan,
            "Significant": anova.significant,
        })
    return pd.DataFrame(rows)


def congestion_table(config: AppConfig, scenario, generator=None) -> pd.DataFrame:
    """Contingency table: per strategy, samples above / below the congestion threshold."""
    generator = generator or SampleGenerator(seed=config.analysis.seed)
    samples = generate_strategy_samples(config.analysis, "waiting_time", scenario, generator)
    threshold = scenario.congestion_threshold
    rows = {
        name: {
            "Congested": int(np.sum(values > threshold)),
            "Free Flow": int(np.sum(values <= threshold)),
        }
        for name, values in samples.items()
    }
    return pd.DataFrame.from_dict(rows, orient="index")


def run_significance_suite(config: AppConfig, output_dir="results"):
    scenario = config.scenario.build()
    generator = SampleGenerator(seed=config.analysis.seed)

    print(f"\n" + "="*60)
    print(f"HYPOTHESIS TESTS: {scenario.name}")
    print("="*60)

    df = hypothesis_table(config, scenario, generator)
    print(tabulate(df, headers='keys', tablefmt='simple', showindex=False, floatfmt=".4f"))

    contingency = congestion_table(config, scenario, generator)
    print("\nCongestion contingency table:")
    print(tabulate(contingency, headers='keys', tablefmt='simple'))

    try:
        chi = chi_square_test(contingency.values.tolist(), alpha=config.analysis.alpha)
        print(f"Chi-square = {chi.chi_square:.3f}, df = {chi.degrees_freedom}, p = {chi.p_value:.4f} -> {chi.interpretation}")
    except ValueError as e:
        chi = None
        print(f"Chi-square skipped: {e}")

    os.makedirs(output_dir, exist_ok=True)
    csv_path = os.path.join(output_dir, "hypothesis_tests.csv")
    df.to_csv(csv_path, index=False)
    print(f"\nResults saved to: {csv_path}")
    return df, chi
