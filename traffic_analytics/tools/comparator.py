import os
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from tabulate import tabulate

# Project Imports
from traffic_analytics.config import AppConfig
from traffic_analytics.scenario import get_preset, scenario_metrics, calculate_improvement
from traffic_analytics.strategies import Strategy
from traffic_analytics.synthetic import SampleGenerator
from traffic_analytics.analysis.hypothesis import welch_t_test
from traffic_analytics.tools.analyzer import SCENARIOS

# metric -> lower is better
HEAD_TO_HEAD_METRICS = {
    "waiting_time": True,
    "queue_length": True,
    "throughput": False,
    "efficiency": False,
}


def head_to_head(strategy_a, strategy_b, scenario, generator, samples=100, alpha=0.05):
    """
    Compares two strategies on one scenario.
    Returns one record per metric with both values, the improvement of B over A,
    and whether the difference holds up in a t-test on generated samples.
    """
    a, b = Strategy.parse(strategy_a), Strategy.parse(strategy_b)
    if a == b:
        raise ValueError(f"Cannot compare {a.label} with itself")
    metrics_a = scenario_metrics(a, scenario)
    metrics_b = scenario_metrics(b, scenario)

    records = []
    for metric, lower_is_better in HEAD_TO_HEAD_METRICS.items():
        test = welch_t_test(
            generator.generate(a, metric, scenario, samples),
            generator.generate(b, metric, scenario, samples),
            alpha=alpha,
        )
        records.append({
            "Metric": metric,
            a.label: metrics_a[metric],
            b.label: metrics_b[metric],
            "Improvement %": calculate_improvement(metrics_a[metric], metrics_b[metric], lower_is_better),
            "p_value": test.p_value,
            "Significant": test.significant,
        })
    return records


def run_comparison_suite(strategy_a, strategy_b, config: AppConfig, output_dir="results"):
    """
    Main entry point for comparing two strategies across the standard scenarios.
    """
    a, b = Strategy.parse(strategy_a), Strategy.parse(strategy_b)
    print(f"\n" + "="*60)
    print("STARTING COMPARISON SUITE")
    print(f"Base: {a.label}")
    print(f"Test: {b.label}")
    print("="*60)

    generator = SampleGenerator(seed=config.analysis.seed)
    all_data = []
    for scen_name, preset in SCENARIOS.items():
        for record in head_to_head(a, b, get_preset(preset), generator,
                                   config.analysis.samples, config.analysis.alpha):
            record["Scenario"] = scen_name
            all_data.append(record)

    df = pd.DataFrame(all_data)
    print(tabulate(df, headers='keys', tablefmt='simple', showindex=False, floatfmt=".2f"))

    os.makedirs(output_dir, exist_ok=True)

    print("\nGenerating Dashboard Plot...")
    try:
        sns.set_style("whitegrid")
        long_df = df.melt(
            id_vars=["Scenario", "Metric"], value_vars=[a.label, b.label],
            var_name="Strategy", value_name="Value"
        )
        g = sns.catplot(
            data=long_df, kind="bar", x="Scenario", y="Value", hue="Strategy",
            col="Metric", col_wrap=2, height=4, aspect=1.5, sharey=False,
            palette={a.label: "gray", b.label: "green"}
        )
        g.set_axis_labels("Scenario", "Value")
        g.figure.suptitle(f"{a.label} vs {b.label}", y=1.02)
        plt.savefig(os.path.join(output_dir, "comparison_dashboard.png"), bbox_inches='tight')
        plt.close('all')
    except (ValueError, KeyError, OSError) as e:
        print(f"Plotting Error: {e}")

    df.to_csv(os.path.join(output_dir, "full_comparison_results.csv"), index=False)
    return df
