import os
import time
import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from tabulate import tabulate

# Project Imports
from traffic_analytics.config import AppConfig
from traffic_analytics.scenario import get_preset, calculate_improvement
from traffic_analytics.strategies import Strategy
from traffic_analytics.synthetic import SampleGenerator
from traffic_analytics.analysis.summary import generate_statistical_summary, summary_frame

# Standard Test Scenarios
SCENARIOS = {
    "Normal": "normal",
    "Rush Hour": "rush_hour",
    "Incident": "incident",
    "Heavy + Incident": "heavy_incident",
}


def evaluate_strategy_scenarios(strategy, config, generator, metric="waiting_time"):
    """Mean of generated samples for one strategy in every standard scenario."""
    scores = {}
    for scen_name, preset in SCENARIOS.items():
        samples = generator.generate(strategy, metric, get_preset(preset), config.analysis.samples)
        scores[scen_name] = float(np.mean(samples))
    return scores


def improvement_matrix(df):
    """Waiting-time improvement (%) of every strategy over Fixed-time, per scenario."""
    scen_cols = list(SCENARIOS.keys())
    fixed = df.loc[df['Strategy'] == Strategy.FIXED_TIME.label, scen_cols]
    if fixed.empty:
        return None
    reference = fixed.iloc[0]
    matrix = df.set_index('Strategy')[scen_cols].apply(
        lambda col: col.map(lambda v: max(calculate_improvement(reference[col.name], v), -100.0))
    )
    return matrix


def generate_plots(df, output_dir):
    """Improvement heatmap for the leaderboard."""
    matrix = improvement_matrix(df)
    if matrix is None:
        print("Warning: Fixed-time baseline not found. Skipping Heatmap.")
        return

    try:
        sns.set_style("white")
        fig, ax = plt.subplots(figsize=(9, 4))
        sns.heatmap(matrix, annot=True, fmt=".1f", cmap="RdYlGn", center=0, ax=ax,
                    cbar_kws={'label': 'Improvement %'})
        ax.set_title("Waiting Time Improvement over Fixed-time (%)")
        fig.tight_layout()
        fig.savefig(os.path.join(output_dir, "heatmap_improvement.png"))
        plt.close(fig)
        print("  -> heatmap_improvement.png")
    except (ValueError, KeyError, OSError) as e:
        print(f"Plotting Error: {e}")


def build_leaderboard(config: AppConfig, generator) -> pd.DataFrame:
    """Mean waiting time of every strategy per standard scenario, best strategy first."""
    df = pd.DataFrame.from_dict(
        {s.label: evaluate_strategy_scenarios(s, config, generator) for s in Strategy},
        orient='index',
    )
    df.index.name = 'Strategy'
    df['Overall_Avg_Wait'] = df[list(SCENARIOS)].mean(axis=1)
    return df.sort_values('Overall_Avg_Wait').reset_index()


def _section(title):
    print("\n" + "-"*80)
    print(title)
    print("-"*80)


def run_analysis_suite(config: AppConfig, output_root="results"):
    """
    Main entry point for analysis.
    Builds the waiting-time leaderboard across scenarios and the statistical
    summary of every strategy under the configured scenario.
    Returns: (leaderboard, summary, results folder)
    """
    print(f"\n" + "="*60)
    print("STRATEGY ANALYSIS")
    print("="*60)

    results_dir = os.path.join(output_root, time.strftime("analysis_%Y%m%d_%H%M%S"))
    os.makedirs(results_dir, exist_ok=True)
    generator = SampleGenerator(seed=config.analysis.seed)

    # 1. Leaderboard across scenarios
    df = build_leaderboard(config, generator)
    _section("LEADERBOARD: mean waiting time [s]")
    print(tabulate(df, headers='keys', tablefmt='simple', showindex=False, floatfmt=".2f"))
    df.to_csv(os.path.join(results_dir, "analysis_data.csv"), index=False)

    # 2. Summary for the configured scenario
    scenario = config.scenario.build()
    summary_df = summary_frame([
        generate_statistical_summary(
            generator.generate_metrics(strategy, scenario, config.analysis.samples),
            config.analysis.confidence_level,
        )
        for strategy in Strategy
    ])
    _section(f"SUMMARY: {scenario.name}")
    print(tabulate(summary_df, headers='keys', tablefmt='simple', showindex=False, floatfmt=".2f"))
    summary_df.to_csv(os.path.join(results_dir, "summary_statistics.csv"), index=False)

    generate_plots(df, results_dir)

    print(f"\nSaved to: {results_dir}")
    return df, summary_df, results_dir
