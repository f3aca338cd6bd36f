import json
import os

import pandas as pd
import pytest

from traffic_analytics.config import AnalysisConfig, AppConfig, NetworkConfig
from traffic_analytics.core import generate_strategy_samples, simulate
from traffic_analytics.logger import ExperimentLogger
from traffic_analytics.network.simulator import run_network_simulation
from traffic_analytics.scenario import get_preset
from traffic_analytics.tools.analyzer import SCENARIOS, run_analysis_suite
from traffic_analytics.tools.batch_runner import run_batch_simulations
from traffic_analytics.tools.behavior import analyze_signal_behavior, plot_behavior
from traffic_analytics.tools.comparator import head_to_head, run_comparison_suite
from traffic_analytics.tools.significance import congestion_table, hypothesis_table, run_significance_suite
from traffic_analytics.tools.visualizer import generate_gif, plot_network_state


@pytest.fixture
def app_config():
    return AppConfig(analysis=AnalysisConfig(samples=30, seed=1))


def test_strategy_samples(app_config):
    samples = generate_strategy_samples(app_config.analysis, "waiting_time")
    assert set(samples) == {"Fixed-time", "Rule-based", "RL-based"}
    assert all(len(v) == 30 for v in samples.values())


def test_analysis_suite(app_config, tmp_path):
    df, summary_df, results_dir = run_analysis_suite(app_config, str(tmp_path))
    assert df.iloc[0]["Strategy"] == "RL-based"
    assert set(SCENARIOS) <= set(df.columns)
    assert len(summary_df) == 3 * 4
    for name in ("analysis_data.csv", "summary_statistics.csv", "heatmap_improvement.png"):
        assert os.path.exists(os.path.join(results_dir, name))


def test_hypothesis_table(app_config):
    df = hypothesis_table(app_config, get_preset("normal"))
    # Three pairwise t-tests and one ANOVA per metric
    assert len(df) == 4 * len(app_config.analysis.metrics)
    assert df["p_value"].between(0, 1).all()


def test_congestion_table_counts_every_sample(app_config):
    table = congestion_table(app_config, get_preset("rush_hour"))
    assert list(table.columns) == ["Congested", "Free Flow"]
    assert (table.sum(axis=1) == app_config.analysis.samples).all()


def test_significance_suite(app_config, tmp_path):
    df, chi = run_significance_suite(app_config, str(tmp_path))
    assert os.path.exists(tmp_path / "hypothesis_tests.csv")
    assert not df.empty


def test_head_to_head(generator):
    records = head_to_head("fixed-time", "rl-based", get_preset("rush_hour"), generator, samples=30)
    assert [r["Metric"] for r in records] == ["waiting_time", "queue_length", "throughput", "efficiency"]
    waiting = records[0]
    assert waiting["Improvement %"] > 0
    assert waiting["Significant"]


def test_head_to_head_same_strategy(generator):
    with pytest.raises(ValueError):
        head_to_head("rl-based", "RL-based", get_preset("normal"), generator)


def test_comparison_suite(app_config, tmp_path):
    df = run_comparison_suite("fixed-time", "rule-based", app_config, str(tmp_path))
    assert len(df) == len(SCENARIOS) * 4
    assert os.path.exists(tmp_path / "full_comparison_results.csv")


def test_experiment_logger(small_network, tmp_path):
    logger = ExperimentLogger(small_network, "rl-based", base_dir=str(tmp_path))
    history = simulate(small_network, logger, show_progress=False)
    with open(os.path.join(logger.exp_dir, "config.json")) as f:
        assert json.load(f)["strategy"] == "rl-based"
    metrics = pd.read_csv(logger.csv_path)
    assert len(metrics) == small_network.simulation_time
    assert list(metrics.columns) == ExperimentLogger.headers
    assert os.path.exists(logger.get_save_path("simulation_plot.png"))
    assert len(history) == small_network.simulation_time + 1


def test_simulate_matches_plain_run(small_network):
    plain = run_network_simulation(small_network)
    logged = simulate(small_network, show_progress=False)
    assert [s.total_vehicles for s in plain] == [s.total_vehicles for s in logged]


def test_batch_runner(tmp_path):
    base = NetworkConfig(simulation_time=5, seed=3)
    df = run_batch_simulations(base, str(tmp_path), grid_sizes=(2,), intensities=(0.2, 0.8))
    assert len(df) == 2 * 3
    assert set(df["Strategy"]) == {"Fixed-time", "Rule-based", "RL-based"}
    assert os.path.exists(tmp_path / "batch_summary.csv")


def test_fixed_time_behavior():
    history = run_network_simulation(NetworkConfig(grid_size=2, simulation_time=60, strategy="fixed-time"))
    df_green, df_fairness = analyze_signal_behavior(history)
    assert len(df_green) == 4
    assert (df_green["NS Green %"] == 50.0).all()
    assert list(df_fairness["Approach"]) == ["North", "East", "South", "West"]
    fig1, fig2 = plot_behavior(df_green, df_fairness)
    assert fig1 is not None and fig2 is not None


def test_visualizer(small_network, tmp_path):
    history = run_network_simulation(small_network)[:4]
    fig = plot_network_state(history[-1])
    assert fig.axes
    path = generate_gif(history, str(tmp_path / "replay.gif"))
    assert os.path.getsize(path) > 0
