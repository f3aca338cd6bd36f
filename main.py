import argparse
import logging
import os
from dataclasses import replace

from traffic_analytics.config import AppConfig
from traffic_analytics.logger import ExperimentLogger, setup_logger
from traffic_analytics.core import simulate
from traffic_analytics.network.simulator import calculate_network_stats

# Import Tools
from traffic_analytics.tools.analyzer import run_analysis_suite
from traffic_analytics.tools.significance import run_significance_suite
from traffic_analytics.tools.comparator import run_comparison_suite
from traffic_analytics.tools.batch_runner import run_batch_simulations
from traffic_analytics.tools.visualizer import generate_gif


def run_single_network(args, config: AppConfig):
    """
    Logic for simulating a SINGLE network run based on a config file.
    CLI flags override the network section.
    """
    print(f"\n--- Starting Network Simulation ---")
    print(f"Config: {args.config}")

    overrides = {}
    if args.strategy is not None:
        overrides["strategy"] = args.strategy
    if args.grid is not None:
        overrides["grid_size"] = args.grid
    if args.steps is not None:
        overrides["simulation_time"] = args.steps
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.incident:
        overrides["incident_enabled"] = True
    net_config = replace(config.network, **overrides)

    logger = ExperimentLogger(net_config, net_config.strategy.value, base_dir=args.out)
    history = simulate(net_config, logger)

    for key, value in calculate_network_stats(history).items():
        print(f"  {key:<18} {value:10.3f}")

    if args.gif:
        path = generate_gif(history, logger.get_save_path("replay.gif"))
        print(f"Replay saved to: {path}")
    print(f"Simulation Complete. Results saved to: {logger.exp_dir}")


def main():
    parser = argparse.ArgumentParser(description="Traffic Signal Strategy Analytics")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # STATS Command
    p_stats = subparsers.add_parser("stats", help="Leaderboard and statistical summary per strategy")
    p_stats.add_argument("--config", default="configs/default.yaml", help="Path to YAML config")
    p_stats.add_argument("--out", default="results", help="Output folder")

    # TESTS Command
    p_tests = subparsers.add_parser("tests", help="t-tests, ANOVA and chi-square for the configured scenario")
    p_tests.add_argument("--config", default="configs/default.yaml", help="Path to YAML config")
    p_tests.add_argument("--out", default="results", help="Output folder")

    # COMPARE Command
    p_comp = subparsers.add_parser("compare", help="Head-to-head comparison of two strategies")
    p_comp.add_argument("--base", default="fixed-time", help="Baseline strategy")
    p_comp.add_argument("--test", default="rl-based", help="Strategy to compare against the baseline")
    p_comp.add_argument("--config", default="configs/default.yaml")
    p_comp.add_argument("--out", default="results", help="Output folder")

    # NETWORK Command
    p_net = subparsers.add_parser("network", help="Simulate a grid network")
    p_net.add_argument("--config", default="configs/default.yaml", help="Path to YAML config")
    p_net.add_argument("--strategy", default=None, help="fixed-time | rule-based | rl-based")
    p_net.add_argument("--grid", type=int, default=None, help="Grid size")
    p_net.add_argument("--steps", type=int, default=None, help="Simulation time")
    p_net.add_argument("--seed", type=int, default=None, help="Override random seed")
    p_net.add_argument("--incident", action="store_true", help="Enable an incident")
    p_net.add_argument("--gif", action="store_true", help="Save a replay GIF")
    p_net.add_argument("--out", default="runs", help="Output folder")

    # BATCH Command
    p_batch = subparsers.add_parser("batch", help="Network runs over grid sizes and intensities")
    p_batch.add_argument("--config", default="configs/default.yaml", help="Base config to use")
    p_batch.add_argument("--out", default="experiments_batch", help="Output folder name")
    p_batch.add_argument("--grids", type=int, nargs="+", default=[2, 3, 4])
    p_batch.add_argument("--intensities", type=float, nargs="+", default=[0.3, 0.6, 0.9])
    p_batch.add_argument("--seeds", type=int, default=1, help="Seeds per configuration")

    args = parser.parse_args()
    setup_logger(level=logging.DEBUG if args.verbose else logging.INFO)

    if not os.path.exists(args.config):
        print(f"Error: Config file '{args.config}' not found.")
        return

    try:
        config = AppConfig.load(args.config)
    except (TypeError, ValueError) as e:
        print(f"Error: Invalid config '{args.config}': {e}")
        return

    # Dispatch Logic
    try:
        if args.command == "stats":
            run_analysis_suite(config, args.out)

        elif args.command == "tests":
            run_significance_suite(config, args.out)

        elif args.command == "compare":
            run_comparison_suite(args.base, args.test, config, args.out)

        elif args.command == "network":
            run_single_network(args, config)

        elif args.command == "batch":
            run_batch_simulations(config.network, args.out, grid_sizes=args.grids,
                                  intensities=args.intensities, seeds=args.seeds)
    except ValueError as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    main()
