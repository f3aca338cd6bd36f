import os
import time
import traceback
import numpy as np
import pandas as pd
from dataclasses import replace
from tabulate import tabulate

from traffic_analytics.config import NetworkConfig
from traffic_analytics.strategies import Strategy
from traffic_analytics.logger import ExperimentLogger
from traffic_analytics.core import simulate
from traffic_analytics.network.simulator import calculate_network_stats


def run_batch_simulations(base_config: NetworkConfig, output_folder, grid_sizes=(2, 3, 4),
                          intensities=(0.5,), strategies=None, seeds=1):
    """
    Runs the grid network for every combination of grid size, traffic intensity,
    strategy and seed offset. Each run gets its own logged folder.
    """
    strategies = [Strategy.parse(s) for s in strategies] if strategies else list(Strategy)
    base_seed = base_config.seed if base_config.seed is not None else 0

    # Generate the list of experiments
    experiments = []
    exp_id = 1
    for grid in grid_sizes:
        for intensity in intensities:
            for s_idx in range(seeds):
                experiments.append({
                    "id": exp_id,
                    "grid": grid,
                    "intensity": intensity,
                    "seed_offset": s_idx
                })
                exp_id += 1

    print(f"\n" + "="*60)
    print(f"STARTING NETWORK BATCH RUN")
    print(f"Output: {output_folder}")
    print(f"Total Configs: {len(experiments)}")
    print(f"Strategies: {', '.join(s.label for s in strategies)}")
    print("="*60)

    start_time = time.time()
    rows = []

    for exp in experiments:
        exp_name = f"Exp{exp['id']}_Grid{exp['grid']}_Int{exp['intensity']}_Seed{exp['seed_offset']}"
        print(f"\nRunning {exp_name} ({exp['id']}/{len(experiments)})")
        run_seed = base_seed + exp['seed_offset']

        for strategy in strategies:
            try:
                config = replace(
                    base_config,
                    grid_size=exp['grid'],
                    traffic_intensity=exp['intensity'],
                    strategy=strategy,
                    seed=run_seed,
                )
                # Same seed for every strategy: identical initial flows and arrivals
                rng = np.random.default_rng(run_seed)
                logger = ExperimentLogger(config, strategy.value, base_dir=os.path.join(output_folder, exp_name))
                history = simulate(config, logger, rng=rng)

                row = {
                    "Exp": f"Exp{exp['id']}",
                    "Grid": exp['grid'],
                    "Intensity": exp['intensity'],
                    "Seed": run_seed,
                    "Strategy": strategy.label,
                }
                row.update(calculate_network_stats(history))
                rows.append(row)
            except (ValueError, OSError) as e:
                print(f"  !!! {strategy.label} Failed: {e}")
                traceback.print_exc()

    df = pd.DataFrame(rows)
    if not df.empty:
        print("\n" + "="*80)
        print("NETWORK RESULTS")
        print("="*80)
        print(tabulate(df, headers='keys', tablefmt='simple', showindex=False, floatfmt=".2f"))
        os.makedirs(output_folder, exist_ok=True)
        df.to_csv(os.path.join(output_folder, "batch_summary.csv"), index=False)

    duration = (time.time() - start_time) / 60
    print(f"\nBATCH COMPLETE. Duration: {duration:.2f} minutes.")
    return df
