import numpy as np
from tqdm import tqdm
from typing import Dict, Optional

from traffic_analytics.config import AnalysisConfig, NetworkConfig
from traffic_analytics.scenario import Scenario
from traffic_analytics.strategies import Strategy
from traffic_analytics.synthetic import SampleGenerator
from traffic_analytics.network.simulator import build_initial_state, simulate_network_step


def simulate(config: NetworkConfig, logger=None, rng: Optional[np.random.Generator] = None,
             show_progress=True):
    """
    Runs the grid network for `config.simulation_time` ticks with progress bar and logging.
    Returns: list of NetworkState, initial state first
    """
    rng = rng if rng is not None else np.random.default_rng(config.seed)
    state = build_initial_state(config, rng)
    history = [state]

    pbar = tqdm(range(config.simulation_time), desc=f"Simulating {config.strategy.label}",
                disable=not show_progress)

    for _ in pbar:
        state = simulate_network_step(state, config, rng)
        history.append(state)

        if logger:
            logger.log_step(state)

        pbar.set_postfix({
            'veh': f"{state.total_vehicles:.0f}",
            'eff': f"{state.network_efficiency:.2f}",
            'wait': f"{state.average_waiting_time:.0f}"
        })

    if logger:
        logger.save_plot(
            [s.total_vehicles for s in history],
            [s.network_efficiency for s in history]
        )

    return history


def generate_strategy_samples(config: AnalysisConfig, metric: str, scenario: Optional[Scenario] = None,
                              generator: Optional[SampleGenerator] = None) -> Dict[str, np.ndarray]:
    """Samples of one metric for every strategy, keyed by strategy label."""
    generator = generator or SampleGenerator(seed=config.seed)
    return {
        strategy.label: generator.generate(strategy, metric, scenario, config.samples)
        for strategy in Strategy
    }
