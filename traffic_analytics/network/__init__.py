from .grid import (
    IntersectionState,
    NetworkConnection,
    initialize_network,
    create_network_connections,
)
from .signals import fixed_time_policy, rule_based_policy, rl_based_policy, apply_signal, get_policy
from .simulator import (
    NetworkState,
    build_initial_state,
    simulate_network_step,
    run_network_simulation,
    calculate_network_stats,
    history_frame,
)

__all__ = [
    "IntersectionState", "NetworkConnection", "initialize_network", "create_network_connections",
    "fixed_time_policy", "rule_based_policy", "rl_based_policy", "apply_signal", "get_policy",
    "NetworkState", "build_initial_state", "simulate_network_step", "run_network_simulation",
    "calculate_network_stats", "history_frame",
]
