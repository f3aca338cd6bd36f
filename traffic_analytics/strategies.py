"""
Signal control strategies and their reference performance tables.

Three strategies are compared throughout the project:
- Fixed-time: cycles phases on a fixed timer
- Rule-based: gives green to the longer queue
- RL-based: learned policy (represented here by its measured baselines)
"""

from enum import Enum
from typing import Dict


class Strategy(Enum):
    FIXED_TIME = "fixed-time"
    RULE_BASED = "rule-based"
    RL_BASED = "rl-based"

    @property
    def label(self) -> str:
        return STRATEGY_LABELS[self]

    @classmethod
    def parse(cls, value) -> "Strategy":
        """Accepts enum members, values ("rule-based"), labels ("Rule-based") or CLI names ("rule_based")."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        for strategy in cls:
            if strategy.value == key:
                return strategy
        raise ValueError(f"Unknown strategy: {value}")


STRATEGY_LABELS = {
    Strategy.FIXED_TIME: "Fixed-time",
    Strategy.RULE_BASED: "Rule-based",
    Strategy.RL_BASED: "RL-based",
}

METRICS = ["waiting_time", "queue_length", "throughput", "efficiency"]

# Metrics where a higher scenario load makes things worse (value grows)
COST_METRICS = ("waiting_time", "queue_length")

METRIC_LABELS = {
    "waiting_time": "Waiting Time (s)",
    "queue_length": "Queue Length",
    "throughput": "Throughput",
    "efficiency": "Efficiency (%)",
}

# Measured averages from the single-intersection experiments
BASELINE_METRICS: Dict[Strategy, Dict[str, float]] = {
    Strategy.FIXED_TIME: {
        "waiting_time": 47.5,
        "queue_length": 15.25,
        "throughput": 60.0,
        "efficiency": 35.0,
    },
    Strategy.RULE_BASED: {
        "waiting_time": 25.25,
        "queue_length": 0.5,
        "throughput": 85.0,
        "efficiency": 75.0,
    },
    Strategy.RL_BASED: {
        "waiting_time": 21.5,
        "queue_length": 0.2,
        "throughput": 95.5,
        "efficiency": 95.0,
    },
}

# Cumulative episode reward (negative cost) per strategy
REWARD_BASELINE = {
    Strategy.FIXED_TIME: -1855.8,
    Strategy.RULE_BASED: -313.0,
    Strategy.RL_BASED: -291.3,
}

# Value used when a metric has no entry in the baseline table
DEFAULT_BASELINE = 50.0

# Spread of generated samples, as a fraction of the mean
VARIANCE_MULTIPLIER = {
    Strategy.FIXED_TIME: 0.25,
    Strategy.RULE_BASED: 0.15,
    Strategy.RL_BASED: 0.08,
}

# How strongly each strategy reacts to scenario stress, per metric family.
# Waiting time scales with stress * factor, throughput/efficiency with 1 / (stress * factor).
# Queue length is not listed: it always scales with the full stress.
SCENARIO_SENSITIVITY = {
    Strategy.FIXED_TIME: {"waiting_time": 1.0, "throughput": 1.0, "efficiency": 1.0, "congestion_events": 1.0},
    Strategy.RULE_BASED: {"waiting_time": 0.7, "throughput": 0.6, "efficiency": 0.5, "congestion_events": 0.7},
    Strategy.RL_BASED: {"waiting_time": 0.5, "throughput": 0.4, "efficiency": 0.3, "congestion_events": 1.0},
}

THROUGHPUT_FLOOR = {
    Strategy.FIXED_TIME: 10.0,
    Strategy.RULE_BASED: 30.0,
    Strategy.RL_BASED: 50.0,
}

EFFICIENCY_FLOOR = {
    Strategy.FIXED_TIME: 5.0,
    Strategy.RULE_BASED: 40.0,
    Strategy.RL_BASED: 70.0,
}

CONGESTION_EVENTS = {
    Strategy.FIXED_TIME: 12.0,
    Strategy.RULE_BASED: 3.0,
    Strategy.RL_BASED: 0.5,
}

AVERAGE_DELAY = {
    Strategy.FIXED_TIME: 45.0,
    Strategy.RULE_BASED: 22.0,
    Strategy.RL_BASED: 18.0,
}


def baseline_value(strategy: Strategy, metric: str) -> float:
    return BASELINE_METRICS[Strategy.parse(strategy)].get(metric, DEFAULT_BASELINE)
