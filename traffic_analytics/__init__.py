"""
Traffic Signal Strategy Analytics

Statistical comparison of traffic signal control strategies:
- Fixed-time control
- Rule-based (longest queue) control
- RL-based control

Provides descriptive statistics, hypothesis tests (Welch t, ANOVA, chi-square),
correlation analysis, scenario-driven synthetic samples and a grid network simulator.

Usage:
    # Statistical summary across scenarios
    python main.py stats --config configs/default.yaml

    # Simulate a 3x3 network
    python main.py network --strategy rl-based --grid 3
"""

from .strategies import Strategy
from .scenario import Scenario, get_preset, scenario_metrics, stress_multiplier
from .synthetic import SampleGenerator
from .config import AppConfig, AnalysisConfig, NetworkConfig

__version__ = '1.0.0'

__all__ = [
    'Strategy',
    'Scenario',
    'get_preset',
    'scenario_metrics',
    'stress_multiplier',
    'SampleGenerator',
    'AppConfig',
    'AnalysisConfig',
    'NetworkConfig',
]
