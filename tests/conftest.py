import matplotlib
matplotlib.use("Agg")

import pytest
import numpy as np

from traffic_analytics.config import NetworkConfig
from traffic_analytics.scenario import Scenario, get_preset
from traffic_analytics.synthetic import SampleGenerator


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def generator():
    return SampleGenerator(seed=42)


@pytest.fixture
def empty_scenario():
    """No demand, no incident, no peak hour: stress multiplier of exactly 1."""
    return Scenario(
        name="Empty",
        north_flow=0, east_flow=0, south_flow=0, west_flow=0,
        incident_active=False, peak_hour_active=False,
    )


@pytest.fixture
def rush_hour():
    return get_preset("rush_hour")


@pytest.fixture
def extreme_scenario():
    return Scenario(
        name="Gridlock",
        north_flow=100, east_flow=100, south_flow=100, west_flow=100,
        incident_active=True, incident_severity=100,
        peak_hour_active=True, peak_hour_intensity=100,
    )


@pytest.fixture
def small_network():
    return NetworkConfig(grid_size=2, simulation_time=20, traffic_intensity=0.5, seed=7)
