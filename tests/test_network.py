from dataclasses import replace

import numpy as np
import pytest

from traffic_analytics.config import NetworkConfig
from traffic_analytics.network.grid import (
    GREEN,
    RED,
    IntersectionState,
    create_network_connections,
    initialize_network,
    intersection_id,
)
from traffic_analytics.network.signals import (
    apply_signal,
    fixed_time_policy,
    rl_based_policy,
    rule_based_policy,
)
from traffic_analytics.network.simulator import (
    NetworkState,
    apply_network_flow_influence,
    calculate_network_stats,
    history_frame,
    incident_intersection,
    run_network_simulation,
    simulate_network_step,
    build_initial_state,
)
from traffic_analytics.strategies import Strategy


def _intersection(x, y, queues, ns_green=True):
    i = IntersectionState(id=intersection_id(x, y), name=f"({x}, {y})", x=x, y=y,
                          queues=dict(zip(("north", "east", "south", "west"), queues)))
    apply_signal(i, ns_green)
    return i


@pytest.mark.parametrize("grid", [1, 2, 3, 4, 5])
def test_connection_count(grid):
    connections = create_network_connections(grid)
    assert len(connections) == 4 * grid * (grid - 1)
    ids = {intersection_id(x, y) for x in range(grid) for y in range(grid)}
    assert all(c.source in ids and c.target in ids for c in connections)


def test_initialize_network(rng):
    intersections = initialize_network(3, rng)
    assert len(intersections) == 9
    assert len({i.id for i in intersections}) == 9
    for i in intersections:
        assert all(0.0 <= f < 20.0 for f in i.flows.values())
        assert i.total_queue == 0.0


def test_invalid_grid_size():
    with pytest.raises(ValueError):
        initialize_network(0)
    with pytest.raises(ValueError):
        NetworkConfig(grid_size=0)


def test_history_length(small_network):
    history = run_network_simulation(small_network)
    assert len(history) == small_network.simulation_time + 1
    assert [s.time for s in history] == list(range(small_network.simulation_time + 1))


@pytest.mark.parametrize("grid", [2, 3, 4])
@pytest.mark.parametrize("intensity", [0.0, 0.5, 1.0])
@pytest.mark.parametrize("strategy", list(Strategy))
def test_queues_never_negative(grid, intensity, strategy):
    config = NetworkConfig(grid_size=grid, simulation_time=40, traffic_intensity=intensity,
                           strategy=strategy, seed=5)
    for state in run_network_simulation(config):
        assert state.total_vehicles >= 0
        assert state.network_efficiency >= 0
        for i in state.intersections:
            assert all(q >= 0 for q in i.queues.values())


@pytest.mark.parametrize("strategy", list(Strategy))
def test_signals_are_complementary(strategy, small_network):
    config = replace(small_network, strategy=strategy)
    for state in run_network_simulation(config)[1:]:
        for i in state.intersections:
            assert i.signals["north"] == i.signals["south"]
            assert i.signals["east"] == i.signals["west"]
            assert {i.signals["north"], i.signals["east"]} == {GREEN, RED}


def test_seeded_runs_are_reproducible(small_network):
    a = run_network_simulation(small_network)
    b = run_network_simulation(small_network)
    assert [s.total_vehicles for s in a] == [s.total_vehicles for s in b]


def test_fixed_time_cycle():
    i = _intersection(0, 0, (0, 0, 0, 0))
    assert all(fixed_time_policy(i, t) for t in range(30))
    assert not any(fixed_time_policy(i, t) for t in range(30, 60))
    assert fixed_time_policy(i, 60)


def test_rule_based_prefers_longer_axis():
    assert rule_based_policy(_intersection(0, 0, (10, 2, 10, 2)), 0)
    assert not rule_based_policy(_intersection(0, 0, (1, 5, 1, 5)), 0)
    # Ties go to east-west
    assert not rule_based_policy(_intersection(0, 0, (4, 4, 4, 4)), 0)


def test_rl_based_policy():
    assert rl_based_policy(_intersection(0, 0, (20, 1, 20, 1)), 0)
    assert not rl_based_policy(_intersection(0, 0, (0, 0, 0, 0)), 0)


def test_flow_influence_conserves_vehicles():
    a = _intersection(0, 0, (10, 10, 10, 10), ns_green=False)
    b = _intersection(1, 0, (5, 5, 5, 5), ns_green=False)
    connections = create_network_connections(2)
    before = a.total_queue + b.total_queue
    apply_network_flow_influence([a, b], connections)
    # East-west is green at both: 3 vehicles move east, 1.5 move back west
    assert a.queues["east"] == pytest.approx(10.0 - 3.0 + 1.5)
    assert b.queues["west"] == pytest.approx(5.0 - 1.5 + 3.0)
    assert a.total_queue + b.total_queue == pytest.approx(before)


def test_flow_influence_is_capped():
    a = _intersection(0, 0, (0, 100, 0, 0), ns_green=False)
    b = _intersection(1, 0, (0, 0, 0, 0), ns_green=False)
    apply_network_flow_influence([a, b], create_network_connections(2))
    assert a.queues["east"] == pytest.approx(95.0)
    assert b.queues["west"] == pytest.approx(5.0)


def test_step_does_not_mutate_input(small_network, rng):
    state = build_initial_state(small_network, rng)
    flows_before = [dict(i.flows) for i in state.intersections]
    nxt = simulate_network_step(state, small_network, rng)
    assert nxt.time == 1
    assert [dict(i.flows) for i in state.intersections] == flows_before


def test_incident_location():
    assert incident_intersection(NetworkConfig(grid_size=3)) is None
    assert incident_intersection(NetworkConfig(grid_size=3, incident_enabled=True)) == "intersection_1_1"
    config = NetworkConfig(grid_size=3, incident_enabled=True, incident_location="intersection_0_2")
    assert incident_intersection(config) == "intersection_0_2"


def test_incident_halves_capacity():
    config = NetworkConfig(grid_size=1, simulation_time=1, traffic_intensity=0.0,
                           strategy="fixed-time", seed=0)
    blocked = replace(config, incident_enabled=True)
    start = NetworkState(intersections=[_intersection(0, 0, (20, 20, 20, 20), ns_green=False)],
                         connections=[])
    free = simulate_network_step(start, config, np.random.default_rng(0))
    jammed = simulate_network_step(start, blocked, np.random.default_rng(0))
    assert free.total_throughput == pytest.approx(16.0)
    assert jammed.total_throughput == pytest.approx(8.0)


def test_network_stats(small_network):
    history = run_network_simulation(small_network)
    stats = calculate_network_stats(history)
    assert stats["min_efficiency"] <= stats["avg_efficiency"] <= stats["max_efficiency"]
    assert stats["avg_vehicles"] > 0


def test_network_stats_empty():
    assert all(v == 0.0 for v in calculate_network_stats([]).values())


def test_history_frame(small_network):
    df = history_frame(run_network_simulation(small_network))
    assert len(df) == small_network.simulation_time + 1
    assert list(df.columns) == ["time", "total_vehicles", "average_waiting_time",
                                "network_efficiency", "total_throughput"]
