"""
Discrete-time simulation of a grid of coupled intersections.

Per tick and per intersection:
1. Random arrivals raise each approach's flow rate (scaled by traffic intensity)
2. The strategy's policy picks the green axis
3. Green approaches discharge up to CAPACITY vehicles (counted as throughput)
4. The flow rate of each approach joins its queue
Then, across the network, part of each green queue spills into the
neighbouring intersection, and network-wide metrics are recomputed.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional

import numpy as np
import pandas as pd

from traffic_analytics.config import NetworkConfig
from traffic_analytics.network.grid import (
    IntersectionState,
    NetworkConnection,
    DIRECTIONS,
    OPPOSITE,
    GREEN,
    initialize_network,
    create_network_connections,
    intersection_id,
)
from traffic_analytics.network.signals import get_policy, apply_signal

CAPACITY = 8.0
ARRIVAL_SCALE = 5.0
MAX_TRANSFER = 5.0
INCIDENT_CAPACITY_FACTOR = 0.5


@dataclass
class NetworkState:
    intersections: List[IntersectionState]
    connections: List[NetworkConnection]
    time: int = 0
    total_vehicles: float = 0.0
    network_efficiency: float = 0.0
    average_waiting_time: float = 0.0

    @property
    def total_throughput(self) -> float:
        return sum(i.total_throughput for i in self.intersections)

    def by_id(self) -> Dict[str, IntersectionState]:
        return {i.id: i for i in self.intersections}


def incident_intersection(config: NetworkConfig) -> Optional[str]:
    """Id of the intersection hit by an incident; the grid centre unless configured."""
    if not config.incident_enabled:
        return None
    if config.incident_location:
        return config.incident_location
    center = config.grid_size // 2
    return intersection_id(center, center)


def build_initial_state(config: NetworkConfig, rng: np.random.Generator) -> NetworkState:
    return NetworkState(
        intersections=initialize_network(config.grid_size, rng),
        connections=create_network_connections(config.grid_size),
    )


def _step_intersection(intersection: IntersectionState, config: NetworkConfig, time: int,
                       rng: np.random.Generator, capacity: float) -> IntersectionState:
    updated = intersection.copy()

    # 1. Arrivals
    for d in DIRECTIONS:
        updated.flows[d] += rng.random() * config.traffic_intensity * ARRIVAL_SCALE

    # 2. Signal decision
    policy = get_policy(config.strategy)
    apply_signal(updated, policy(updated, time))

    # 3. Departures on green
    for d in DIRECTIONS:
        allowed = capacity if updated.signals[d] == GREEN else 0.0
        through = min(updated.queues[d], allowed)
        updated.queues[d] = max(0.0, updated.queues[d] - through)
        updated.total_throughput += through

    # 4. Arrivals join the queues
    for d in DIRECTIONS:
        updated.queues[d] += updated.flows[d]

    updated.total_waiting_time += updated.total_queue
    return updated


def apply_network_flow_influence(intersections: List[IntersectionState],
                                 connections: List[NetworkConnection]) -> None:
    """
    Moves min(queue * influence, MAX_TRANSFER) vehicles along every connection
    whose source approach is green, into the target's opposite approach.
    Transfers are computed from the queues at the start of the pass.
    """
    lookup = {i.id: i for i in intersections}
    transfers = []
    for conn in connections:
        source = lookup.get(conn.source)
        target = lookup.get(conn.target)
        if source is None or target is None:
            continue
        if source.signals[conn.direction] != GREEN:
            continue
        amount = min(source.queues[conn.direction] * conn.flow_influence, MAX_TRANSFER)
        if amount > 0:
            transfers.append((source, conn.direction, target, amount))

    for source, direction, target, amount in transfers:
        source.queues[direction] = max(0.0, source.queues[direction] - amount)
        target.queues[OPPOSITE[direction]] += amount


def simulate_network_step(state: NetworkState, config: NetworkConfig,
                          rng: np.random.Generator) -> NetworkState:
    """Advances the network by one tick and returns the new state."""
    blocked = incident_intersection(config)
    intersections = [
        _step_intersection(
            i, config, state.time, rng,
            CAPACITY * INCIDENT_CAPACITY_FACTOR if i.id == blocked else CAPACITY,
        )
        for i in state.intersections
    ]

    apply_network_flow_influence(intersections, state.connections)

    for i in intersections:
        i.efficiency = i.total_throughput / (i.total_queue + 1)

    total_vehicles = sum(i.total_queue for i in intersections)
    total_throughput = sum(i.total_throughput for i in intersections)
    total_waiting = sum(i.total_waiting_time for i in intersections)

    return NetworkState(
        intersections=intersections,
        connections=state.connections,
        time=state.time + 1,
        total_vehicles=total_vehicles,
        network_efficiency=total_throughput / total_vehicles if total_vehicles > 0 else 0.0,
        average_waiting_time=total_waiting / len(intersections) if intersections else 0.0,
    )


def run_network_simulation(config: NetworkConfig,
                           rng: Optional[np.random.Generator] = None) -> List[NetworkState]:
    """Full run: the initial state followed by one state per tick."""
    rng = rng if rng is not None else np.random.default_rng(config.seed)
    state = build_initial_state(config, rng)
    history = [state]
    for _ in range(config.simulation_time):
        state = simulate_network_step(state, config, rng)
        history.append(state)
    return history


def calculate_network_stats(history: List[NetworkState]) -> Dict[str, float]:
    if not history:
        return {
            "avg_efficiency": 0.0, "max_efficiency": 0.0, "min_efficiency": 0.0,
            "avg_waiting_time": 0.0, "max_waiting_time": 0.0, "avg_vehicles": 0.0,
        }

    efficiencies = np.array([s.network_efficiency for s in history])
    waiting = np.array([s.average_waiting_time for s in history])
    vehicles = np.array([s.total_vehicles for s in history])

    return {
        "avg_efficiency": float(efficiencies.mean()),
        "max_efficiency": float(efficiencies.max()),
        "min_efficiency": float(efficiencies.min()),
        "avg_waiting_time": float(waiting.mean()),
        "max_waiting_time": float(waiting.max()),
        "avg_vehicles": float(vehicles.mean()),
    }


def history_frame(history: List[NetworkState]) -> pd.DataFrame:
    return pd.DataFrame([
        {
            "time": s.time,
            "total_vehicles": s.total_vehicles,
            "average_waiting_time": s.average_waiting_time,
            "network_efficiency": s.network_efficiency,
            "total_throughput": s.total_throughput,
        }
        for s in history
    ])
