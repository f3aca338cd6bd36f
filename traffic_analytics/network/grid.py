"""
Grid layout of a multi-intersection network.

Intersections sit on a grid_size x grid_size lattice. Position (x, y) grows
east along x and south along y, so the north neighbour of (x, y) is (x, y - 1).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

RED = "red"
YELLOW = "yellow"
GREEN = "green"

DIRECTIONS = ("north", "east", "south", "west")
NS_AXIS = ("north", "south")
EW_AXIS = ("east", "west")

OPPOSITE = {
    "north": "south",
    "south": "north",
    "east": "west",
    "west": "east",
}

# Grid offset (dx, dy) of the neighbour in each direction
OFFSETS = {
    "north": (0, -1),
    "east": (1, 0),
    "south": (0, 1),
    "west": (-1, 0),
}

FLOW_INFLUENCE = 0.3
INITIAL_FLOW_MAX = 20.0


def intersection_id(x: int, y: int) -> str:
    return f"intersection_{x}_{y}"


@dataclass
class IntersectionState:
    id: str
    name: str
    x: int
    y: int
    flows: Dict[str, float] = field(default_factory=lambda: {d: 0.0 for d in DIRECTIONS})
    queues: Dict[str, float] = field(default_factory=lambda: {d: 0.0 for d in DIRECTIONS})
    signals: Dict[str, str] = field(default_factory=lambda: {
        "north": RED, "east": GREEN, "south": RED, "west": GREEN,
    })
    total_waiting_time: float = 0.0
    total_throughput: float = 0.0
    efficiency: float = 0.0

    @property
    def total_queue(self) -> float:
        return sum(self.queues.values())

    @property
    def ns_queue(self) -> float:
        return self.queues["north"] + self.queues["south"]

    @property
    def ew_queue(self) -> float:
        return self.queues["east"] + self.queues["west"]

    @property
    def ns_green(self) -> bool:
        return self.signals["north"] == GREEN

    def copy(self) -> "IntersectionState":
        return IntersectionState(
            id=self.id,
            name=self.name,
            x=self.x,
            y=self.y,
            flows=dict(self.flows),
            queues=dict(self.queues),
            signals=dict(self.signals),
            total_waiting_time=self.total_waiting_time,
            total_throughput=self.total_throughput,
            efficiency=self.efficiency,
        )


@dataclass(frozen=True)
class NetworkConnection:
    source: str
    target: str
    direction: str
    flow_influence: float = FLOW_INFLUENCE


def initialize_network(grid_size: int, rng: Optional[np.random.Generator] = None) -> List[IntersectionState]:
    """Creates grid_size^2 intersections with random initial flow rates in [0, 20)."""
    if grid_size < 1:
        raise ValueError(f"grid_size must be at least 1, got {grid_size}")
    rng = rng if rng is not None else np.random.default_rng()

    intersections = []
    for x in range(grid_size):
        for y in range(grid_size):
            intersections.append(IntersectionState(
                id=intersection_id(x, y),
                name=f"Intersection ({x + 1}, {y + 1})",
                x=x,
                y=y,
                flows={d: float(rng.random() * INITIAL_FLOW_MAX) for d in DIRECTIONS},
            ))
    return intersections


def create_network_connections(grid_size: int) -> List[NetworkConnection]:
    """Directed edges from every intersection to each in-grid neighbour: 4 * g * (g - 1) in total."""
    connections = []
    for x in range(grid_size):
        for y in range(grid_size):
            for direction in DIRECTIONS:
                dx, dy = OFFSETS[direction]
                nx, ny = x + dx, y + dy
                if 0 <= nx < grid_size and 0 <= ny < grid_size:
                    connections.append(NetworkConnection(
                        source=intersection_id(x, y),
                        target=intersection_id(nx, ny),
                        direction=direction,
                    ))
    return connections
