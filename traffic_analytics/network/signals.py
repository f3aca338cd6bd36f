"""
Signal policies for the grid network.

Each policy looks at one intersection and returns True when the north-south
axis should be green. `apply_signal` writes the decision so that the two
axes are always complementary.
"""

from typing import Callable, Dict

from traffic_analytics.strategies import Strategy
from traffic_analytics.network.grid import IntersectionState, NS_AXIS, EW_AXIS, GREEN, RED

FIXED_CYCLE = 30
NS_RATIO_THRESHOLD = 0.5

Policy = Callable[[IntersectionState, int], bool]


def fixed_time_policy(intersection: IntersectionState, time: int) -> bool:
    """Alternates every 30 ticks, starting with north-south."""
    return (time // FIXED_CYCLE) % 2 == 0


def rule_based_policy(intersection: IntersectionState, time: int) -> bool:
    """The axis with the longer total queue gets green; ties go to east-west."""
    return intersection.ns_queue > intersection.ew_queue


def rl_based_policy(intersection: IntersectionState, time: int) -> bool:
    """North-south green when it holds more than half of the queued vehicles."""
    ns_ratio = intersection.ns_queue / (intersection.total_queue + 1)
    return ns_ratio > NS_RATIO_THRESHOLD


POLICIES: Dict[Strategy, Policy] = {
    Strategy.FIXED_TIME: fixed_time_policy,
    Strategy.RULE_BASED: rule_based_policy,
    Strategy.RL_BASED: rl_based_policy,
}


def get_policy(strategy) -> Policy:
    return POLICIES[Strategy.parse(strategy)]


def apply_signal(intersection: IntersectionState, ns_green: bool) -> None:
    ns_state, ew_state = (GREEN, RED) if ns_green else (RED, GREEN)
    for direction in NS_AXIS:
        intersection.signals[direction] = ns_state
    for direction in EW_AXIS:
        intersection.signals[direction] = ew_state
