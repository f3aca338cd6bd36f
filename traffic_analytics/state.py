"""
Dashboard state and its reducer.

The dashboard never mutates state in place: every user interaction is an
action, and `reduce(state, action)` returns the next state.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple

from traffic_analytics.strategies import Strategy
from traffic_analytics.scenario import Scenario, get_preset


@dataclass(frozen=True)
class DashboardState:
    scenario: Scenario = field(default_factory=Scenario)
    head_to_head: Tuple[Strategy, Strategy] = (Strategy.FIXED_TIME, Strategy.RL_BASED)
    network_strategy: Strategy = Strategy.RL_BASED
    playback_time: int = 0
    running: bool = False


# Actions

@dataclass(frozen=True)
class SetScenario:
    scenario: Scenario


@dataclass(frozen=True)
class ApplyPreset:
    name: str


@dataclass(frozen=True)
class UpdateScenario:
    changes: Dict[str, Any]


@dataclass(frozen=True)
class SelectStrategies:
    first: Any
    second: Any


@dataclass(frozen=True)
class SelectNetworkStrategy:
    strategy: Any


@dataclass(frozen=True)
class TogglePlayback:
    pass


@dataclass(frozen=True)
class Tick:
    steps: int = 1


@dataclass(frozen=True)
class Reset:
    pass


def reduce(state: DashboardState, action) -> DashboardState:
    if isinstance(action, SetScenario):
        return replace(state, scenario=action.scenario)

    if isinstance(action, ApplyPreset):
        return replace(state, scenario=get_preset(action.name))

    if isinstance(action, UpdateScenario):
        return replace(state, scenario=state.scenario.update(**action.changes))

    if isinstance(action, SelectStrategies):
        pair = (Strategy.parse(action.first), Strategy.parse(action.second))
        return replace(state, head_to_head=pair)

    if isinstance(action, SelectNetworkStrategy):
        return replace(state, network_strategy=Strategy.parse(action.strategy))

    if isinstance(action, TogglePlayback):
        return replace(state, running=not state.running)

    if isinstance(action, Tick):
        # Time only advances while playing
        if not state.running:
            return state
        return replace(state, playback_time=state.playback_time + action.steps)

    if isinstance(action, Reset):
        return replace(state, scenario=Scenario(), playback_time=0, running=False)

    raise TypeError(f"Unknown dashboard action: {action!r}")
