import pytest

from traffic_analytics.scenario import Scenario, get_preset
from traffic_analytics.state import (
    ApplyPreset,
    DashboardState,
    Reset,
    SelectNetworkStrategy,
    SelectStrategies,
    SetScenario,
    Tick,
    TogglePlayback,
    UpdateScenario,
    reduce,
)
from traffic_analytics.strategies import Strategy


def test_defaults():
    state = DashboardState()
    assert state.scenario == Scenario()
    assert state.head_to_head == (Strategy.FIXED_TIME, Strategy.RL_BASED)
    assert not state.running
    assert state.playback_time == 0


def test_apply_preset():
    state = reduce(DashboardState(), ApplyPreset("rush_hour"))
    assert state.scenario == get_preset("rush_hour")


def test_set_scenario():
    custom = Scenario(name="Mine", north_flow=10)
    assert reduce(DashboardState(), SetScenario(custom)).scenario is custom


def test_update_scenario_returns_new_state():
    before = DashboardState()
    after = reduce(before, UpdateScenario({"north_flow": 200, "peak_hour_active": True}))
    assert after.scenario.north_flow == 100.0
    assert after.scenario.peak_hour_active
    assert before.scenario.north_flow == 50.0


def test_select_strategies_parses_labels():
    state = reduce(DashboardState(), SelectStrategies("Rule-based", "rl_based"))
    assert state.head_to_head == (Strategy.RULE_BASED, Strategy.RL_BASED)
    state = reduce(state, SelectNetworkStrategy("fixed-time"))
    assert state.network_strategy == Strategy.FIXED_TIME


def test_tick_only_while_running():
    state = reduce(DashboardState(), Tick())
    assert state.playback_time == 0

    state = reduce(state, TogglePlayback())
    state = reduce(state, Tick())
    state = reduce(state, Tick(steps=3))
    assert state.running
    assert state.playback_time == 4

    state = reduce(state, TogglePlayback())
    assert reduce(state, Tick()).playback_time == 4


def test_reset_keeps_strategy_selection():
    state = reduce(DashboardState(), SelectStrategies("rule-based", "fixed-time"))
    state = reduce(state, ApplyPreset("incident"))
    state = reduce(state, TogglePlayback())
    state = reduce(state, Tick())
    state = reduce(state, Reset())
    assert state.scenario == Scenario()
    assert state.playback_time == 0
    assert not state.running
    assert state.head_to_head == (Strategy.RULE_BASED, Strategy.FIXED_TIME)


def test_unknown_action():
    with pytest.raises(TypeError):
        reduce(DashboardState(), "go faster")


def test_invalid_preset_propagates():
    with pytest.raises(ValueError):
        reduce(DashboardState(), ApplyPreset("blizzard"))
