import os
import streamlit as st

from traffic_analytics.config import AppConfig
from traffic_analytics.scenario import PRESET_SCENARIOS
from traffic_analytics.state import DashboardState, ApplyPreset, UpdateScenario, Reset, reduce

DEFAULT_CONFIG = "configs/default.yaml"
CUSTOM_SCENARIO_NAME = "Custom Scenario"


def load_config(path=DEFAULT_CONFIG):
    if not os.path.exists(path):
        st.warning(f"Config file not found: {path}. Using defaults.")
        return AppConfig()
    return AppConfig.load(path)


def get_state() -> DashboardState:
    if 'dashboard' not in st.session_state:
        st.session_state['dashboard'] = DashboardState()
    return st.session_state['dashboard']


def dispatch(action) -> DashboardState:
    """Runs an action through the reducer and stores the new state."""
    st.session_state['dashboard'] = reduce(get_state(), action)
    return st.session_state['dashboard']


def scenario_edit(scenario, values):
    """UpdateScenario for the controls that moved, or None when nothing changed."""
    changes = {k: v for k, v in values.items() if getattr(scenario, k) != v}
    if not changes:
        return None
    # An edited preset is no longer that preset
    changes["name"] = CUSTOM_SCENARIO_NAME
    return UpdateScenario(changes)


def render_sidebar():
    st.sidebar.title("🚦 Traffic Analytics")
    st.sidebar.markdown("---")

    st.sidebar.subheader("🌆 Scenario")
    state = get_state()

    # 1. Presets
    preset = st.sidebar.selectbox("Preset", list(PRESET_SCENARIOS.keys()), key="sb_preset")
    col1, col2 = st.sidebar.columns(2)
    with col1:
        if st.button("Apply"):
            state = dispatch(ApplyPreset(preset))
    with col2:
        if st.button("Reset"):
            state = dispatch(Reset())

    # 2. Manual controls
    scenario = state.scenario
    values = {
        "north_flow": st.sidebar.slider("North flow", 0, 100, int(scenario.north_flow)),
        "east_flow": st.sidebar.slider("East flow", 0, 100, int(scenario.east_flow)),
        "south_flow": st.sidebar.slider("South flow", 0, 100, int(scenario.south_flow)),
        "west_flow": st.sidebar.slider("West flow", 0, 100, int(scenario.west_flow)),
        "incident_active": st.sidebar.checkbox("Incident", value=scenario.incident_active),
        "incident_severity": st.sidebar.slider("Incident severity", 0, 100, int(scenario.incident_severity)),
        "peak_hour_active": st.sidebar.checkbox("Peak hour", value=scenario.peak_hour_active),
        "peak_hour_intensity": st.sidebar.slider("Peak intensity", 0, 100, int(scenario.peak_hour_intensity)),
    }
    action = scenario_edit(scenario, values)
    if action is not None:
        state = dispatch(action)

    st.sidebar.caption(f"Active: **{state.scenario.name}**")
    st.sidebar.markdown("---")
    return state
