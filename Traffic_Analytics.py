import streamlit as st
from traffic_analytics.gui_utils import render_sidebar

# Page Config
st.set_page_config(
    page_title="Traffic Analytics",
    layout="wide",
    page_icon="🚦",
    initial_sidebar_state="expanded"
)

# Render the common sidebar
state = render_sidebar()

# --- MAIN HOME PAGE CONTENT ---
st.title("🚦 Traffic Signal Strategy Analytics")

st.markdown("""
### 📈 Research Dashboard

Compare **Fixed-time**, **Rule-based** and **RL-based** signal control under configurable traffic scenarios.
The scenario in the sidebar drives every page.

---

### 📚 How to use this App:

#### 1. 📊 Statistics
Descriptive statistics, confidence intervals and correlations for every strategy.
* **Tip:** Apply the "rush_hour" preset to see how the strategies degrade under load.

#### 2. 🧪 Hypothesis Tests
Welch t-tests for every pair of strategies, one-way ANOVA and a chi-square congestion test.

#### 3. ⚖️ Head-to-Head
Pick two strategies and see the improvement on each metric, with significance.

#### 4. 🌐 Network
Simulate a grid of coupled intersections and replay how the signals behave.

---
""")

st.info(f"💡 **Active scenario:** {state.scenario.name} (total flow {state.scenario.total_flow:.0f})")
