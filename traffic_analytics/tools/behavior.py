import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns

from traffic_analytics.network.grid import DIRECTIONS


def analyze_signal_behavior(history):
    """
    Summarizes how a strategy drove the signals during a simulation.
    Returns: (per-intersection green share, average queue per approach)
    """
    # Skip the initial state: its signals were not chosen by the policy
    steps = history[1:]
    ns_green_counts = {}
    approach_queues = {d: [] for d in DIRECTIONS}

    for state in steps:
        for i in state.intersections:
            ns_green_counts.setdefault(i.name, 0)
            if i.ns_green:
                ns_green_counts[i.name] += 1
            for d in DIRECTIONS:
                approach_queues[d].append(i.queues[d])

    total = len(steps)
    green_data = []
    for name, count in ns_green_counts.items():
        pct = (count / total) * 100 if total > 0 else 0
        green_data.append({"Intersection": name, "NS Green %": pct, "EW Green %": 100 - pct if total > 0 else 0})

    df_green = pd.DataFrame(green_data)

    # Fairness: average queue per approach over the whole run
    fairness_data = []
    for d in DIRECTIONS:
        avg_q = float(np.mean(approach_queues[d])) if approach_queues[d] else 0.0
        fairness_data.append({"Approach": d.capitalize(), "Avg Queue": avg_q})

    df_fairness = pd.DataFrame(fairness_data)

    return df_green, df_fairness


def plot_behavior(df_green, df_fairness):
    """Generates figures for the GUI"""
    # Plot 1: Green share
    fig1, ax1 = plt.subplots(figsize=(8, 4))
    sns.barplot(data=df_green, x="Intersection", y="NS Green %", ax=ax1, color="#16a34a")
    ax1.set_title("North-South Green Share per Intersection")
    ax1.tick_params(axis='x', rotation=45)

    # Plot 2: Fairness
    fig2, ax2 = plt.subplots(figsize=(6, 4))
    sns.barplot(data=df_fairness, x="Approach", y="Avg Queue", ax=ax2, color="#7c3aed")
    ax2.set_title("Average Queue per Approach (Fairness Check)")

    return fig1, fig2
