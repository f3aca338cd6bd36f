import os
import matplotlib.pyplot as plt
import numpy as np
import imageio

from traffic_analytics.network.grid import GREEN

SIGNAL_COLORS = {"green": "#16a34a", "yellow": "#eab308", "red": "#dc2626"}


def plot_network_state(state, ax=None):
    """Draws the grid: one box per intersection with its queues and green axis."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6))
    else:
        fig = ax.figure

    size = max(i.x for i in state.intersections) + 1 if state.intersections else 1
    ax.set_xlim(-0.6, size - 0.4); ax.set_ylim(size - 0.4, -0.6); ax.axis('off')

    # Roads
    for k in range(size):
        ax.plot([-0.5, size - 0.5], [k, k], color='#444444', alpha=0.4, linewidth=6, zorder=0)
        ax.plot([k, k], [-0.5, size - 0.5], color='#444444', alpha=0.4, linewidth=6, zorder=0)

    for i in state.intersections:
        ns_color = SIGNAL_COLORS[i.signals["north"]]
        ew_color = SIGNAL_COLORS[i.signals["east"]]
        ax.plot([i.x, i.x], [i.y - 0.15, i.y + 0.15], color=ns_color, linewidth=4)
        ax.plot([i.x - 0.15, i.x + 0.15], [i.y, i.y], color=ew_color, linewidth=4)

        axis = "NS" if i.signals["north"] == GREEN else "EW"
        ax.text(i.x, i.y + 0.3, f"Q {i.total_queue:.0f} | {axis}", ha='center', fontsize=8,
                bbox=dict(boxstyle='round', facecolor='white', alpha=0.8))

    ax.set_title(f"t = {state.time} | vehicles {state.total_vehicles:.0f} | eff {state.network_efficiency:.2f}")
    return fig


def _render_frame(state):
    fig = plot_network_state(state)
    fig.canvas.draw()
    # Get RGBA buffer and convert to numpy
    image = np.asarray(fig.canvas.buffer_rgba())
    if image.shape[2] == 4:
        image = image[:, :, :3]
    plt.close(fig)
    return image


def generate_gif(history, output_path="replay.gif", max_steps=300):
    """Renders a simulation history and saves it as a GIF animation."""
    frames = [_render_frame(state) for state in history[:max_steps + 1]]

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    # 200 ms per frame
    imageio.mimsave(output_path, frames, duration=200, loop=0)
    return output_path
