import os
import json
import csv
import time
import logging
import matplotlib.pyplot as plt


def setup_logger(name: str = "traffic_analytics", level: int = logging.INFO) -> logging.Logger:
    """
    Sets up a logger with a standard format.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger


class ExperimentLogger:
    """Writes one simulation run to its own folder: config.json, metrics.csv and a plot."""

    headers = ["time", "total_vehicles", "average_waiting_time", "network_efficiency", "total_throughput"]

    def __init__(self, config, run_name, base_dir="runs"):
        timestamp = time.strftime("%Y%m%d-%H%M%S")
        self.exp_dir = os.path.join(base_dir, f"{run_name}_{timestamp}")
        os.makedirs(self.exp_dir, exist_ok=True)

        # Save Config
        with open(os.path.join(self.exp_dir, "config.json"), "w") as f:
            json.dump(config.to_dict(), f, indent=4)

        # Init CSV
        self.csv_path = os.path.join(self.exp_dir, "metrics.csv")
        with open(self.csv_path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(self.headers)

    def log_step(self, state):
        with open(self.csv_path, "a", newline="") as f:
            writer = csv.writer(f)
            writer.writerow([
                state.time,
                state.total_vehicles,
                state.average_waiting_time,
                state.network_efficiency,
                state.total_throughput,
            ])

    def save_plot(self, vehicles, efficiencies):
        plt.figure(figsize=(10, 5))
        plt.subplot(1, 2, 1)
        plt.plot(vehicles)
        plt.title("Vehicles in Network")
        plt.subplot(1, 2, 2)
        plt.plot(efficiencies)
        plt.title("Network Efficiency")
        plt.savefig(os.path.join(self.exp_dir, "simulation_plot.png"))
        plt.close()

    def get_save_path(self, filename):
        return os.path.join(self.exp_dir, filename)
