import math
from typing import Dict, Sequence

import numpy as np

from traffic_analytics.analysis.descriptive import is_constant


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation coefficient.

    Vectors of different length are truncated to the shorter one. Returns 0.0
    when fewer than two pairs remain or either vector is constant.
    """
    n = min(len(x), len(y))
    if n < 2:
        return 0.0
    a = np.asarray(x[:n], dtype=float)
    b = np.asarray(y[:n], dtype=float)
    if is_constant(a) or is_constant(b):
        return 0.0

    da = a - a.mean()
    db = b - b.mean()
    denominator = math.sqrt(float(np.sum(da ** 2) * np.sum(db ** 2)))
    if denominator == 0:
        return 0.0
    r = float(np.sum(da * db)) / denominator
    return max(-1.0, min(1.0, r))


def correlation_matrix(datasets: Dict[str, Sequence[float]]) -> Dict[str, Dict[str, float]]:
    """Square matrix of pairwise correlations keyed by metric name, unit diagonal."""
    keys = list(datasets)
    matrix = {}
    for row in keys:
        matrix[row] = {}
        for col in keys:
            if row == col:
                matrix[row][col] = 1.0
            else:
                matrix[row][col] = pearson_correlation(datasets[row], datasets[col])
    return matrix
