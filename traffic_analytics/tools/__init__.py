# Exposes tools for easier import
from .analyzer import run_analysis_suite
from .significance import run_significance_suite
from .comparator import run_comparison_suite
from .batch_runner import run_batch_simulations
