# src/cascadix/analysis/statistics.py
"""
Post-processing helpers for Monte Carlo populations.
"""
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
from scipy import stats

from .results import MonteCarloResult

logger = logging.getLogger(__name__)


def confidence_interval(values: Sequence[float], level: float = 0.95) -> Tuple[float, float]:
    """
    Empirical (lower, upper) bounds holding `level` of the values, taken from
    the sorted values at ranks int(alpha/2 * n) and int((1 - alpha/2) * n).
    """
    data = np.sort(np.asarray(values, dtype=float))
    if data.size == 0:
        raise ValueError("Cannot compute a confidence interval of an empty sample.")
    if not 0 < level < 1:
        raise ValueError(f"Confidence level must lie in (0, 1), got {level}.")
    alpha = 1.0 - level
    lower = int(alpha * 0.5 * data.size)
    upper = min(int((1.0 - alpha * 0.5) * data.size), data.size - 1)
    return float(data[lower]), float(data[upper])


def histogram(values: Sequence[float], bins: int = 20) -> Tuple[np.ndarray, np.ndarray]:
    """Returns (probabilities, bin_edges); probabilities sum to 1."""
    data = np.asarray(values, dtype=float)
    if data.size == 0:
        raise ValueError("Cannot build a histogram of an empty sample.")
    counts, edges = np.histogram(data, bins=bins)
    return counts / data.size, edges


@dataclass(frozen=True)
class SensitivityResult:
    component_index: int
    sensitivity: float   # Slope of |z| against the component value.
    correlation: float   # Pearson r.


def sensitivity_analysis(result: MonteCarloResult) -> List[SensitivityResult]:
    """
    Linear regression of |z_in| against each component's sampled value,
    sorted by decreasing |slope|. Components that never varied get zero
    sensitivity and correlation.
    """
    if result.num_samples < 2 or result.component_values.size == 0:
        return []
    magnitudes = np.abs(result.impedances)
    sensitivities = []
    for index in range(result.component_values.shape[1]):
        column = result.component_values[:, index]
        if np.ptp(column) == 0 or np.ptp(magnitudes) == 0:
            sensitivities.append(SensitivityResult(index, 0.0, 0.0))
            continue
        fit = stats.linregress(column, magnitudes)
        sensitivities.append(SensitivityResult(index, float(fit.slope), float(fit.rvalue)))
    sensitivities.sort(key=lambda s: abs(s.sensitivity), reverse=True)
    return sensitivities


@dataclass(frozen=True)
class ParetoPoint:
    component_values: Tuple[float, ...]
    objectives: Tuple[float, ...]  # Lower is better for every objective.


def find_pareto_front(points: Sequence[ParetoPoint]) -> List[ParetoPoint]:
    """Points not dominated by any other (no worse in every objective, better in one)."""
    front = []
    for i, candidate in enumerate(points):
        dominated = False
        for j, other in enumerate(points):
            if i == j:
                continue
            no_worse = all(o <= c for o, c in zip(other.objectives, candidate.objectives))
            better = any(o < c for o, c in zip(other.objectives, candidate.objectives))
            if no_worse and better:
                dominated = True
                break
        if not dominated:
            front.append(candidate)
    return front


def robustness_metric(result: MonteCarloResult, vswr_threshold: float) -> float:
    """Fraction of samples with VSWR <= `vswr_threshold`."""
    if result.num_samples == 0:
        return 0.0
    return float(np.count_nonzero(result.vswr_distribution() <= vswr_threshold) / result.num_samples)
