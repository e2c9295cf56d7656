# src/cascadix/analysis/results.py
"""
The immutable population produced by a Monte Carlo run, with its aggregate
statistics computed once at construction.
"""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from ..constants import DEFAULT_Z0
from ..network import ScatteringParameters
from ..smith import SmithChartGenerator


@dataclass(frozen=True)
class MonteCarloResult:
    """
    Attributes:
        component_values: float array of shape (num_samples, num_components).
        impedances: complex input impedance of each sample.
        s_parameters: S-parameters of each sample.
        mean_impedance: arithmetic mean of `impedances`.
        std_impedance: sample standard deviation of the real and imaginary parts,
            packed as complex(std_real, std_imag).
        yield_rate: fraction of samples with VSWR < `vswr_threshold`.
        temperatures: per-sample temperature (degC) for temperature sweeps, else None.
    """
    component_values: np.ndarray
    impedances: np.ndarray
    s_parameters: Tuple[ScatteringParameters, ...]
    mean_impedance: complex
    std_impedance: complex
    yield_rate: float
    vswr_threshold: float
    z0: complex
    temperatures: Optional[np.ndarray] = None

    @classmethod
    def from_samples(
        cls,
        component_values: np.ndarray,
        impedances: Sequence[complex],
        s_parameters: Sequence[ScatteringParameters],
        vswr_threshold: float = 2.0,
        z0: complex = DEFAULT_Z0,
        temperatures: Optional[np.ndarray] = None,
    ) -> "MonteCarloResult":
        impedances = np.asarray(impedances, dtype=np.complex128)
        n = len(impedances)
        mean = complex(impedances.mean()) if n else 0j
        if n > 1:
            std = complex(np.std(impedances.real, ddof=1), np.std(impedances.imag, ddof=1))
        else:
            std = 0j
        vswr = np.array([s.vswr for s in s_parameters], dtype=float)
        yield_rate = float(np.count_nonzero(vswr < vswr_threshold) / n) if n else 0.0
        return cls(
            component_values=np.asarray(component_values, dtype=float),
            impedances=impedances,
            s_parameters=tuple(s_parameters),
            mean_impedance=mean,
            std_impedance=std,
            yield_rate=yield_rate,
            vswr_threshold=float(vswr_threshold),
            z0=complex(z0),
            temperatures=temperatures,
        )

    @property
    def num_samples(self) -> int:
        return len(self.impedances)

    @property
    def probabilities(self) -> np.ndarray:
        """Equal statistical weight 1/n per sample."""
        n = self.num_samples
        return np.full(n, 1.0 / n) if n else np.empty(0)

    def percentile_impedance(self, percentile: float) -> complex:
        """
        The sample at rank min(int(p * n / 100), n - 1) when sorted by |z|.
        """
        n = self.num_samples
        if n == 0:
            return 0j
        index = min(max(int(percentile * n / 100.0), 0), n - 1)
        order = np.argsort(np.abs(self.impedances), kind="stable")
        return complex(self.impedances[order[index]])

    def vswr_distribution(self) -> np.ndarray:
        return np.array([s.vswr for s in self.s_parameters], dtype=float)

    def flattened_impedances(self) -> np.ndarray:
        """float32 [re0, im0, re1, im1, ...]."""
        flat = np.empty(2 * self.num_samples, dtype=np.float32)
        flat[0::2] = self.impedances.real
        flat[1::2] = self.impedances.imag
        return flat

    def smith_coordinates(self, z0: Optional[complex] = None) -> np.ndarray:
        """Clamped float32 reflection coefficients, one point per sample."""
        z0 = self.z0 if z0 is None else z0
        return SmithChartGenerator().impedances_to_points(self.impedances, z0)
