# src/cascadix/analysis/monte_carlo.py
"""
Monte Carlo tolerance analysis.

The analyzer owns a single numpy Generator seeded at construction. Every draw
advances it in a fixed order (component by component, each drawing a full
column of samples), so an analyzer created with the same seed and the same
components reproduces the same population.
"""
import logging
from typing import Callable, List, Optional, Sequence

import numpy as np

from ..constants import DEFAULT_Z0
from ..components import create_component_network
from ..network import TwoPortAccumulator, TwoPortMatrix
from .exceptions import ToleranceSpecificationError
from .results import MonteCarloResult
from .tolerance import ComponentTolerance

logger = logging.getLogger(__name__)

ValuesBuilder = Callable[[Sequence[float]], TwoPortMatrix]


class MonteCarloAnalyzer:
    """
    Samples component values from their tolerances, rebuilds the network for
    each sample, and aggregates impedance, S-parameter and yield statistics.
    """

    def __init__(self, num_samples: int = 1000, seed: Optional[int] = None):
        if num_samples < 1:
            raise ToleranceSpecificationError(details=f"Number of samples must be >= 1, got {num_samples}.")
        self.num_samples = int(num_samples)
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        self._components: List[ComponentTolerance] = []

    @property
    def components(self) -> List[ComponentTolerance]:
        return list(self._components)

    def add_component(self, tolerance: ComponentTolerance) -> int:
        """Appends a toleranced component (cascaded in insertion order); returns its index."""
        self._components.append(tolerance)
        return len(self._components) - 1

    # --- Sampling ---

    def generate_samples(self, tolerance: ComponentTolerance, num_samples: Optional[int] = None) -> np.ndarray:
        n = self.num_samples if num_samples is None else num_samples
        if n < 1:
            raise ToleranceSpecificationError(details=f"Number of samples must be >= 1, got {n}.")
        return tolerance.sample(self._rng, n)

    def _sample_matrix(self, components: Sequence[ComponentTolerance], num_samples: int) -> np.ndarray:
        if not components:
            return np.empty((num_samples, 0), dtype=float)
        return np.column_stack([c.sample(self._rng, num_samples) for c in components])

    def generate_batch_samples(self) -> np.ndarray:
        """float32 matrix of shape (num_samples, num_components)."""
        return self._sample_matrix(self._components, self.num_samples).astype(np.float32)

    # --- Analysis ---

    @staticmethod
    def _default_builder(components: Sequence[ComponentTolerance], frequency: float) -> ValuesBuilder:
        def builder(values: Sequence[float]) -> TwoPortMatrix:
            accumulator = TwoPortAccumulator()
            for component, value in zip(components, values):
                accumulator.cascade_inplace(
                    create_component_network(component.component_type, float(value), frequency, **component.options)
                )
            return accumulator.freeze()
        return builder

    def _run(self, components: Sequence[ComponentTolerance], num_samples: int, frequency: float,
             z0: complex, z_load: complex, network_builder: Optional[ValuesBuilder]):
        builder = network_builder or self._default_builder(components, frequency)
        values = self._sample_matrix(components, num_samples)
        impedances = np.empty(num_samples, dtype=np.complex128)
        s_parameters = []
        for i, row in enumerate(values):
            network = builder(row.tolist())
            impedances[i] = network.input_impedance(z_load)
            s_parameters.append(network.to_scattering(z0))
        return values, impedances, s_parameters

    def analyze(
        self,
        frequency: float,
        z0: complex = DEFAULT_Z0,
        z_load: complex = DEFAULT_Z0,
        network_builder: Optional[ValuesBuilder] = None,
        vswr_threshold: float = 2.0,
    ) -> MonteCarloResult:
        """
        Runs `num_samples` trials at `frequency`.

        Args:
            network_builder: Optional ``values -> TwoPortMatrix`` taking one
                sampled value per component in insertion order. By default the
                components are cascaded as registered single elements.
            vswr_threshold: A sample passes when its VSWR is strictly below this.
        """
        logger.info(f"Starting Monte Carlo analysis: {self.num_samples} samples, "
                    f"{len(self._components)} components at {frequency:.6g} Hz.")
        values, impedances, s_parameters = self._run(
            self._components, self.num_samples, frequency, z0, z_load, network_builder
        )
        result = MonteCarloResult.from_samples(values, impedances, s_parameters, vswr_threshold, z0)
        logger.info(f"Monte Carlo analysis finished: yield {result.yield_rate:.2%}, "
                    f"mean impedance {result.mean_impedance:.4g}.")
        return result

    def analyze_temperature(
        self,
        frequency: float,
        temp_min: float,
        temp_max: float,
        steps: int,
        z0: complex = DEFAULT_Z0,
        z_load: complex = DEFAULT_Z0,
        network_builder: Optional[ValuesBuilder] = None,
        vswr_threshold: float = 2.0,
    ) -> MonteCarloResult:
        """
        Splits `num_samples` over `steps` temperatures from `temp_min` to
        `temp_max`, shifting each nominal value by its temperature coefficient,
        and returns the combined population.

        The first ``num_samples % steps`` temperatures get one extra sample, so
        the population always holds exactly `num_samples` trials.
        `network_builder` has the same contract as in `analyze`.
        """
        if not 1 <= steps <= self.num_samples:
            raise ToleranceSpecificationError(
                details=f"Temperature steps must be between 1 and the sample count "
                        f"({self.num_samples}), got {steps}."
            )
        base, remainder = divmod(self.num_samples, steps)
        temp_step = (temp_max - temp_min) / (steps - 1) if steps > 1 else 0.0
        logger.info(f"Starting temperature analysis: {steps} steps from {temp_min} to {temp_max} degC, "
                    f"{self.num_samples} samples in total.")

        all_values, all_impedances, all_s, all_temps = [], [], [], []
        for step in range(steps):
            temperature = temp_min + step * temp_step
            count = base + (1 if step < remainder else 0)
            shifted = [c.at_temperature(temperature) for c in self._components]
            values, impedances, s_parameters = self._run(
                shifted, count, frequency, z0, z_load, network_builder
            )
            all_values.append(values)
            all_impedances.append(impedances)
            all_s.extend(s_parameters)
            all_temps.append(np.full(count, temperature))

        return MonteCarloResult.from_samples(
            np.vstack(all_values), np.concatenate(all_impedances), all_s, vswr_threshold, z0,
            temperatures=np.concatenate(all_temps),
        )
