# src/cascadix/smith/generator.py
"""
Adaptive Smith chart point generation.

Consecutive reflection coefficients that land further apart than the local
target spacing get linearly interpolated points in between, so traces stay
smooth without re-evaluating the network. The target spacing shrinks towards
the chart edge where small impedance changes move the trace furthest.
"""
import logging
import math
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..constants import DEFAULT_Z0
from ..network import TwoPortMatrix
from ..sweep import ComponentSweep, InvalidSweepSpecificationError, SweepSpecification, run_component_sweep
from .config import SmithChartConfig
from .conversions import impedance_to_gamma
from .stream import Mesh2D, PointStream, TraceMetadata, TraceType, clamp_coordinate

logger = logging.getLogger(__name__)

NetworkSource = Union[TwoPortMatrix, Callable[[float], TwoPortMatrix]]

#: Upper bound on interpolated points inserted between two samples.
MAX_INTERPOLATION_POINTS = 20


def _flatten(gammas: Sequence[complex]) -> np.ndarray:
    """Flat float32 [x0, y0, ...] with every coordinate clamped to [-1, 1]."""
    flat = np.empty(2 * len(gammas), dtype=np.float32)
    for i, gamma in enumerate(gammas):
        flat[2 * i] = clamp_coordinate(gamma.real)
        flat[2 * i + 1] = clamp_coordinate(gamma.imag)
    return flat


class SmithChartGenerator:
    """Turns networks, impedances and S11 data into Smith chart coordinates."""

    def __init__(self, config: Optional[SmithChartConfig] = None):
        self.config = config if config is not None else SmithChartConfig()

    # --- Adaptive density ---

    def point_spacing(self, gamma: complex) -> float:
        """Target spacing between points near `gamma`."""
        cfg = self.config
        radius = abs(gamma)
        if radius < cfg.edge_threshold:
            t = radius / cfg.edge_threshold
            return cfg.max_spacing - t * (cfg.max_spacing - cfg.min_spacing)
        edge_fraction = (radius - cfg.edge_threshold) / (1.0 - cfg.edge_threshold)
        return cfg.min_spacing / (1.0 + cfg.edge_boost_factor * edge_fraction)

    def _distance_and_spacing(self, gamma1: complex, gamma2: complex) -> Tuple[float, float]:
        average = 0.5 * (self.point_spacing(gamma1) + self.point_spacing(gamma2))
        return abs(gamma2 - gamma1), average

    def should_interpolate(self, gamma1: complex, gamma2: complex) -> bool:
        distance, average = self._distance_and_spacing(gamma1, gamma2)
        return distance > average

    def interpolation_count(self, gamma1: complex, gamma2: complex) -> int:
        """ceil(distance / average spacing) - 1, clamped to [0, MAX_INTERPOLATION_POINTS]."""
        distance, average = self._distance_and_spacing(gamma1, gamma2)
        if not math.isfinite(distance):
            return 0
        count = math.ceil(distance / average) - 1
        return max(0, min(count, MAX_INTERPOLATION_POINTS))

    def _interpolation_fractions(self, gamma1: complex, gamma2: complex) -> List[float]:
        if not (self.config.adaptive_sampling and self.should_interpolate(gamma1, gamma2)):
            return []
        count = self.interpolation_count(gamma1, gamma2)
        return [i / (count + 1) for i in range(1, count + 1)]

    def _densify(self, gammas: Iterable[complex]) -> List[complex]:
        out: List[complex] = []
        previous = None
        for gamma in gammas:
            if previous is not None:
                out.extend(previous + t * (gamma - previous) for t in self._interpolation_fractions(previous, gamma))
            out.append(gamma)
            previous = gamma
        return out

    # --- Helpers ---

    @staticmethod
    def _gammas_for_sweep(source: NetworkSource, spec: SweepSpecification,
                          z_load: complex, z0: complex) -> Tuple[np.ndarray, List[complex]]:
        frequencies = spec.values()
        if isinstance(source, TwoPortMatrix):
            # A fixed network gives the same point at every frequency.
            gamma = impedance_to_gamma(source.input_impedance(z_load), z0)
            return frequencies, [gamma] * len(frequencies)
        gammas = [impedance_to_gamma(source(float(f)).input_impedance(z_load), z0) for f in frequencies]
        return frequencies, gammas

    # --- Flat coordinate generation ---

    def generate_sweep_points(self, source: NetworkSource, spec: SweepSpecification,
                              z_load: complex = DEFAULT_Z0, z0: complex = DEFAULT_Z0) -> np.ndarray:
        """
        Adaptive trace of the input reflection coefficient over a frequency sweep.

        `source` is a ``frequency -> TwoPortMatrix`` builder, or a fixed matrix
        which yields one point per frequency without interpolation.
        """
        _, gammas = self._gammas_for_sweep(source, spec, z_load, z0)
        if isinstance(source, TwoPortMatrix):
            return _flatten(gammas)
        points = _flatten(self._densify(gammas))
        logger.debug(f"Generated {len(points) // 2} Smith chart points from {len(gammas)} sweep points.")
        return points

    def generate_from_s11_data(self, s11_data: Iterable[complex]) -> np.ndarray:
        """Adaptive trace of reflection coefficient data already referenced to the chart's z0."""
        return _flatten(self._densify(complex(s) for s in s11_data))

    def impedances_to_points(self, impedances: Iterable[complex], z0: complex = DEFAULT_Z0) -> np.ndarray:
        """One point per impedance, never interpolated (for scattered clouds such as Monte Carlo)."""
        return _flatten([impedance_to_gamma(z, z0) for z in impedances])

    # --- Point streams ---

    def frequency_sweep_stream(self, builder: Callable[[float], TwoPortMatrix], spec: SweepSpecification,
                               z_load: complex = DEFAULT_Z0, z0: complex = DEFAULT_Z0,
                               metadata: Optional[TraceMetadata] = None) -> PointStream:
        """Adaptive trace whose values are frequencies; interpolated points get interpolated frequencies."""
        frequencies, gammas = self._gammas_for_sweep(builder, spec, z_load, z0)
        stream = PointStream(metadata or TraceMetadata(trace_type=TraceType.FREQUENCY_SWEEP))
        for i, (freq, gamma) in enumerate(zip(frequencies, gammas)):
            if i > 0:
                prev_freq, prev_gamma = frequencies[i - 1], gammas[i - 1]
                for t in self._interpolation_fractions(prev_gamma, gamma):
                    stream.add_point(prev_gamma + t * (gamma - prev_gamma), prev_freq + t * (freq - prev_freq))
            stream.add_point(gamma, float(freq))
        return stream

    def component_sweep_stream(self, sweep: ComponentSweep, z_load: complex = DEFAULT_Z0,
                               z0: complex = DEFAULT_Z0, metadata: Optional[TraceMetadata] = None) -> PointStream:
        """One point per swept component value; values are the component values."""
        results = run_component_sweep(sweep, z0=z0, z_load=z_load)
        stream = PointStream(metadata or TraceMetadata(trace_type=TraceType.COMPONENT_SWEEP))
        for value, gamma in zip(results.values, results.reflection_coefficients):
            stream.add_point(gamma, float(value))
        return stream

    def monte_carlo_stream(self, impedances: Iterable[complex], z0: complex = DEFAULT_Z0,
                           metadata: Optional[TraceMetadata] = None) -> PointStream:
        """One point per sample; values are |z|."""
        stream = PointStream(metadata or TraceMetadata(trace_type=TraceType.MONTE_CARLO, show_markers=True))
        for z in impedances:
            stream.add_point(impedance_to_gamma(z, z0), abs(z))
        return stream

    def animated_sweep(self, builder: Callable[[float], TwoPortMatrix], spec: SweepSpecification,
                       duration_seconds: float, z_load: complex = DEFAULT_Z0, z0: complex = DEFAULT_Z0,
                       metadata: Optional[TraceMetadata] = None) -> PointStream:
        """Sweep points time-stamped linearly from 0 to `duration_seconds`."""
        frequencies, gammas = self._gammas_for_sweep(builder, spec, z_load, z0)
        stream = PointStream(metadata or TraceMetadata(trace_type=TraceType.FREQUENCY_SWEEP))
        last = len(frequencies) - 1
        for i, (freq, gamma) in enumerate(zip(frequencies, gammas)):
            stream.add_point(gamma, float(freq), duration_seconds * i / last)
        return stream

    def generate_2d_mesh(self, builder: Callable[[float, float], TwoPortMatrix], spec: SweepSpecification,
                         component_min: float, component_max: float, component_steps: int,
                         z_load: complex = DEFAULT_Z0, z0: complex = DEFAULT_Z0,
                         metadata: Optional[TraceMetadata] = None) -> Mesh2D:
        """
        Evaluates ``builder(frequency, component_value)`` on a grid: one row per
        frequency of `spec`, `component_steps` linearly spaced values per row.
        """
        if component_steps < 2:
            raise InvalidSweepSpecificationError(
                details=f"A mesh needs at least 2 component steps, got {component_steps}."
            )
        frequencies = spec.values()
        component_values = SweepSpecification.linear(component_min, component_max, component_steps).values()
        rows, cols = len(frequencies), len(component_values)

        gammas: List[complex] = []
        for freq in frequencies:
            for value in component_values:
                network = builder(float(freq), float(value))
                gammas.append(impedance_to_gamma(network.input_impedance(z_load), z0))

        indices = []
        for r in range(rows - 1):
            for c in range(cols - 1):
                i00 = r * cols + c
                i01 = i00 + 1
                i10 = i00 + cols
                i11 = i10 + 1
                indices.extend((i00, i01, i10, i01, i11, i10))

        return Mesh2D(
            vertices=_flatten(gammas),
            values=np.tile(component_values, rows).astype(np.float32),
            indices=np.asarray(indices, dtype=np.uint32),
            rows=rows,
            cols=cols,
            metadata=metadata or TraceMetadata(trace_type=TraceType.COMPONENT_SWEEP),
        )


def generate_network_sweep(source: NetworkSource, start_frequency: float, stop_frequency: float,
                           num_points: int, z0: complex = DEFAULT_Z0,
                           config: Optional[SmithChartConfig] = None) -> np.ndarray:
    """Logarithmic frequency sweep of `source` terminated in `z0`."""
    spec = SweepSpecification.logarithmic(start_frequency, stop_frequency, num_points)
    return SmithChartGenerator(config).generate_sweep_points(source, spec, z_load=z0, z0=z0)


def generate_impedance_cloud(impedances: Iterable[complex], z0: complex = DEFAULT_Z0,
                             config: Optional[SmithChartConfig] = None) -> np.ndarray:
    return SmithChartGenerator(config).impedances_to_points(impedances, z0)
