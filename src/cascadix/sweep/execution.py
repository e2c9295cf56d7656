# src/cascadix/sweep/execution.py
"""
The sweep engine. A sweep evaluates a builder (``value -> TwoPortMatrix``) at
every point of a `SweepSpecification` and collects S-parameters and port
impedances into parallel sequences. Component sweeps vary a single element's
value at a fixed frequency, optionally embedded between fixed networks.

Specifications are validated before the first builder call; any failure inside
a builder propagates unchanged.
"""
import cmath
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from ..constants import C0, DEFAULT_Z0
from ..components import ComponentType, get_component_spec, resolve_component_type
from ..network import DegenerateNetworkError, ScatteringParameters, TwoPortMatrix
from .config import SweepDistribution, SweepSpecification
from .exceptions import InvalidSweepSpecificationError
from .results import ArcRange, ComponentSweepResults, SweepResults

logger = logging.getLogger(__name__)

NetworkBuilder = Callable[[float], TwoPortMatrix]

#: Upper bound on the point count suggested by `calculate_optimal_points`.
MAX_OPTIMAL_POINTS = 1000
#: Initial point count of an adaptive component sweep before refinement.
ADAPTIVE_INITIAL_POINTS = 50
#: Bisection limits for `find_component_value_at_angle`.
ANGLE_SEARCH_ITERATIONS = 50
ANGLE_SEARCH_TOLERANCE_RAD = 1e-6


def _reflection_coefficient(z: complex, z0: complex) -> complex:
    z_norm = z / z0
    if z_norm + 1.0 == 0:
        raise DegenerateNetworkError(
            operation="reflection_coefficient", details="Impedance equals -z0; the reflection coefficient is infinite.",
            denominator=0j,
        )
    return (z_norm - 1.0) / (z_norm + 1.0)


# --- Frequency (or any scalar) sweeps ---

def run_sweep(
    builder: NetworkBuilder,
    spec: SweepSpecification,
    z0: complex = DEFAULT_Z0,
    z_load: Optional[complex] = None,
    z_source: Optional[complex] = None,
) -> SweepResults:
    """
    Evaluates `builder` at every point of `spec`.

    Args:
        builder: Callable returning the network's ABCD matrix for a sweep value.
        spec: The sweep specification; validated before any evaluation.
        z0: Reference impedance of the S-parameters.
        z_load: Termination on port 2 for the input impedance (defaults to `z0`).
        z_source: Termination on port 1 for the output impedance (defaults to `z0`).

    Raises:
        InvalidSweepSpecificationError: if `spec` is malformed.
        DegenerateNetworkError: if any point has no finite representation.
    """
    values = spec.values()
    z_load = z0 if z_load is None else z_load
    z_source = z0 if z_source is None else z_source
    logger.info(f"Starting sweep: {spec}, z0={z0}")

    s_parameters: List[ScatteringParameters] = []
    z_in = np.empty(len(values), dtype=np.complex128)
    z_out = np.empty(len(values), dtype=np.complex128)
    for i, value in enumerate(values):
        network = builder(float(value))
        s_parameters.append(network.to_scattering(z0))
        z_in[i] = network.input_impedance(z_load)
        z_out[i] = network.output_impedance(z_source)
        logger.debug(f"Sweep point {i}: value={value:.6g}, z_in={z_in[i]:.6g}")

    logger.info(f"Sweep finished: {len(values)} points evaluated.")
    return SweepResults(
        values=values,
        s_parameters=tuple(s_parameters),
        input_impedances=z_in,
        output_impedances=z_out,
        z0=complex(z0),
    )


def sweep_s_parameters(
    builder: NetworkBuilder, spec: SweepSpecification, z0: complex = DEFAULT_Z0
) -> Tuple[ScatteringParameters, ...]:
    """S-parameters only, one per sweep point."""
    return tuple(builder(float(v)).to_scattering(z0) for v in spec.values())


# --- Component value sweeps ---

@dataclass(frozen=True)
class ComponentSweep:
    """
    Sweep of one component's value at a fixed operating frequency.

    `options` are passed through to the component factory (e.g. ``z0`` and
    ``velocity_factor`` for a transmission line, whose value is its length).
    """
    component_type: ComponentType
    start: float
    stop: float
    num_points: int
    frequency: float
    distribution: SweepDistribution = SweepDistribution.LINEAR
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def specification(self) -> SweepSpecification:
        return SweepSpecification(self.start, self.stop, self.num_points, self.distribution)

    def values(self) -> np.ndarray:
        return self.specification.values()

    def create_network(self, value: float) -> TwoPortMatrix:
        spec = get_component_spec(self.component_type)
        return spec.factory(value, self.frequency, **self.options)

    def with_num_points(self, num_points: int) -> "ComponentSweep":
        return ComponentSweep(
            self.component_type, self.start, self.stop, num_points, self.frequency, self.distribution, self.options
        )

    def __str__(self) -> str:
        return (f"{self.component_type.value} {self.start:.6g} -> {self.stop:.6g} "
                f"({self.num_points} points, {self.distribution.value}) at {self.frequency:.6g} Hz")


def validate_component_sweep(sweep: ComponentSweep) -> None:
    """
    Raises:
        InvalidSweepSpecificationError: for fewer than 2 points, equal bounds, a
            non-positive frequency, or bounds outside the component's value domain
            (R >= 0 in series, R > 0 in shunt, L and C > 0, line length >= 0), or a
            non-positive line velocity factor.
    """
    sweep.specification.validate()
    if sweep.start == sweep.stop:
        raise InvalidSweepSpecificationError(
            details="Component sweep start and stop values must differ.", specification=str(sweep)
        )
    if not (math.isfinite(sweep.frequency) and sweep.frequency > 0):
        raise InvalidSweepSpecificationError(
            details=f"Operating frequency must be > 0, got {sweep.frequency}.", specification=str(sweep)
        )
    spec = get_component_spec(sweep.component_type)
    low = min(sweep.start, sweep.stop)
    if spec.strictly_positive and low <= 0:
        raise InvalidSweepSpecificationError(
            details=f"{sweep.component_type.value} sweep bounds must be strictly positive.", specification=str(sweep)
        )
    if low < 0:
        raise InvalidSweepSpecificationError(
            details=f"{sweep.component_type.value} sweep bounds must be non-negative.", specification=str(sweep)
        )
    velocity_factor = sweep.options.get("velocity_factor", 1.0)
    if sweep.component_type is ComponentType.TRANSMISSION_LINE and not velocity_factor > 0:
        raise InvalidSweepSpecificationError(
            details=f"Line velocity factor must be > 0, got {velocity_factor}.", specification=str(sweep)
        )


def _embedded_network(sweep: ComponentSweep, value: float,
                      before: Optional[TwoPortMatrix], after: Optional[TwoPortMatrix]) -> TwoPortMatrix:
    network = sweep.create_network(value)
    if before is not None:
        network = before @ network
    if after is not None:
        network = network @ after
    return network


def run_component_sweep(
    sweep: ComponentSweep,
    z0: complex = DEFAULT_Z0,
    before: Optional[TwoPortMatrix] = None,
    after: Optional[TwoPortMatrix] = None,
    z_load: complex = DEFAULT_Z0,
) -> ComponentSweepResults:
    """
    Sweeps the component embedded as ``before -> component -> after`` with
    `z_load` on port 2, collecting input impedance, admittance, S-parameters and
    the reflection coefficient against `z0` at every value.
    """
    validate_component_sweep(sweep)
    values = sweep.values()
    logger.info(f"Starting component sweep: {sweep}")

    impedances = np.empty(len(values), dtype=np.complex128)
    s_parameters: List[ScatteringParameters] = []
    for i, value in enumerate(values):
        network = _embedded_network(sweep, float(value), before, after)
        impedances[i] = network.input_impedance(z_load)
        s_parameters.append(network.to_scattering(z0))

    with np.errstate(divide='ignore', invalid='ignore'):
        admittances = 1.0 / impedances
    gammas = np.array([_reflection_coefficient(z, z0) for z in impedances], dtype=np.complex128)
    logger.info(f"Component sweep finished: {len(values)} points evaluated.")
    return ComponentSweepResults(
        component_type=sweep.component_type,
        frequency=sweep.frequency,
        values=values,
        impedances=impedances,
        admittances=admittances,
        s_parameters=tuple(s_parameters),
        reflection_coefficients=gammas,
        z0=complex(z0),
    )


def calculate_optimal_points(sweep: ComponentSweep, max_phase_change: float = 30.0) -> int:
    """
    Suggests a point count that keeps the traced Smith chart arc smooth.

    Inductors: one point per 10 ohm of reactance change. Capacitors: the same on
    1/(wC). Lines: one point per `max_phase_change` degrees of electrical length
    (free-space phase velocity unless a ``velocity_factor`` option is set).
    Never fewer than `sweep.num_points`, never more than MAX_OPTIMAL_POINTS.
    """
    validate_component_sweep(sweep)
    value_range = abs(sweep.stop - sweep.start)
    omega = 2.0 * math.pi * sweep.frequency
    optimal = int(sweep.num_points)

    ctype = sweep.component_type
    if ctype in (ComponentType.SERIES_L, ComponentType.SHUNT_L):
        optimal = max(int(omega * value_range / 10.0), optimal)
    elif ctype in (ComponentType.SERIES_C, ComponentType.SHUNT_C):
        c_min, c_max = min(sweep.start, sweep.stop), max(sweep.start, sweep.stop)
        x_range = abs(1.0 / (omega * c_min) - 1.0 / (omega * c_max))
        optimal = max(int(x_range / 10.0), optimal)
    elif ctype is ComponentType.TRANSMISSION_LINE:
        beta = omega / (C0 * sweep.options.get("velocity_factor", 1.0))
        phase_range_deg = math.degrees(beta * value_range)
        optimal = max(int(phase_range_deg / max_phase_change), optimal)

    if optimal > MAX_OPTIMAL_POINTS:
        logger.warning(f"Suggested point count {optimal} for '{ctype.value}' capped at {MAX_OPTIMAL_POINTS}.")
        optimal = MAX_OPTIMAL_POINTS
    return optimal


def make_adaptive_component_sweep(
    component_type: Union[ComponentType, str],
    start: float,
    stop: float,
    frequency: float,
    max_phase_change: float = 30.0,
    **options,
) -> ComponentSweep:
    """A component sweep whose point count comes from `calculate_optimal_points`."""
    initial = ComponentSweep(
        resolve_component_type(component_type), float(start), float(stop), ADAPTIVE_INITIAL_POINTS,
        float(frequency), options=dict(options),
    )
    return initial.with_num_points(calculate_optimal_points(initial, max_phase_change))


def calculate_arc_range(
    component_type: Union[ComponentType, str],
    nominal_value: float,
    frequency: float,
    tolerance: float = 0.2,
    z0: complex = DEFAULT_Z0,
    **options,
) -> ArcRange:
    """Endpoints (impedance and reflection coefficient) of a component's tolerance arc, loaded by `z0`."""
    ctype = resolve_component_type(component_type)
    value_min = nominal_value * (1.0 - tolerance)
    value_max = nominal_value * (1.0 + tolerance)
    spec = get_component_spec(ctype)
    z_start = spec.factory(value_min, frequency, **options).input_impedance(z0)
    z_stop = spec.factory(value_max, frequency, **options).input_impedance(z0)
    return ArcRange(
        component_type=ctype,
        value_min=value_min,
        value_max=value_max,
        z_start=z_start,
        z_stop=z_stop,
        gamma_start=_reflection_coefficient(z_start, z0),
        gamma_stop=_reflection_coefficient(z_stop, z0),
    )


def find_component_value_at_angle(
    sweep: ComponentSweep,
    target_angle_degrees: float,
    z0: complex = DEFAULT_Z0,
    before: Optional[TwoPortMatrix] = None,
    after: Optional[TwoPortMatrix] = None,
    z_load: complex = DEFAULT_Z0,
) -> float:
    """
    Bisects the sweep's value range for the value whose reflection coefficient
    angle, normalized to [0, 2*pi), equals `target_angle_degrees`.

    Assumes the angle is monotonic in the value over the range; whether it
    rises or falls is read from the two endpoints. Returns the midpoint of the
    final bracket if the tolerance is not met.
    """
    def angle_at(value: float) -> float:
        network = _embedded_network(sweep, value, before, after)
        angle = cmath.phase(_reflection_coefficient(network.input_impedance(z_load), z0))
        return angle + 2.0 * math.pi if angle < 0 else angle

    low, high = min(sweep.start, sweep.stop), max(sweep.start, sweep.stop)
    target = math.radians(target_angle_degrees)
    increasing = angle_at(high) >= angle_at(low)

    for _ in range(ANGLE_SEARCH_ITERATIONS):
        mid = 0.5 * (low + high)
        angle = angle_at(mid)
        if abs(angle - target) < ANGLE_SEARCH_TOLERANCE_RAD:
            return mid
        if (angle < target) == increasing:
            low = mid
        else:
            high = mid
    return 0.5 * (low + high)


def make_component_sweep(
    description: Union[ComponentType, str],
    start: float,
    stop: float,
    num_points: int,
    frequency: float,
    distribution: Union[SweepDistribution, str] = SweepDistribution.LINEAR,
    **options,
) -> ComponentSweep:
    """
    Builds a `ComponentSweep` from a textual component name such as ``"series_L"``.

    Raises:
        ComponentError: if the name is not a known component type.
    """
    return ComponentSweep(
        component_type=resolve_component_type(description),
        start=float(start),
        stop=float(stop),
        num_points=num_points,
        frequency=float(frequency),
        distribution=SweepDistribution.resolve(distribution),
        options=dict(options),
    )
