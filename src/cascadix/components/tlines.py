# src/cascadix/components/tlines.py
"""
Uniform transmission lines, stubs, and the tee adapters that fold an arbitrary
terminated sub-network into a single series or shunt element.

Conventions: lengths in metres, electrical lengths in degrees, attenuation in
dB/m (converted to Np/m) or directly in Np/m for `lossy_transmission_line`.
The phase constant is beta = omega / (velocity_factor * c0), so one wavelength
is velocity_factor * c0 / f.
"""
import cmath
import logging
import math

from ..constants import C0, DB_TO_NEPER, DEGENERATE_THRESHOLD, DEFAULT_Z0
from ..network import DegenerateNetworkError, TwoPortMatrix
from .base import (
    TransmissionLineResult, angular_frequency, register_component,
    require_non_negative, require_positive,
)
from .base_enums import ComponentType, Mount
from .elements import series_impedance, shunt_admittance
from .exceptions import ComponentError

logger = logging.getLogger(__name__)


def _check_line_impedance(component: str, z0: complex, frequency: float) -> complex:
    z0 = complex(z0)
    if not cmath.isfinite(z0) or z0 == 0:
        raise ComponentError(
            component=component, details=f"Characteristic impedance must be finite and non-zero, got {z0}.",
            frequency=frequency
        )
    return z0


def phase_constant(frequency: float, velocity_factor: float = 1.0) -> float:
    """beta = omega * sqrt(mu0 * eps0) / vf, in rad/m."""
    omega = angular_frequency("transmission_line", frequency)
    vf = require_positive("transmission_line", "Velocity factor", velocity_factor, frequency)
    return omega / (C0 * vf)


def wavelength(frequency: float, velocity_factor: float = 1.0) -> float:
    """Guided wavelength vf * c0 / f, in metres."""
    f = require_positive("transmission_line", "Frequency", frequency, frequency)
    vf = require_positive("transmission_line", "Velocity factor", velocity_factor, frequency)
    return vf * C0 / f


def electrical_length_degrees(length: float, frequency: float, velocity_factor: float = 1.0) -> float:
    """Electrical length beta*l of a line, in degrees."""
    return math.degrees(phase_constant(frequency, velocity_factor) * length)


def lossy_transmission_line_element(
    length: float, z0: complex, frequency: float, alpha_np_per_m: float = 0.0, velocity_factor: float = 1.0
) -> TransmissionLineResult:
    """
    Uniform line of `length` with gamma = alpha + j*beta:

        [[cosh(gl),      Z0*sinh(gl)],
         [sinh(gl)/Z0,   cosh(gl)   ]]
    """
    component = "transmission_line"
    length = require_non_negative(component, "Length", length, frequency)
    alpha = require_non_negative(component, "Attenuation", alpha_np_per_m, frequency)
    z0 = _check_line_impedance(component, z0, frequency)
    beta = phase_constant(frequency, velocity_factor)

    gamma = complex(alpha, beta)
    gl = gamma * length
    cosh_gl = cmath.cosh(gl)
    sinh_gl = cmath.sinh(gl)
    matrix = TwoPortMatrix(cosh_gl, z0 * sinh_gl, sinh_gl / z0, cosh_gl)
    return TransmissionLineResult(
        matrix=matrix,
        characteristic_impedance=z0,
        propagation_constant=gamma,
        electrical_length_degrees=math.degrees(beta * length),
    )


def lossy_transmission_line(
    length: float, z0: complex, frequency: float, alpha_np_per_m: float = 0.0, velocity_factor: float = 1.0
) -> TwoPortMatrix:
    return lossy_transmission_line_element(length, z0, frequency, alpha_np_per_m, velocity_factor).matrix


def transmission_line_element(
    length: float, z0: complex, frequency: float, velocity_factor: float = 1.0, loss_db_per_m: float = 0.0
) -> TransmissionLineResult:
    alpha = require_non_negative("transmission_line", "Loss", loss_db_per_m, frequency) * DB_TO_NEPER
    return lossy_transmission_line_element(length, z0, frequency, alpha, velocity_factor)


def transmission_line(
    length: float, z0: complex, frequency: float, velocity_factor: float = 1.0, loss_db_per_m: float = 0.0
) -> TwoPortMatrix:
    """Uniform line with attenuation given in dB/m."""
    return transmission_line_element(length, z0, frequency, velocity_factor, loss_db_per_m).matrix


def transmission_line_from_electrical_length(
    theta_degrees: float, z0: complex, frequency: float, velocity_factor: float = 1.0
) -> TwoPortMatrix:
    """Lossless line whose electrical length at `frequency` is `theta_degrees`."""
    theta = require_non_negative("transmission_line", "Electrical length", theta_degrees, frequency)
    length = (theta / 360.0) * wavelength(frequency, velocity_factor)
    return transmission_line(length, z0, frequency, velocity_factor)


def quarter_wave_transmission_line(z0: complex, frequency: float, velocity_factor: float = 1.0) -> TwoPortMatrix:
    """90 degree line; transforms a load Zl into Z0^2 / Zl."""
    return transmission_line_from_electrical_length(90.0, z0, frequency, velocity_factor)


# --- Stubs ---

def _stub_tangent(length: float, frequency: float, velocity_factor: float) -> float:
    length = require_non_negative("stub", "Length", length, frequency)
    return math.tan(phase_constant(frequency, velocity_factor) * length)


def short_stub_impedance(length: float, z0: complex, frequency: float, velocity_factor: float = 1.0) -> complex:
    """Input impedance of a short-circuited lossless stub: j*Z0*tan(beta*l)."""
    z0 = _check_line_impedance("short_stub", z0, frequency)
    return 1j * z0 * _stub_tangent(length, frequency, velocity_factor)


def open_stub_impedance(length: float, z0: complex, frequency: float, velocity_factor: float = 1.0) -> complex:
    """
    Input impedance of an open-circuited lossless stub: -j*Z0*cot(beta*l).

    Raises:
        DegenerateNetworkError: when tan(beta*l) vanishes (the stub looks like an open circuit).
    """
    z0 = _check_line_impedance("open_stub", z0, frequency)
    tan_bl = _stub_tangent(length, frequency, velocity_factor)
    if abs(tan_bl) < DEGENERATE_THRESHOLD:
        raise DegenerateNetworkError(
            operation="open_stub_impedance",
            details="tan(beta*l) is zero; the open stub presents an infinite impedance.",
            denominator=complex(tan_bl),
        )
    return -1j * z0 / tan_bl


def series_open_stub(length: float, z0: complex, frequency: float, velocity_factor: float = 1.0) -> TwoPortMatrix:
    return series_impedance(open_stub_impedance(length, z0, frequency, velocity_factor))


def series_short_stub(length: float, z0: complex, frequency: float, velocity_factor: float = 1.0) -> TwoPortMatrix:
    return series_impedance(short_stub_impedance(length, z0, frequency, velocity_factor))


def shunt_open_stub(length: float, z0: complex, frequency: float, velocity_factor: float = 1.0) -> TwoPortMatrix:
    """Shunt open stub, Y = j*tan(beta*l)/Z0 (finite for every length)."""
    z0 = _check_line_impedance("shunt_open_stub", z0, frequency)
    return shunt_admittance(1j * _stub_tangent(length, frequency, velocity_factor) / z0)


def shunt_short_stub(length: float, z0: complex, frequency: float, velocity_factor: float = 1.0) -> TwoPortMatrix:
    """
    Shunt short stub, Y = -j*cot(beta*l)/Z0.

    Raises:
        DegenerateNetworkError: when tan(beta*l) vanishes (a short to ground).
    """
    z0 = _check_line_impedance("shunt_short_stub", z0, frequency)
    tan_bl = _stub_tangent(length, frequency, velocity_factor)
    if abs(tan_bl) < DEGENERATE_THRESHOLD:
        raise DegenerateNetworkError(
            operation="shunt_short_stub",
            details="tan(beta*l) is zero; the shorted stub shorts the signal path to ground.",
            denominator=complex(tan_bl),
        )
    return shunt_admittance(-1j / (z0 * tan_bl))


def stub(length: float, z0: complex, frequency: float, mount: Mount, open_circuit: bool,
         velocity_factor: float = 1.0) -> TwoPortMatrix:
    """Dispatches to one of the four stub factories."""
    if mount is Mount.SERIES:
        factory = series_open_stub if open_circuit else series_short_stub
    else:
        factory = shunt_open_stub if open_circuit else shunt_short_stub
    return factory(length, z0, frequency, velocity_factor)


# --- Tee adapters ---

def _terminated_input_impedance(network: TwoPortMatrix, termination: complex) -> complex:
    # An infinite termination is an open circuit on port 2: z_in -> a / c.
    if cmath.isinf(complex(termination)):
        if abs(network.c) < DEGENERATE_THRESHOLD:
            raise DegenerateNetworkError(
                operation="open_terminated_input_impedance",
                details="The sub-network has no path to ground when left open (c = 0).",
                denominator=network.c,
            )
        return network.a / network.c
    return network.input_impedance(termination)


def shunt_tee(network: TwoPortMatrix, termination: complex) -> TwoPortMatrix:
    """
    Folds `network`, terminated by `termination` on its port 2, into a shunt
    admittance element. Pass ``math.inf`` for an open termination.

    Raises:
        DegenerateNetworkError: if the terminated network presents zero impedance.
    """
    z_in = _terminated_input_impedance(network, termination)
    if abs(z_in) < DEGENERATE_THRESHOLD:
        raise DegenerateNetworkError(
            operation="shunt_tee", details="The terminated sub-network shorts the signal path.",
            denominator=complex(z_in),
        )
    return shunt_admittance(1.0 / z_in)


def series_tee(network: TwoPortMatrix, termination: complex) -> TwoPortMatrix:
    """Folds `network`, terminated by `termination`, into a series impedance element."""
    return series_impedance(_terminated_input_impedance(network, termination))


@register_component(ComponentType.TRANSMISSION_LINE, unit="meter")
def _tline(value: float, frequency: float, z0: complex = DEFAULT_Z0, velocity_factor: float = 1.0,
           loss_db_per_m: float = 0.0, **options) -> TwoPortMatrix:
    return transmission_line(value, z0, frequency, velocity_factor, loss_db_per_m)
