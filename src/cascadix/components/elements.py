# src/cascadix/components/elements.py
"""
Lumped-element factories. Each returns a `TwoPortMatrix`; the `*_element`
variants also return the impedance or admittance the matrix was built from.
"""
import cmath
import logging
import math

from ..network import TwoPortMatrix
from .base import (
    ElementResult, RLCResult, angular_frequency, register_component,
    require_finite, require_non_negative, require_positive,
)
from .base_enums import ComponentType
from .exceptions import ComponentError

logger = logging.getLogger(__name__)


def _require_finite_complex(component: str, name: str, value: complex) -> complex:
    value = complex(value)
    if not cmath.isfinite(value):
        raise ComponentError(component=component, details=f"{name} must be finite, got {value}.")
    return value


# --- Generic one-port mounts ---

def series_impedance(z: complex) -> TwoPortMatrix:
    """[[1, Z], [0, 1]]"""
    z = _require_finite_complex("series_impedance", "Impedance", z)
    return TwoPortMatrix(1.0, z, 0.0, 1.0)


def shunt_admittance(y: complex) -> TwoPortMatrix:
    """[[1, 0], [Y, 1]]"""
    y = _require_finite_complex("shunt_admittance", "Admittance", y)
    return TwoPortMatrix(1.0, 0.0, y, 1.0)


def shunt_impedance(z: complex) -> TwoPortMatrix:
    """Shunt element given by its impedance; a zero impedance is a short to ground."""
    z = _require_finite_complex("shunt_impedance", "Impedance", z)
    if z == 0:
        raise ComponentError(component="shunt_impedance", details="A zero shunt impedance shorts the signal path.")
    return shunt_admittance(1.0 / z)


# --- Resistors ---

def series_resistor_element(resistance: float) -> ElementResult:
    r = require_non_negative("series_R", "Resistance", resistance)
    z = complex(r, 0.0)
    return ElementResult(matrix=series_impedance(z), impedance=z)


def series_resistor(resistance: float) -> TwoPortMatrix:
    return series_resistor_element(resistance).matrix


def shunt_resistor_element(resistance: float) -> ElementResult:
    r = require_positive("shunt_R", "Resistance", resistance)
    y = complex(1.0 / r, 0.0)
    return ElementResult(matrix=shunt_admittance(y), admittance=y)


def shunt_resistor(resistance: float) -> TwoPortMatrix:
    return shunt_resistor_element(resistance).matrix


# --- Inductors ---

def series_inductor_element(inductance: float, frequency: float) -> ElementResult:
    l_val = require_non_negative("series_L", "Inductance", inductance, frequency)
    omega = angular_frequency("series_L", frequency)
    z = complex(0.0, omega * l_val)
    return ElementResult(matrix=series_impedance(z), impedance=z)


def series_inductor(inductance: float, frequency: float) -> TwoPortMatrix:
    return series_inductor_element(inductance, frequency).matrix


def shunt_inductor_element(inductance: float, frequency: float) -> ElementResult:
    l_val = require_positive("shunt_L", "Inductance", inductance, frequency)
    omega = angular_frequency("shunt_L", frequency, strictly_positive=True)
    y = complex(0.0, -1.0 / (omega * l_val))
    return ElementResult(matrix=shunt_admittance(y), admittance=y)


def shunt_inductor(inductance: float, frequency: float) -> TwoPortMatrix:
    return shunt_inductor_element(inductance, frequency).matrix


# --- Capacitors ---

def series_capacitor_element(capacitance: float, frequency: float) -> ElementResult:
    c_val = require_positive("series_C", "Capacitance", capacitance, frequency)
    omega = angular_frequency("series_C", frequency, strictly_positive=True)
    z = complex(0.0, -1.0 / (omega * c_val))
    return ElementResult(matrix=series_impedance(z), impedance=z)


def series_capacitor(capacitance: float, frequency: float) -> TwoPortMatrix:
    return series_capacitor_element(capacitance, frequency).matrix


def shunt_capacitor_element(capacitance: float, frequency: float) -> ElementResult:
    c_val = require_non_negative("shunt_C", "Capacitance", capacitance, frequency)
    omega = angular_frequency("shunt_C", frequency)
    y = complex(0.0, omega * c_val)
    return ElementResult(matrix=shunt_admittance(y), admittance=y)


def shunt_capacitor(capacitance: float, frequency: float) -> TwoPortMatrix:
    return shunt_capacitor_element(capacitance, frequency).matrix


# --- Transformer ---

def ideal_transformer(turns_ratio: float) -> TwoPortMatrix:
    """
    Ideal transformer with turns ratio n (primary:secondary) = [[n, 0], [0, 1/n]].
    A load Z on port 2 is seen as n^2 * Z at port 1.
    """
    n = require_finite("ideal_transformer", "Turns ratio", turns_ratio)
    if n == 0:
        raise ComponentError(component="ideal_transformer", details="Turns ratio must be non-zero.")
    return TwoPortMatrix(n, 0.0, 0.0, 1.0 / n)


# --- RLC branches ---

def resonant_frequency(inductance: float, capacitance: float) -> float:
    """1 / (2*pi*sqrt(L*C)); infinite when L*C is zero."""
    lc = inductance * capacitance
    if lc <= 0:
        return math.inf
    return 1.0 / (2.0 * math.pi * math.sqrt(lc))


def series_rlc_element(resistance: float, inductance: float, capacitance: float, frequency: float) -> RLCResult:
    """Series R-L-C branch placed in series: Z = R + j*w*L + 1/(j*w*C)."""
    r = require_non_negative("series_RLC", "Resistance", resistance, frequency)
    l_val = require_non_negative("series_RLC", "Inductance", inductance, frequency)
    c_val = require_positive("series_RLC", "Capacitance", capacitance, frequency)
    omega = angular_frequency("series_RLC", frequency, strictly_positive=True)

    z = complex(r, omega * l_val - 1.0 / (omega * c_val))
    q = math.sqrt(l_val / c_val) / r if r > 0 else math.inf
    return RLCResult(
        matrix=series_impedance(z),
        resonant_frequency=resonant_frequency(l_val, c_val),
        q_factor=q,
        impedance=z,
    )


def series_rlc(resistance: float, inductance: float, capacitance: float, frequency: float) -> TwoPortMatrix:
    return series_rlc_element(resistance, inductance, capacitance, frequency).matrix


def shunt_rlc_element(resistance: float, inductance: float, capacitance: float, frequency: float) -> RLCResult:
    """Parallel R||L||C tank placed in shunt: Y = 1/R + j*w*C + 1/(j*w*L)."""
    r = require_positive("shunt_RLC", "Resistance", resistance, frequency)
    l_val = require_positive("shunt_RLC", "Inductance", inductance, frequency)
    c_val = require_non_negative("shunt_RLC", "Capacitance", capacitance, frequency)
    omega = angular_frequency("shunt_RLC", frequency, strictly_positive=True)

    y = complex(1.0 / r, omega * c_val - 1.0 / (omega * l_val))
    return RLCResult(
        matrix=shunt_admittance(y),
        resonant_frequency=resonant_frequency(l_val, c_val),
        q_factor=r * math.sqrt(c_val / l_val),
        admittance=y,
    )


def shunt_rlc(resistance: float, inductance: float, capacitance: float, frequency: float) -> TwoPortMatrix:
    return shunt_rlc_element(resistance, inductance, capacitance, frequency).matrix


# --- Registry adapters: (value, frequency, **options) -> TwoPortMatrix ---

@register_component(ComponentType.SERIES_R, unit="ohm")
def _series_r(value: float, frequency: float, **options) -> TwoPortMatrix:
    return series_resistor(value)


@register_component(ComponentType.SHUNT_R, unit="ohm", strictly_positive=True)
def _shunt_r(value: float, frequency: float, **options) -> TwoPortMatrix:
    return shunt_resistor(value)


@register_component(ComponentType.SERIES_L, unit="henry", strictly_positive=True)
def _series_l(value: float, frequency: float, **options) -> TwoPortMatrix:
    return series_inductor(value, frequency)


@register_component(ComponentType.SHUNT_L, unit="henry", strictly_positive=True)
def _shunt_l(value: float, frequency: float, **options) -> TwoPortMatrix:
    return shunt_inductor(value, frequency)


@register_component(ComponentType.SERIES_C, unit="farad", strictly_positive=True)
def _series_c(value: float, frequency: float, **options) -> TwoPortMatrix:
    return series_capacitor(value, frequency)


@register_component(ComponentType.SHUNT_C, unit="farad", strictly_positive=True)
def _shunt_c(value: float, frequency: float, **options) -> TwoPortMatrix:
    return shunt_capacitor(value, frequency)
