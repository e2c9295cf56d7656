# src/cascadix/components/networks.py
"""
Composite networks built purely by cascading primitive elements: Butterworth
ladders, resistive attenuators and single-section L-matches. The `make_*_builder`
helpers return ``frequency -> TwoPortMatrix`` callables for the sweep engine.
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from ..constants import DEFAULT_Z0
from ..network import TwoPortMatrix, cascade_all
from .base import angular_frequency, require_finite, require_positive
from .elements import (
    series_capacitor, series_inductor, series_resistor, series_rlc,
    shunt_capacitor, shunt_inductor, shunt_resistor,
)
from .exceptions import ComponentError
from .tlines import transmission_line

logger = logging.getLogger(__name__)

NetworkBuilder = Callable[[float], TwoPortMatrix]


# --- Butterworth ---

def butterworth_coefficients(order: int) -> List[float]:
    """Normalized lowpass prototype values g_k = 2*sin((2k-1)*pi / (2n)), k = 1..n."""
    if not isinstance(order, int) or order < 1:
        raise ComponentError(component="butterworth", details=f"Filter order must be a positive integer, got {order}.")
    return [2.0 * math.sin((2 * k - 1) * math.pi / (2 * order)) for k in range(1, order + 1)]


def butterworth_lowpass_values(order: int, cutoff: float, z0: float = DEFAULT_Z0) -> List[Tuple[str, float]]:
    """
    Denormalized element values of an LC ladder starting with a series inductor,
    as a list of ``("L", henries)`` / ``("C", farads)`` pairs.
    """
    cutoff = require_positive("butterworth", "Cutoff frequency", cutoff, cutoff)
    z0 = require_positive("butterworth", "Reference impedance", z0, cutoff)
    omega_c = 2.0 * math.pi * cutoff
    values = []
    for index, g in enumerate(butterworth_coefficients(order)):
        if index % 2 == 0:
            values.append(("L", g * z0 / omega_c))
        else:
            values.append(("C", g / (z0 * omega_c)))
    return values


def butterworth_lowpass(order: int, cutoff: float, z0: float = DEFAULT_Z0,
                        frequency: Optional[float] = None) -> TwoPortMatrix:
    """Butterworth LC ladder of `order` evaluated at `frequency` (defaults to the cutoff)."""
    frequency = cutoff if frequency is None else frequency
    stages = [
        series_inductor(value, frequency) if kind == "L" else shunt_capacitor(value, frequency)
        for kind, value in butterworth_lowpass_values(order, cutoff, z0)
    ]
    return cascade_all(stages)


def butterworth_lowpass_3rd(cutoff: float, z0: float = DEFAULT_Z0, frequency: Optional[float] = None) -> TwoPortMatrix:
    """Series L, shunt C, series L with prototype values (1, 2, 1): |S21| = -3 dB at the cutoff."""
    return butterworth_lowpass(3, cutoff, z0, frequency)


# --- Attenuators ---

def _attenuation_ratio(component: str, attenuation_db: float) -> float:
    attenuation_db = require_finite(component, "Attenuation", attenuation_db)
    if attenuation_db <= 0:
        raise ComponentError(component=component, details=f"Attenuation must be > 0 dB, got {attenuation_db} dB.")
    return 10.0 ** (attenuation_db / 20.0)


def pi_attenuator_values(attenuation_db: float, z0: float = DEFAULT_Z0) -> Tuple[float, float]:
    """(series resistance, shunt resistance) of a matched Pi pad."""
    k = _attenuation_ratio("pi_attenuator", attenuation_db)
    z0 = require_positive("pi_attenuator", "Reference impedance", z0)
    return z0 * (k * k - 1.0) / (2.0 * k), z0 * (k + 1.0) / (k - 1.0)


def pi_attenuator(attenuation_db: float, z0: float = DEFAULT_Z0) -> TwoPortMatrix:
    """Shunt R, series R, shunt R."""
    r_series, r_shunt = pi_attenuator_values(attenuation_db, z0)
    return cascade_all([shunt_resistor(r_shunt), series_resistor(r_series), shunt_resistor(r_shunt)])


def t_attenuator_values(attenuation_db: float, z0: float = DEFAULT_Z0) -> Tuple[float, float]:
    """(series resistance, shunt resistance) of a matched T pad."""
    k = _attenuation_ratio("t_attenuator", attenuation_db)
    z0 = require_positive("t_attenuator", "Reference impedance", z0)
    return z0 * (k - 1.0) / (k + 1.0), 2.0 * z0 * k / (k * k - 1.0)


def t_attenuator(attenuation_db: float, z0: float = DEFAULT_Z0) -> TwoPortMatrix:
    """Series R, shunt R, series R."""
    r_series, r_shunt = t_attenuator_values(attenuation_db, z0)
    return cascade_all([series_resistor(r_series), shunt_resistor(r_shunt), series_resistor(r_series)])


# --- L-match ---

@dataclass(frozen=True)
class LMatchDesign:
    """
    Element values of a single-section L-match between two resistances.

    `series_first` is True when the series element faces the source (source
    resistance below load resistance); otherwise the shunt element does.
    """
    z_source: float
    z_load: float
    design_frequency: float
    highpass: bool
    q: float
    inductance: float
    capacitance: float
    series_first: bool

    def build(self, frequency: float) -> TwoPortMatrix:
        """The matching network with these fixed element values, evaluated at `frequency`."""
        if self.q == 0:
            return TwoPortMatrix.identity()
        if self.highpass:
            series = series_capacitor(self.capacitance, frequency)
            shunt = shunt_inductor(self.inductance, frequency)
        else:
            series = series_inductor(self.inductance, frequency)
            shunt = shunt_capacitor(self.capacitance, frequency)
        return series @ shunt if self.series_first else shunt @ series


def design_l_match(z_source: float, z_load: float, frequency: float, highpass: bool = False) -> LMatchDesign:
    """
    Sizes an L-match that presents `z_source` at port 1 when port 2 sees `z_load`.

    With r_low < r_high and q = sqrt(r_high/r_low - 1), the series element sits
    on the low-resistance side:
      lowpass:  series L = r_low*q/w,        shunt C = q/(w*r_high)
      highpass: series C = 1/(w*r_low*q),    shunt L = r_high/(w*q)
    """
    rs = require_positive("l_match", "Source resistance", z_source, frequency)
    rl = require_positive("l_match", "Load resistance", z_load, frequency)
    omega = angular_frequency("l_match", frequency, strictly_positive=True)

    r_low, r_high = min(rs, rl), max(rs, rl)
    q = math.sqrt(r_high / r_low - 1.0)
    if q == 0:
        logger.info("L-match requested between equal resistances; returning a through connection.")
        return LMatchDesign(rs, rl, frequency, highpass, 0.0, 0.0, 0.0, True)

    if highpass:
        capacitance = 1.0 / (omega * r_low * q)
        inductance = r_high / (omega * q)
    else:
        inductance = r_low * q / omega
        capacitance = q / (omega * r_high)
    return LMatchDesign(
        z_source=rs, z_load=rl, design_frequency=frequency, highpass=highpass, q=q,
        inductance=inductance, capacitance=capacitance, series_first=rs < rl,
    )


def l_match(z_source: float, z_load: float, frequency: float, highpass: bool = False) -> TwoPortMatrix:
    """Single-section L-match designed for and evaluated at `frequency`."""
    return design_l_match(z_source, z_load, frequency, highpass).build(frequency)


# --- Frequency builders ---

def make_butterworth_builder(cutoff: float, z0: float = DEFAULT_Z0, order: int = 3) -> NetworkBuilder:
    # Element values are fixed at construction; only their reactances vary with frequency.
    values = butterworth_lowpass_values(order, cutoff, z0)

    def builder(frequency: float) -> TwoPortMatrix:
        return cascade_all(
            series_inductor(value, frequency) if kind == "L" else shunt_capacitor(value, frequency)
            for kind, value in values
        )
    return builder


def make_l_match_builder(z_source: float, z_load: float, design_frequency: float,
                         highpass: bool = False) -> NetworkBuilder:
    return design_l_match(z_source, z_load, design_frequency, highpass).build


def make_series_rlc_builder(resistance: float, inductance: float, capacitance: float) -> NetworkBuilder:
    def builder(frequency: float) -> TwoPortMatrix:
        return series_rlc(resistance, inductance, capacitance, frequency)
    return builder


def make_tline_builder(length: float, z0: complex = DEFAULT_Z0, velocity_factor: float = 1.0,
                       loss_db_per_m: float = 0.0) -> NetworkBuilder:
    def builder(frequency: float) -> TwoPortMatrix:
        return transmission_line(length, z0, frequency, velocity_factor, loss_db_per_m)
    return builder


def cascade_builders(builders: Iterable[NetworkBuilder]) -> NetworkBuilder:
    """Combines builders into one that cascades their matrices in order at each frequency."""
    builders = list(builders)

    def builder(frequency: float) -> TwoPortMatrix:
        return cascade_all(b(frequency) for b in builders)
    return builder
