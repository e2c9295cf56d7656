# src/cascadix/smith/conversions.py
"""
Conversions between impedance, admittance and reflection coefficient.
All functions take the reference impedance `z0` (default 50 ohm, may be complex).
"""
import cmath
import math

from ..constants import DEFAULT_Z0
from ..network import DegenerateNetworkError


def normalize_impedance(z: complex, z0: complex = DEFAULT_Z0) -> complex:
    return complex(z) / z0


def impedance_to_gamma(z: complex, z0: complex = DEFAULT_Z0) -> complex:
    """Gamma = (z - z0) / (z + z0)."""
    z = complex(z)
    denominator = z + z0
    if denominator == 0:
        raise DegenerateNetworkError(
            operation="impedance_to_gamma", details=f"z = -z0 ({z}) has no finite reflection coefficient.",
            denominator=0j,
        )
    return (z - z0) / denominator


def gamma_to_impedance(gamma: complex, z0: complex = DEFAULT_Z0) -> complex:
    """z = z0 * (1 + Gamma) / (1 - Gamma)."""
    gamma = complex(gamma)
    denominator = 1.0 - gamma
    if denominator == 0:
        raise DegenerateNetworkError(
            operation="gamma_to_impedance", details="Gamma = 1 corresponds to an open circuit (infinite impedance).",
            denominator=0j,
        )
    return z0 * (1.0 + gamma) / denominator


def admittance_to_gamma(y: complex, z0: complex = DEFAULT_Z0) -> complex:
    """Gamma = (1 - y*z0) / (1 + y*z0)."""
    yn = complex(y) * z0
    if yn + 1.0 == 0:
        raise DegenerateNetworkError(
            operation="admittance_to_gamma", details=f"y = -1/z0 ({y}) has no finite reflection coefficient.",
            denominator=0j,
        )
    return (1.0 - yn) / (1.0 + yn)


def gamma_to_vswr(gamma: complex) -> float:
    """(1 + |Gamma|) / (1 - |Gamma|); infinite for total reflection."""
    magnitude = abs(complex(gamma))
    if magnitude >= 1.0 or cmath.isnan(magnitude):
        return math.inf
    return (1.0 + magnitude) / (1.0 - magnitude)
