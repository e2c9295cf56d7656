# src/cascadix/network/parameters.py
"""
Immutable network-parameter value types derived from a TwoPortMatrix.

These are snapshots: scalar metrics such as return loss or VSWR are computed
from the stored fields on every access and are never cached.
"""
import math
from dataclasses import dataclass

import numpy as np


def _db20(magnitude: float) -> float:
    """-20*log10(|x|), with an exact zero mapping to +inf."""
    if magnitude == 0.0:
        return math.inf
    return -20.0 * math.log10(magnitude)


@dataclass(frozen=True)
class ScatteringParameters:
    """
    Two-port S-parameters referenced to a single (possibly complex) impedance.

    Attributes:
        s11, s22: Port reflection coefficients.
        s12, s21: Reverse and forward transmission coefficients.
    """
    s11: complex
    s12: complex
    s21: complex
    s22: complex

    def determinant(self) -> complex:
        return self.s11 * self.s22 - self.s12 * self.s21

    @property
    def return_loss_db(self) -> float:
        """Input return loss, -20*log10|S11| (dB, +inf for a perfect match)."""
        return _db20(abs(self.s11))

    @property
    def insertion_loss_db(self) -> float:
        """Insertion loss, -20*log10|S21| (dB)."""
        return _db20(abs(self.s21))

    @property
    def mismatch_loss_db(self) -> float:
        """Power lost to input reflection, -10*log10(1 - |S11|^2) (dB)."""
        remaining = 1.0 - abs(self.s11) ** 2
        if remaining <= 0.0:
            return math.inf
        return -10.0 * math.log10(remaining)

    @property
    def vswr(self) -> float:
        """Input VSWR, (1+|S11|)/(1-|S11|). Always >= 1; +inf for total reflection."""
        mag = abs(self.s11)
        if mag >= 1.0:
            return math.inf
        return (1.0 + mag) / (1.0 - mag)

    def as_array(self) -> np.ndarray:
        return np.array([[self.s11, self.s12], [self.s21, self.s22]], dtype=np.complex128)


@dataclass(frozen=True)
class ImpedanceParameters:
    """Open-circuit impedance (Z) parameters, in ohm."""
    z11: complex
    z12: complex
    z21: complex
    z22: complex

    def determinant(self) -> complex:
        return self.z11 * self.z22 - self.z12 * self.z21

    def as_array(self) -> np.ndarray:
        return np.array([[self.z11, self.z12], [self.z21, self.z22]], dtype=np.complex128)


@dataclass(frozen=True)
class AdmittanceParameters:
    """Short-circuit admittance (Y) parameters, in siemens."""
    y11: complex
    y12: complex
    y21: complex
    y22: complex

    def determinant(self) -> complex:
        return self.y11 * self.y22 - self.y12 * self.y21

    def as_array(self) -> np.ndarray:
        return np.array([[self.y11, self.y12], [self.y21, self.y22]], dtype=np.complex128)
