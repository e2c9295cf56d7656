# src/cascadix/sweep/results.py
"""
Immutable result containers produced by the sweep engine. Every sequence in a
result is parallel to the swept values.
"""
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..components.base_enums import ComponentType
from ..network import ScatteringParameters


def _db(values: np.ndarray) -> np.ndarray:
    with np.errstate(divide='ignore'):
        return 20.0 * np.log10(np.abs(values))


@dataclass(frozen=True)
class SweepResults:
    """
    Per-point results of a sweep driven by a ``value -> TwoPortMatrix`` builder.

    Attributes:
        values: The driving values (usually frequencies in Hz).
        s_parameters: One `ScatteringParameters` per point.
        input_impedances: Impedance at port 1 with the load on port 2.
        output_impedances: Impedance at port 2 with the source on port 1.
        z0: Reference impedance used for the S-parameters.
    """
    values: np.ndarray
    s_parameters: Tuple[ScatteringParameters, ...]
    input_impedances: np.ndarray
    output_impedances: np.ndarray
    z0: complex

    def __len__(self) -> int:
        return len(self.values)

    @property
    def frequencies(self) -> np.ndarray:
        return self.values

    def _s(self, name: str) -> np.ndarray:
        return np.array([getattr(s, name) for s in self.s_parameters], dtype=np.complex128)

    @property
    def s11(self) -> np.ndarray:
        return self._s("s11")

    @property
    def s12(self) -> np.ndarray:
        return self._s("s12")

    @property
    def s21(self) -> np.ndarray:
        return self._s("s21")

    @property
    def s22(self) -> np.ndarray:
        return self._s("s22")

    @property
    def s11_db(self) -> np.ndarray:
        return _db(self.s11)

    @property
    def s21_db(self) -> np.ndarray:
        return _db(self.s21)

    @property
    def s11_phase_deg(self) -> np.ndarray:
        return np.degrees(np.angle(self.s11))

    @property
    def s21_phase_deg(self) -> np.ndarray:
        return np.degrees(np.angle(self.s21))

    @property
    def vswr(self) -> np.ndarray:
        return np.array([s.vswr for s in self.s_parameters], dtype=float)


@dataclass(frozen=True)
class ComponentSweepResults:
    """
    Results of sweeping one component's value at a fixed frequency.

    `reflection_coefficients` are the Smith chart positions of
    `impedances` referenced to `z0`.
    """
    component_type: ComponentType
    frequency: float
    values: np.ndarray
    impedances: np.ndarray
    admittances: np.ndarray
    s_parameters: Tuple[ScatteringParameters, ...]
    reflection_coefficients: np.ndarray
    z0: complex

    def __len__(self) -> int:
        return len(self.values)

    def normalized_impedances(self, z0: complex = None) -> np.ndarray:
        z0 = self.z0 if z0 is None else z0
        return self.impedances / z0

    def smith_coordinates(self) -> np.ndarray:
        return self.reflection_coefficients


@dataclass(frozen=True)
class ArcRange:
    """
    The Smith chart arc traced by a single component as its value moves over
    nominal*(1 - tol) .. nominal*(1 + tol), terminated by the reference impedance.
    """
    component_type: ComponentType
    value_min: float
    value_max: float
    z_start: complex
    z_stop: complex
    gamma_start: complex
    gamma_stop: complex
