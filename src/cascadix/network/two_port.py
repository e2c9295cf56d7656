# src/cascadix/network/two_port.py
"""
The two-port transmission (ABCD) matrix value type and its algebra.

A `TwoPortMatrix` holds four complex entries (a, b, c, d) relating port-1
voltage/current to port-2 voltage/current:

    [V1]   [a  b] [ V2]
    [I1] = [c  d] [-I2]

Cascading is matrix multiplication and is the only composition rule. All
impedance, gain and parameter conversions live here and share a single
failure mode: a denominator whose magnitude is below DEGENERATE_THRESHOLD
raises `DegenerateNetworkError`.
"""
import cmath
import logging
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from ..constants import DEGENERATE_THRESHOLD, DEFAULT_PREDICATE_TOLERANCE
from .exceptions import DegenerateNetworkError, NotSymmetricError
from .parameters import AdmittanceParameters, ImpedanceParameters, ScatteringParameters

logger = logging.getLogger(__name__)


def _checked_denominator(value: complex, operation: str, details: str) -> complex:
    """Returns `value` unchanged, or raises DegenerateNetworkError if it is (near) zero."""
    if not abs(value) >= DEGENERATE_THRESHOLD:
        # `not >=` also catches NaN denominators.
        raise DegenerateNetworkError(operation=operation, details=details, denominator=complex(value))
    return value


@dataclass(frozen=True)
class TwoPortMatrix:
    """
    Immutable ABCD matrix of a linear two-port network.

    Defaults to the identity (a through-connection). Instances are never mutated;
    `cascade` returns a new matrix. For repeated in-place cascading use
    `TwoPortAccumulator`.
    """
    a: complex = 1 + 0j
    b: complex = 0j
    c: complex = 0j
    d: complex = 1 + 0j

    def __post_init__(self):
        # Normalize every entry to a Python complex so equality and hashing are uniform.
        for name in ("a", "b", "c", "d"):
            object.__setattr__(self, name, complex(getattr(self, name)))

    # --- Construction ---

    @classmethod
    def identity(cls) -> "TwoPortMatrix":
        return cls(1.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_array(cls, matrix) -> "TwoPortMatrix":
        """Builds a matrix from any 2x2 array-like in row-major order."""
        arr = np.asarray(matrix, dtype=np.complex128)
        if arr.shape != (2, 2):
            raise ValueError(f"ABCD matrix must have shape (2, 2), got {arr.shape}.")
        return cls(arr[0, 0], arr[0, 1], arr[1, 0], arr[1, 1])

    @classmethod
    def from_scattering(cls, s_params: ScatteringParameters, z0: complex = 50.0) -> "TwoPortMatrix":
        """
        Exact algebraic inverse of `to_scattering` for the same reference impedance.

        Raises:
            DegenerateNetworkError: if `z0` is zero, or if S21 is (near) zero, i.e.
                the network has no forward transmission and no finite ABCD representation.
        """
        z0 = complex(z0)
        if z0 == 0:
            raise DegenerateNetworkError(
                operation="from_scattering", details="Reference impedance must be non-zero.", denominator=z0
            )
        s11, s12, s21, s22 = s_params.s11, s_params.s12, s_params.s21, s_params.s22
        two_s21 = _checked_denominator(
            2.0 * s21, "from_scattering", "S21 is zero; the network has no ABCD representation."
        )
        a = ((1 + s11) * (1 - s22) + s12 * s21) / two_s21
        b = z0 * ((1 + s11) * (1 + s22) - s12 * s21) / two_s21
        c = ((1 - s11) * (1 - s22) - s12 * s21) / (z0 * two_s21)
        d = ((1 - s11) * (1 + s22) + s12 * s21) / two_s21
        return cls(a, b, c, d)

    # --- Representation ---

    def as_tuple(self) -> Tuple[complex, complex, complex, complex]:
        return (self.a, self.b, self.c, self.d)

    def as_array(self) -> np.ndarray:
        return np.array([[self.a, self.b], [self.c, self.d]], dtype=np.complex128)

    def is_close(self, other: "TwoPortMatrix", tolerance: float = DEFAULT_PREDICATE_TOLERANCE) -> bool:
        """Element-wise comparison within an absolute tolerance."""
        return all(abs(x - y) < tolerance for x, y in zip(self.as_tuple(), other.as_tuple()))

    # --- Algebra ---

    def cascade(self, other: "TwoPortMatrix") -> "TwoPortMatrix":
        """Returns the network `self` followed by `other` (self feeds other)."""
        return TwoPortMatrix(
            self.a * other.a + self.b * other.c,
            self.a * other.b + self.b * other.d,
            self.c * other.a + self.d * other.c,
            self.c * other.b + self.d * other.d,
        )

    def __matmul__(self, other: "TwoPortMatrix") -> "TwoPortMatrix":
        if not isinstance(other, TwoPortMatrix):
            return NotImplemented
        return self.cascade(other)

    __mul__ = __matmul__

    def determinant(self) -> complex:
        return self.a * self.d - self.b * self.c

    # --- Predicates ---

    def is_reciprocal(self, tolerance: float = DEFAULT_PREDICATE_TOLERANCE) -> bool:
        """det == 1 within `tolerance`."""
        return abs(self.determinant() - 1.0) < tolerance

    def is_symmetric(self, tolerance: float = DEFAULT_PREDICATE_TOLERANCE) -> bool:
        """a == d within `tolerance`."""
        return abs(self.a - self.d) < tolerance

    def is_lossless(self, tolerance: float = DEFAULT_PREDICATE_TOLERANCE) -> bool:
        """a, d purely real; b, c purely imaginary; |det| == 1."""
        return (
            abs(self.a.imag) < tolerance
            and abs(self.d.imag) < tolerance
            and abs(self.b.real) < tolerance
            and abs(self.c.real) < tolerance
            and abs(abs(self.determinant()) - 1.0) < tolerance
        )

    # --- Impedance queries ---

    def input_impedance(self, z_load: complex) -> complex:
        """Impedance seen at port 1 with `z_load` on port 2: (a*Zl + b) / (c*Zl + d)."""
        denominator = _checked_denominator(
            self.c * z_load + self.d, "input_impedance",
            f"c*Z_load + d vanishes for Z_load = {complex(z_load)}."
        )
        return (self.a * z_load + self.b) / denominator

    def output_impedance(self, z_source: complex) -> complex:
        """Impedance seen at port 2 with `z_source` on port 1: (d*Zs + b) / (c*Zs + a)."""
        denominator = _checked_denominator(
            self.c * z_source + self.a, "output_impedance",
            f"c*Z_source + a vanishes for Z_source = {complex(z_source)}."
        )
        return (self.d * z_source + self.b) / denominator

    def characteristic_impedance(self, tolerance: float = DEFAULT_PREDICATE_TOLERANCE) -> complex:
        """
        sqrt(b/c) for a symmetric network.

        Raises:
            NotSymmetricError: if a != d within `tolerance`.
            DegenerateNetworkError: if c is (near) zero.
        """
        if not self.is_symmetric(tolerance):
            raise NotSymmetricError(
                details="Characteristic impedance is only defined for symmetric networks.",
                a=self.a, d=self.d,
            )
        c = _checked_denominator(self.c, "characteristic_impedance", "The C parameter is zero.")
        return cmath.sqrt(self.b / c)

    # --- Parameter conversions ---

    def to_scattering(self, z0: complex = 50.0) -> ScatteringParameters:
        """Converts to S-parameters referenced to `z0` (which may be complex)."""
        z0 = complex(z0)
        if z0 == 0:
            raise DegenerateNetworkError(
                operation="to_scattering", details="Reference impedance must be non-zero.", denominator=z0
            )
        a, b, c, d = self.as_tuple()
        denominator = _checked_denominator(
            a + b / z0 + c * z0 + d, "to_scattering", f"a + b/z0 + c*z0 + d vanishes for z0 = {z0}."
        )
        return ScatteringParameters(
            s11=(a + b / z0 - c * z0 - d) / denominator,
            s12=2.0 * self.determinant() / denominator,
            s21=2.0 / denominator,
            s22=(-a + b / z0 - c * z0 + d) / denominator,
        )

    def to_impedance_parameters(self) -> ImpedanceParameters:
        c = _checked_denominator(self.c, "to_impedance_parameters", "The C parameter is zero.")
        return ImpedanceParameters(
            z11=self.a / c,
            z12=self.determinant() / c,
            z21=1.0 / c,
            z22=self.d / c,
        )

    def to_admittance_parameters(self) -> AdmittanceParameters:
        b = _checked_denominator(self.b, "to_admittance_parameters", "The B parameter is zero.")
        return AdmittanceParameters(
            y11=self.d / b,
            y12=-self.determinant() / b,
            y21=-1.0 / b,
            y22=self.a / b,
        )

    # --- Transfer functions ---

    def voltage_gain(self, z_load: complex) -> complex:
        """V2/V1 with `z_load` on port 2: 1 / (a + b/Zl)."""
        if z_load == 0:
            raise DegenerateNetworkError(
                operation="voltage_gain", details="Load impedance must be non-zero.", denominator=0j
            )
        denominator = _checked_denominator(
            self.a + self.b / z_load, "voltage_gain", f"a + b/Z_load vanishes for Z_load = {complex(z_load)}."
        )
        return 1.0 / denominator

    def current_gain(self, z_load: complex) -> complex:
        """I2/I1 with `z_load` on port 2: 1 / (c*Zl + d)."""
        denominator = _checked_denominator(
            self.c * z_load + self.d, "current_gain", f"c*Z_load + d vanishes for Z_load = {complex(z_load)}."
        )
        return 1.0 / denominator

    def power_gain(self, z_source: complex, z_load: complex) -> float:
        """
        Transducer power gain for a source with internal impedance `z_source`.

        G = 4 * Rs * |V_load / V_source|^2 / Rl, using the source/input voltage
        divider times the network voltage gain. Only the real parts of source
        and load are taken to carry power, so a matched through connection gives 1.
        """
        z_in = self.input_impedance(z_load)
        divider_denominator = _checked_denominator(
            z_source + z_in, "power_gain", "Z_source + Z_in vanishes."
        )
        total_gain = (z_in / divider_denominator) * self.voltage_gain(z_load)
        load_resistance = complex(z_load).real
        if load_resistance == 0:
            raise DegenerateNetworkError(
                operation="power_gain", details="Load impedance has no resistive part.", denominator=0j
            )
        return 4.0 * abs(total_gain) ** 2 * complex(z_source).real / load_resistance

    def __str__(self) -> str:
        return (
            f"ABCD[[{self.a:.6g}, {self.b:.6g}], [{self.c:.6g}, {self.d:.6g}]] "
            f"det={self.determinant():.6g}"
        )


class TwoPortAccumulator:
    """
    Mutable running product of ABCD matrices.

    `cascade_inplace` mutates this accumulator only; the operand is left untouched.
    Call `freeze()` to obtain the immutable `TwoPortMatrix`.
    """
    def __init__(self, start: TwoPortMatrix = None):
        start = start if start is not None else TwoPortMatrix.identity()
        self._abcd = list(start.as_tuple())

    def cascade_inplace(self, other: TwoPortMatrix) -> "TwoPortAccumulator":
        a, b, c, d = self._abcd
        self._abcd = [
            a * other.a + b * other.c,
            a * other.b + b * other.d,
            c * other.a + d * other.c,
            c * other.b + d * other.d,
        ]
        return self

    __imatmul__ = cascade_inplace
    __imul__ = cascade_inplace

    def freeze(self) -> TwoPortMatrix:
        return TwoPortMatrix(*self._abcd)


def cascade(first: TwoPortMatrix, second: TwoPortMatrix) -> TwoPortMatrix:
    """Cascades `first` then `second`. Associative, not commutative."""
    return first.cascade(second)


def cascade_all(networks: Iterable[TwoPortMatrix]) -> TwoPortMatrix:
    """Cascades networks in order; an empty iterable gives the identity."""
    accumulator = TwoPortAccumulator()
    for network in networks:
        accumulator.cascade_inplace(network)
    return accumulator.freeze()
