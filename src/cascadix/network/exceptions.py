# src/cascadix/network/exceptions.py
"""
Defines the diagnosable exceptions of the two-port matrix core.

Every conversion or impedance/gain query whose denominator collapses raises
`DegenerateNetworkError`; the characteristic-impedance query on a matrix with
a != d raises `NotSymmetricError`. Both are raised at the point of computation
and are never caught inside the core.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class DegenerateNetworkError(DiagnosableError):
    """
    Raised when a required denominator has magnitude below DEGENERATE_THRESHOLD.

    This is the single, universal failure mode of the two-port core: input/output
    impedance, S/Z/Y conversions and gain queries all report through it instead
    of returning infinities or NaNs.
    """
    operation: str
    details: str
    denominator: Optional[complex] = None

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for a degenerate network conversion."""
        denom_str = f"{abs(self.denominator):.3e}" if self.denominator is not None else "N/A"
        return format_diagnostic_report(
            error_type="Degenerate Network",
            details=f"{self.details}\n|denominator| = {denom_str}",
            suggestion="The network has no finite value for this quantity (e.g. an ideal short or open "
                       "in the wrong place). Check component values, the load/source impedance and the "
                       "reference impedance.",
            context={'operation': self.operation}
        )


@dataclass()
class NotSymmetricError(DiagnosableError):
    """Raised when a symmetric-only quantity is requested from a non-symmetric matrix."""
    details: str
    a: complex = 0j
    d: complex = 0j

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for a non-symmetric network."""
        return format_diagnostic_report(
            error_type="Network Not Symmetric",
            details=f"{self.details}\nA = {self.a}, D = {self.d}",
            suggestion="Characteristic impedance is only defined when A == D. Query the "
                       "symmetric section on its own, or use input_impedance() with an explicit load.",
            context={'operation': 'characteristic_impedance'}
        )
