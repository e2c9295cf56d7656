# src/cascadix/sweep/exceptions.py
"""
Defines the diagnosable exception raised when a sweep is rejected before execution.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class InvalidSweepSpecificationError(DiagnosableError):
    """
    Raised for fewer than two points, non-positive bounds on a logarithmic
    sweep, component bounds that violate the component type's sign constraint,
    or a sweep configuration that cannot be parsed.
    """
    details: str
    specification: Optional[str] = None

    def get_diagnostic_report(self) -> str:
        details = self.details
        if self.specification:
            details = f"{details}\nSweep: {self.specification}"
        return format_diagnostic_report(
            error_type="Invalid Sweep Specification",
            details=details,
            suggestion="Use at least 2 points, strictly positive bounds for logarithmic sweeps, and component "
                       "bounds that are physical for the swept component (R >= 0; L, C > 0; length >= 0).",
            context={'operation': 'sweep validation'}
        )
