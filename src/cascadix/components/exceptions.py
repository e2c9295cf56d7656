# src/cascadix/components/exceptions.py
"""
Defines the diagnosable exception for the component library.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class ComponentError(DiagnosableError):
    """
    Raised when a component factory receives physically meaningless input, such
    as a negative inductance, a zero shunt resistance, a non-positive frequency
    for a reactance that divides by omega, or an unknown component type.
    """
    component: str
    details: str
    frequency: Optional[float] = None

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for a component construction error."""
        return format_diagnostic_report(
            error_type="Component Construction Error",
            details=self.details,
            suggestion="Check the component's value and operating frequency (e.g. positive inductance "
                       "and capacitance, non-negative resistance, frequency > 0 for reactive elements).",
            context={
                'component': self.component,
                'frequency': f"{self.frequency:.4e} Hz" if self.frequency is not None else "N/A"
            }
        )
