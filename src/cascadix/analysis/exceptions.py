# src/cascadix/analysis/exceptions.py
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class ToleranceSpecificationError(DiagnosableError):
    """
    Raised for a tolerance that cannot be sampled: negative tolerance,
    non-positive nominal value, unknown distribution, or a non-positive sample count.
    """
    details: str
    component: Optional[str] = None

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Tolerance Specification Error",
            details=self.details,
            suggestion="Tolerances are fractions >= 0 (0.05 = 5%), nominal values must be > 0, distributions "
                       "are 'uniform', 'gaussian' or 'triangular', and sample counts must be >= 1.",
            context={'operation': 'monte carlo', 'component': self.component}
        )
