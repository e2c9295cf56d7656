# src/cascadix/analysis/tolerance.py
import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Union

import numpy as np

from ..components import ComponentType, resolve_component_type
from .exceptions import ToleranceSpecificationError

logger = logging.getLogger(__name__)

#: Sampled values never fall below this fraction of the nominal value.
MIN_VALUE_FRACTION = 0.01
#: Reference temperature for temperature coefficients, degrees C.
REFERENCE_TEMPERATURE_C = 25.0


class DistributionType(str, Enum):
    UNIFORM = "uniform"
    GAUSSIAN = "gaussian"
    TRIANGULAR = "triangular"

    @classmethod
    def resolve(cls, value: Union["DistributionType", str]) -> "DistributionType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ToleranceSpecificationError(
                details=f"Unknown distribution '{value}'. Expected one of: {', '.join(d.value for d in cls)}."
            ) from None


@dataclass(frozen=True)
class ComponentTolerance:
    """
    A component whose value varies around `nominal_value` by the fraction
    `tolerance` (0.05 = +/-5%).

    For a gaussian distribution the tolerance is the 3-sigma bound. The
    temperature coefficient is in ppm/degC relative to 25 degC. `options` are
    passed to the component factory (e.g. line impedance).
    """
    component_type: ComponentType
    nominal_value: float
    tolerance: float
    distribution: DistributionType = DistributionType.GAUSSIAN
    temperature_coefficient: float = 0.0
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "component_type", resolve_component_type(self.component_type))
        object.__setattr__(self, "distribution", DistributionType.resolve(self.distribution))
        name = self.component_type.value
        if not (math.isfinite(self.nominal_value) and self.nominal_value > 0):
            raise ToleranceSpecificationError(
                details=f"Nominal value must be > 0, got {self.nominal_value}.", component=name
            )
        if not (math.isfinite(self.tolerance) and self.tolerance >= 0):
            raise ToleranceSpecificationError(
                details=f"Tolerance must be a fraction >= 0, got {self.tolerance}.", component=name
            )

    @property
    def min_value(self) -> float:
        return self.nominal_value * (1.0 - self.tolerance)

    @property
    def max_value(self) -> float:
        return self.nominal_value * (1.0 + self.tolerance)

    def sample(self, rng: np.random.Generator, size: int) -> np.ndarray:
        """
        Draws `size` values. A zero tolerance returns the nominal value exactly
        without advancing `rng`.
        """
        if self.tolerance == 0:
            return np.full(size, self.nominal_value, dtype=float)

        if self.distribution is DistributionType.GAUSSIAN:
            sigma = self.nominal_value * self.tolerance / 3.0
            draws = rng.normal(self.nominal_value, sigma, size)
        elif self.distribution is DistributionType.UNIFORM:
            draws = rng.uniform(self.min_value, self.max_value, size)
        else:
            draws = rng.triangular(self.min_value, self.nominal_value, self.max_value, size)
        return np.maximum(draws, self.nominal_value * MIN_VALUE_FRACTION)

    def at_temperature(self, temperature_c: float) -> "ComponentTolerance":
        """Copy with the nominal value scaled by 1 + tc * (T - 25) / 1e6."""
        factor = 1.0 + self.temperature_coefficient * (temperature_c - REFERENCE_TEMPERATURE_C) / 1e6
        return replace(self, nominal_value=self.nominal_value * factor)
