# src/cascadix/sweep/config.py
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union

import numpy as np
import pint

from ..units import to_si
from .exceptions import InvalidSweepSpecificationError

logger = logging.getLogger(__name__)


class SweepDistribution(str, Enum):
    LINEAR = "linear"
    LOGARITHMIC = "log"

    @classmethod
    def resolve(cls, value: Union["SweepDistribution", str]) -> "SweepDistribution":
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        if name in ("log", "logarithmic", "log10"):
            return cls.LOGARITHMIC
        if name in ("linear", "lin"):
            return cls.LINEAR
        raise InvalidSweepSpecificationError(
            details=f"Unknown sweep distribution '{value}'. Expected 'linear' or 'log'."
        )


@dataclass(frozen=True)
class SweepSpecification:
    """
    An ordered sequence of `num_points` values from `start` to `stop`.

    Linear:      v_i = start + i * (stop - start) / (N - 1)
    Logarithmic: v_i = 10 ** (log10(start) + i * (log10(stop) - log10(start)) / (N - 1))
    """
    start: float
    stop: float
    num_points: int
    distribution: SweepDistribution = SweepDistribution.LINEAR

    @classmethod
    def linear(cls, start: float, stop: float, num_points: int) -> "SweepSpecification":
        return cls(float(start), float(stop), num_points, SweepDistribution.LINEAR)

    @classmethod
    def logarithmic(cls, start: float, stop: float, num_points: int) -> "SweepSpecification":
        return cls(float(start), float(stop), num_points, SweepDistribution.LOGARITHMIC)

    def validate(self) -> None:
        """
        Raises:
            InvalidSweepSpecificationError: if the sweep cannot produce a well-formed sequence.
        """
        if isinstance(self.num_points, bool) or not isinstance(self.num_points, (int, np.integer)):
            raise InvalidSweepSpecificationError(
                details=f"Number of points must be an integer, got {self.num_points!r}.", specification=str(self)
            )
        if self.num_points < 2:
            raise InvalidSweepSpecificationError(
                details=f"A sweep needs at least 2 points, got {self.num_points}.", specification=str(self)
            )
        if not (math.isfinite(self.start) and math.isfinite(self.stop)):
            raise InvalidSweepSpecificationError(
                details="Sweep bounds must be finite.", specification=str(self)
            )
        if self.distribution is SweepDistribution.LOGARITHMIC and (self.start <= 0 or self.stop <= 0):
            raise InvalidSweepSpecificationError(
                details="Logarithmic sweep bounds must be strictly positive.", specification=str(self)
            )

    def values(self) -> np.ndarray:
        """Validates, then returns the sweep points as a 1D float array."""
        self.validate()
        index = np.arange(self.num_points, dtype=float)
        if self.distribution is SweepDistribution.LINEAR:
            step = (self.stop - self.start) / (self.num_points - 1)
            return self.start + index * step
        log_start = math.log10(self.start)
        log_step = (math.log10(self.stop) - log_start) / (self.num_points - 1)
        return np.power(10.0, log_start + index * log_step)

    def __len__(self) -> int:
        return int(self.num_points)

    def __str__(self) -> str:
        return f"{self.distribution.value} {self.start:.6g} -> {self.stop:.6g} ({self.num_points} points)"


def parse_sweep_config(raw_sweep_config: Dict[str, Any], unit: str = "hertz") -> SweepSpecification:
    """
    Parses a raw sweep configuration dictionary such as
    ``{"type": "log", "start": "100 MHz", "stop": "10 GHz", "num_points": 201}``
    into a validated `SweepSpecification`. Bounds are converted to `unit`.
    """
    if not raw_sweep_config:
        raise InvalidSweepSpecificationError(details="Sweep configuration is missing or empty.")
    try:
        distribution = SweepDistribution.resolve(raw_sweep_config.get('type', 'linear'))
        start = to_si(raw_sweep_config['start'], unit)
        stop = to_si(raw_sweep_config['stop'], unit)
        num_points = int(raw_sweep_config['num_points'])
    except (KeyError, ValueError, TypeError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise InvalidSweepSpecificationError(
            details=f"Failed to parse sweep configuration: {e}", specification=str(raw_sweep_config)
        ) from e

    spec = SweepSpecification(start, stop, num_points, distribution)
    spec.validate()
    logger.debug(f"Parsed sweep configuration: {spec}")
    return spec
