# src/cascadix/smith/config.py
import logging
from dataclasses import dataclass, fields
from typing import Any, Dict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmithChartConfig:
    """
    Point density settings for Smith chart generation, in reflection-coefficient units.

    Spacing falls linearly from `max_spacing` at the centre to `min_spacing` at
    |Gamma| = `edge_threshold`, then by a further 1/(1 + edge_boost_factor*t)
    across the edge band.
    """
    min_spacing: float = 0.003
    max_spacing: float = 0.015
    edge_boost_factor: float = 4.0
    edge_threshold: float = 0.7
    adaptive_sampling: bool = True

    def __post_init__(self):
        if not self.min_spacing > 0:
            raise ValueError(f"min_spacing must be > 0, got {self.min_spacing}.")
        if self.max_spacing < self.min_spacing:
            raise ValueError(
                f"max_spacing ({self.max_spacing}) must not be below min_spacing ({self.min_spacing})."
            )
        if not 0 < self.edge_threshold < 1:
            raise ValueError(f"edge_threshold must lie in (0, 1), got {self.edge_threshold}.")
        if self.edge_boost_factor < 0:
            raise ValueError(f"edge_boost_factor must be >= 0, got {self.edge_boost_factor}.")

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SmithChartConfig":
        """Builds a config from a mapping; unknown keys are ignored with a warning."""
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            logger.warning(f"Ignoring unknown Smith chart settings: {sorted(unknown)}")
        return cls(**{k: v for k, v in raw.items() if k in known})
