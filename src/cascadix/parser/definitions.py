# src/cascadix/parser/definitions.py
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from ..analysis import ComponentTolerance
from ..components import NetworkChain
from ..smith import SmithChartConfig
from ..sweep import SweepSpecification


@dataclass(frozen=True)
class MonteCarloSettings:
    frequency: float
    num_samples: int = 1000
    seed: Optional[int] = None
    vswr_threshold: float = 2.0


@dataclass(frozen=True)
class AnalysisDefinition:
    """
    A fully parsed and unit-converted analysis file.

    `tolerances` is parallel to `network`: the entry for an element is its
    `ComponentTolerance`, or None if the element is held at its nominal value.
    """
    name: str
    source_path: Path
    reference_impedance: complex
    load_impedance: complex
    source_impedance: complex
    network: NetworkChain
    tolerances: Tuple[Optional[ComponentTolerance], ...]
    sweep: SweepSpecification
    smith_chart: SmithChartConfig
    monte_carlo: Optional[MonteCarloSettings] = None

    @property
    def toleranced_indices(self) -> Tuple[int, ...]:
        return tuple(i for i, t in enumerate(self.tolerances) if t is not None)
