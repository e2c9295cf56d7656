# src/cascadix/smith/stream.py
"""
Containers for the visualization wire format: flat single-precision
``[x0, y0, x1, y1, ...]`` reflection-coefficient coordinates, each clamped to
[-1, 1], with a parallel per-point value and timestamp.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional

import numpy as np


def clamp_coordinate(value: float) -> float:
    return max(-1.0, min(1.0, value))


class TraceType(Enum):
    FREQUENCY_SWEEP = auto()
    COMPONENT_SWEEP = auto()
    MONTE_CARLO = auto()
    S_PARAMETER_DATA = auto()
    MEASURED_DATA = auto()


@dataclass(frozen=True)
class TraceMetadata:
    """Rendering hints carried alongside a trace."""
    trace_type: TraceType = TraceType.FREQUENCY_SWEEP
    color_rgba: int = 0xFF0080FF
    line_width: float = 2.0
    opacity: float = 1.0
    show_markers: bool = False
    label: str = "Trace"


class PointStream:
    """
    Append-only sequence of Smith chart points. Coordinates are clamped when added.
    """

    def __init__(self, metadata: Optional[TraceMetadata] = None):
        self.metadata = metadata if metadata is not None else TraceMetadata()
        self._points: List[float] = []
        self._values: List[float] = []
        self._timestamps: List[float] = []

    def add_point(self, gamma: complex, value: float, timestamp: float = 0.0) -> None:
        gamma = complex(gamma)
        self._points.append(clamp_coordinate(gamma.real))
        self._points.append(clamp_coordinate(gamma.imag))
        self._values.append(value)
        self._timestamps.append(timestamp)

    def __len__(self) -> int:
        return len(self._values)

    @property
    def points(self) -> np.ndarray:
        """Flat float32 ``[x0, y0, x1, y1, ...]``."""
        return np.asarray(self._points, dtype=np.float32)

    @property
    def values(self) -> np.ndarray:
        return np.asarray(self._values, dtype=np.float32)

    @property
    def timestamps(self) -> np.ndarray:
        return np.asarray(self._timestamps, dtype=np.float32)

    def coordinates(self) -> np.ndarray:
        """Points reshaped to (N, 2)."""
        return self.points.reshape(-1, 2)


@dataclass
class TraceCollection:
    """Several traces rendered together, e.g. a nominal sweep plus a Monte Carlo cloud."""
    title: str = ""
    time_offset: float = 0.0
    traces: List[PointStream] = field(default_factory=list)

    def add_trace(self, trace: PointStream) -> None:
        self.traces.append(trace)

    def total_points(self) -> int:
        return sum(len(trace) for trace in self.traces)

    def __len__(self) -> int:
        return len(self.traces)

    def __iter__(self) -> Iterator[PointStream]:
        return iter(self.traces)


@dataclass(frozen=True)
class Mesh2D:
    """
    A rows x cols grid of Smith chart vertices (rows = frequencies, cols =
    component values) with two triangles per grid cell.
    """
    vertices: np.ndarray   # float32, flat [x, y] per vertex
    values: np.ndarray     # float32, component value per vertex
    indices: np.ndarray    # uint32, 6 per cell
    rows: int
    cols: int
    metadata: TraceMetadata = field(default_factory=TraceMetadata)
