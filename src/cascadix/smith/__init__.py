# src/cascadix/smith/__init__.py
from .conversions import (
    admittance_to_gamma, gamma_to_impedance, gamma_to_vswr, impedance_to_gamma, normalize_impedance,
)
from .config import SmithChartConfig
from .stream import Mesh2D, PointStream, TraceCollection, TraceMetadata, TraceType
from .generator import SmithChartGenerator, generate_impedance_cloud, generate_network_sweep
