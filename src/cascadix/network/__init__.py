# src/cascadix/network/__init__.py
from .exceptions import DegenerateNetworkError, NotSymmetricError
from .parameters import ScatteringParameters, ImpedanceParameters, AdmittanceParameters
from .two_port import TwoPortMatrix, TwoPortAccumulator, cascade, cascade_all

__all__ = [
    # Exceptions
    "DegenerateNetworkError",
    "NotSymmetricError",
    # Value types
    "TwoPortMatrix",
    "TwoPortAccumulator",
    "ScatteringParameters",
    "ImpedanceParameters",
    "AdmittanceParameters",
    # Composition
    "cascade",
    "cascade_all",
]
