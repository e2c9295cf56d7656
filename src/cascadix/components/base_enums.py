# src/cascadix/components/base_enums.py
from enum import Enum, auto


class ComponentType(str, Enum):
    """
    The single-valued element kinds that can be swept, toleranced or listed in
    an analysis file. The string value is the textual name used in
    configuration (e.g. ``"series_L"``).
    """
    SERIES_R = "series_R"
    SERIES_L = "series_L"
    SERIES_C = "series_C"
    SHUNT_R = "shunt_R"
    SHUNT_L = "shunt_L"
    SHUNT_C = "shunt_C"
    TRANSMISSION_LINE = "tline"


class Mount(Enum):
    """How a one-port element (impedance, stub, sub-network) is placed in the ladder."""
    SERIES = auto()  # In the signal path between port 1 and port 2.
    SHUNT = auto()   # From the signal path to ground.
