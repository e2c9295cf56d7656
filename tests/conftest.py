# tests/conftest.py
import textwrap

import pytest

from cascadix.components import (
    series_capacitor, series_inductor, series_resistor, shunt_capacitor, shunt_resistor, transmission_line,
)


@pytest.fixture
def z0():
    return 50.0


@pytest.fixture
def sample_networks():
    """A handful of reciprocal, non-degenerate ABCD matrices of different kinds."""
    f = 1e9
    return [
        series_resistor(50.0),
        shunt_resistor(100.0),
        series_inductor(10e-9, f),
        shunt_capacitor(2e-12, f),
        series_capacitor(5e-12, f),
        transmission_line(0.03, 75.0, f),
        series_resistor(22.0) @ shunt_capacitor(1e-12, f),
    ]


@pytest.fixture
def write_analysis_file(tmp_path):
    """Writes a dedented YAML analysis document to tmp_path and returns its path."""
    def _write(content: str, name: str = "analysis.yaml"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return path
    return _write
