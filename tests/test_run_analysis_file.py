# tests/test_run_analysis_file.py
import numpy as np
import pytest

from cascadix import AnalysisRunError, run_analysis_file
from cascadix.parser import ParsingError, SchemaValidationError
from cascadix.smith import TraceType

SERIES_R_ANALYSIS = """
name: series_pad
network:
  - type: series_R
    value: 25 ohm
    tolerance: 0.1
sweep:
  type: linear
  start: 1 GHz
  stop: 2 GHz
  num_points: 5
monte_carlo:
  frequency: 1.5 GHz
  num_samples: 64
  seed: 1
  vswr_threshold: 2.0
"""


def test_full_analysis_run(write_analysis_file):
    report = run_analysis_file(write_analysis_file(SERIES_R_ANALYSIS))
    assert report.definition.name == "series_pad"

    assert len(report.sweep) == 5
    np.testing.assert_allclose(report.sweep.s11, 0.2, atol=1e-12)
    np.testing.assert_allclose(report.sweep.input_impedances, 75.0)

    # A frequency-independent network gives the same point at every frequency.
    coordinates = report.smith_trace.coordinates()
    np.testing.assert_allclose(coordinates, [[0.2, 0.0]] * len(coordinates), atol=1e-6)

    assert report.monte_carlo is not None
    assert report.monte_carlo.num_samples == 64
    assert report.monte_carlo.yield_rate == 1.0

    traces = report.traces()
    assert len(traces) == 2
    assert [t.metadata.trace_type for t in traces] == [TraceType.FREQUENCY_SWEEP, TraceType.MONTE_CARLO]


def test_monte_carlo_without_tolerances_is_skipped(write_analysis_file, caplog):
    content = SERIES_R_ANALYSIS.replace("    tolerance: 0.1\n", "")
    report = run_analysis_file(write_analysis_file(content))
    assert report.monte_carlo is None
    assert len(report.traces()) == 1
    assert "no network element carries a tolerance" in caplog.text


def test_parse_errors_are_wrapped(write_analysis_file):
    content = SERIES_R_ANALYSIS.replace("value: 25 ohm", "value: 25 nH")
    with pytest.raises(AnalysisRunError) as exc_info:
        run_analysis_file(write_analysis_file(content))
    assert isinstance(exc_info.value.__cause__, ParsingError)
    assert "Analysis File Error" in str(exc_info.value)


def test_schema_errors_are_wrapped(write_analysis_file):
    with pytest.raises(AnalysisRunError) as exc_info:
        run_analysis_file(write_analysis_file("network: []\n"))
    assert isinstance(exc_info.value.__cause__, SchemaValidationError)
    assert "YAML Schema Validation Error" in str(exc_info.value)


def test_missing_file(tmp_path):
    with pytest.raises(AnalysisRunError, match="not found"):
        run_analysis_file(tmp_path / "nope.yaml")
