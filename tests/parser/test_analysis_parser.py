# tests/parser/test_analysis_parser.py
from pathlib import Path

import pytest

from cascadix.analysis import DistributionType
from cascadix.components import ComponentType
from cascadix.parser import AnalysisFileParser, ParsingError, SchemaValidationError
from cascadix.sweep import SweepDistribution

VALID_ANALYSIS = """
name: lna_match
reference_impedance: 50 ohm
load_impedance: {real: 25, imag: "10 ohm"}
network:
  - type: series_L
    value: 10 nH
    tolerance: 0.05
    distribution: uniform
  - type: shunt_C
    value: 2 pF
  - type: tline
    value: 0.05
    z0: 75
    velocity_factor: 0.7
sweep:
  type: log
  start: 100 MHz
  stop: 10 GHz
  num_points: 51
smith_chart:
  max_spacing: 0.02
monte_carlo:
  frequency: 2.4 GHz
  num_samples: 200
  seed: 3
"""

MINIMAL_SWEEP = """
sweep:
  type: linear
  start: 1 GHz
  stop: 2 GHz
  num_points: 11
"""


@pytest.fixture
def parser():
    return AnalysisFileParser()


class TestValidAnalysisFiles:
    """Verifies that a well-formed file is converted into SI units."""

    def test_full_file(self, parser, write_analysis_file):
        definition = parser.parse(write_analysis_file(VALID_ANALYSIS))
        assert definition.name == "lna_match"
        assert definition.reference_impedance == 50.0
        assert definition.load_impedance == pytest.approx(25.0 + 10.0j)
        assert definition.source_impedance == 50.0

        network = definition.network
        assert len(network) == 3
        assert network[0].component_type is ComponentType.SERIES_L
        assert network[0].value == pytest.approx(10e-9)
        assert network[1].value == pytest.approx(2e-12)
        assert network[2].options == {"z0": 75.0, "velocity_factor": 0.7}

    def test_tolerances(self, parser, write_analysis_file):
        definition = parser.parse(write_analysis_file(VALID_ANALYSIS))
        assert definition.toleranced_indices == (0,)
        tolerance = definition.tolerances[0]
        assert tolerance.tolerance == 0.05
        assert tolerance.distribution is DistributionType.UNIFORM
        assert tolerance.nominal_value == pytest.approx(10e-9)
        assert definition.tolerances[1] is None

    def test_sweep_smith_and_monte_carlo_sections(self, parser, write_analysis_file):
        definition = parser.parse(write_analysis_file(VALID_ANALYSIS))
        assert definition.sweep.distribution is SweepDistribution.LOGARITHMIC
        assert definition.sweep.start == pytest.approx(1e8)
        assert definition.sweep.stop == pytest.approx(1e10)
        assert definition.smith_chart.max_spacing == 0.02
        assert definition.smith_chart.min_spacing == 0.003
        assert definition.monte_carlo.frequency == pytest.approx(2.4e9)
        assert definition.monte_carlo.num_samples == 200
        assert definition.monte_carlo.seed == 3

    def test_defaults(self, parser, write_analysis_file):
        path = write_analysis_file(MINIMAL_SWEEP + "network:\n  - {type: series_R, value: 10}\n", "simple.yaml")
        definition = parser.parse(path)
        assert definition.name == "simple"
        assert definition.reference_impedance == 50.0
        assert definition.load_impedance == 50.0
        assert definition.monte_carlo is None
        assert definition.tolerances == (None,)

    def test_parse_data(self, parser):
        definition = parser.parse_data({
            "network": [{"type": "shunt_R", "value": "1 kohm"}],
            "sweep": {"type": "linear", "start": 1e9, "stop": 2e9, "num_points": 2},
        })
        assert definition.network[0].value == pytest.approx(1000.0)
        assert definition.source_path == Path("<memory>")


class TestSchemaErrors:
    @pytest.mark.parametrize("document, field", [
        ({"network": [{"type": "series_R", "value": 1}]}, "sweep"),
        ({"network": [{"type": "series_X", "value": 1}]}, "network"),
        ({"network": []}, "network"),
        ({"network": [{"type": "series_R", "value": 1}], "extra": 1}, "extra"),
        ({"name": "bad name", "network": [{"type": "series_R", "value": 1}]}, "name"),
    ])
    def test_structural_errors(self, parser, document, field):
        if field != "sweep":
            document["sweep"] = {"type": "linear", "start": 1e9, "stop": 2e9, "num_points": 2}
        with pytest.raises(SchemaValidationError) as exc_info:
            parser.parse_data(document)
        assert field in exc_info.value.errors

    def test_sweep_bounds_need_frequency_units(self, parser):
        with pytest.raises(SchemaValidationError) as exc_info:
            parser.parse_data({
                "network": [{"type": "series_R", "value": 1}],
                "sweep": {"type": "linear", "start": "1 ohm", "stop": "2 GHz", "num_points": 2},
            })
        assert "sweep" in exc_info.value.errors

    def test_too_few_points(self, parser):
        with pytest.raises(SchemaValidationError):
            parser.parse_data({
                "network": [{"type": "series_R", "value": 1}],
                "sweep": {"type": "linear", "start": 1e9, "stop": 2e9, "num_points": 1},
            })

    def test_report(self, parser, write_analysis_file):
        with pytest.raises(SchemaValidationError) as exc_info:
            parser.parse(write_analysis_file("network: []\n"))
        report = exc_info.value.get_diagnostic_report()
        assert "YAML Schema Validation Error" in report
        assert "analysis.yaml" in report


class TestSemanticErrors:
    def _parse_element(self, parser, element):
        return parser.parse_data({
            "network": [element],
            "sweep": {"type": "linear", "start": 1e9, "stop": 2e9, "num_points": 2},
        })

    def test_wrong_unit_for_component(self, parser):
        with pytest.raises(ParsingError, match="Invalid value"):
            self._parse_element(parser, {"type": "series_L", "value": "10 ohm"})

    def test_non_physical_value(self, parser):
        with pytest.raises(ParsingError, match="strictly positive"):
            self._parse_element(parser, {"type": "series_L", "value": "-10 nH"})

    def test_line_options_on_lumped_element(self, parser):
        with pytest.raises(ParsingError, match="only apply to 'tline'"):
            self._parse_element(parser, {"type": "series_L", "value": "10 nH", "z0": 75})

    def test_tolerance_on_zero_value(self, parser):
        with pytest.raises(ParsingError, match="Nominal value"):
            self._parse_element(parser, {"type": "series_R", "value": 0, "tolerance": 0.1})


class TestFileErrors:
    def test_missing_file(self, parser, tmp_path):
        with pytest.raises(ParsingError, match="not found"):
            parser.parse(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, parser, write_analysis_file):
        with pytest.raises(ParsingError, match="Invalid YAML syntax"):
            parser.parse(write_analysis_file("network: [unclosed\n"))

    def test_empty_file(self, parser, write_analysis_file):
        with pytest.raises(ParsingError, match="empty"):
            parser.parse(write_analysis_file(""))

    def test_root_must_be_mapping(self, parser, write_analysis_file):
        with pytest.raises(ParsingError, match="dictionary"):
            parser.parse(write_analysis_file("- 1\n- 2\n"))
