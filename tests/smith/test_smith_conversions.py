# tests/smith/test_smith_conversions.py
import logging
import math

import pytest

from cascadix.network import DegenerateNetworkError
from cascadix.smith import (
    SmithChartConfig, admittance_to_gamma, gamma_to_impedance, gamma_to_vswr, impedance_to_gamma,
    normalize_impedance,
)

IMPEDANCES = [50.0, 25.0, 100.0 + 50.0j, 10.0 - 80.0j, 1e-3, 1e4 + 1e4j]


class TestReflectionCoefficient:
    def test_reference_points(self):
        assert impedance_to_gamma(50.0) == 0
        assert impedance_to_gamma(0.0) == -1
        assert impedance_to_gamma(150.0) == pytest.approx(0.5)
        assert impedance_to_gamma(75.0, z0=75.0) == 0

    @pytest.mark.parametrize("z", IMPEDANCES)
    def test_gamma_and_impedance_are_inverse(self, z):
        assert gamma_to_impedance(impedance_to_gamma(z)) == pytest.approx(z, rel=1e-9)

    @pytest.mark.parametrize("z", IMPEDANCES)
    def test_admittance_form_agrees(self, z):
        assert admittance_to_gamma(1.0 / z) == pytest.approx(impedance_to_gamma(z), abs=1e-12)

    @pytest.mark.parametrize("z", IMPEDANCES)
    def test_passive_impedances_stay_inside_unit_circle(self, z):
        assert abs(impedance_to_gamma(z)) <= 1.0

    def test_singular_points(self):
        with pytest.raises(DegenerateNetworkError):
            impedance_to_gamma(-50.0)
        with pytest.raises(DegenerateNetworkError, match="open circuit"):
            gamma_to_impedance(1.0)
        with pytest.raises(DegenerateNetworkError):
            admittance_to_gamma(-0.02)

    def test_normalize(self):
        assert normalize_impedance(100.0 + 50.0j) == pytest.approx(2.0 + 1.0j)

    def test_vswr(self):
        assert gamma_to_vswr(0.0) == 1.0
        assert gamma_to_vswr(0.5j) == pytest.approx(3.0)
        assert gamma_to_vswr(-1.0) == math.inf


class TestSmithChartConfig:
    def test_defaults(self):
        config = SmithChartConfig()
        assert config.min_spacing == 0.003
        assert config.max_spacing == 0.015
        assert config.edge_boost_factor == 4.0
        assert config.edge_threshold == 0.7
        assert config.adaptive_sampling is True

    @pytest.mark.parametrize("kwargs", [
        {"min_spacing": 0.0},
        {"min_spacing": 0.02, "max_spacing": 0.01},
        {"edge_threshold": 1.0},
        {"edge_boost_factor": -1.0},
    ])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            SmithChartConfig(**kwargs)

    def test_from_dict_ignores_unknown_keys(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = SmithChartConfig.from_dict({"max_spacing": 0.02, "colour": "red"})
        assert config.max_spacing == 0.02
        assert "colour" in caplog.text
