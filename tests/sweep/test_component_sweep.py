# tests/sweep/test_component_sweep.py
import cmath
import math

import numpy as np
import pytest

from cascadix.components import ComponentError, ComponentType, shunt_resistor
from cascadix.sweep import (
    ComponentSweep, InvalidSweepSpecificationError, SweepDistribution, calculate_arc_range,
    calculate_optimal_points, find_component_value_at_angle, make_adaptive_component_sweep,
    make_component_sweep, run_component_sweep, validate_component_sweep,
)
from cascadix.sweep.execution import MAX_OPTIMAL_POINTS

F = 1e9
OMEGA = 2 * math.pi * F


class TestComponentSweepConstruction:
    def test_make_from_name(self):
        sweep = make_component_sweep("series_L", 1e-9, 10e-9, 10, F)
        assert sweep.component_type is ComponentType.SERIES_L
        assert sweep.distribution is SweepDistribution.LINEAR
        np.testing.assert_allclose(sweep.values(), np.linspace(1e-9, 10e-9, 10))

    def test_make_log_sweep_with_options(self):
        sweep = make_component_sweep("tline", 0.01, 0.1, 5, F, distribution="log", z0=75.0)
        assert sweep.distribution is SweepDistribution.LOGARITHMIC
        assert sweep.options == {"z0": 75.0}
        assert sweep.create_network(0.05).characteristic_impedance() == pytest.approx(75.0)

    def test_unknown_component_name(self):
        with pytest.raises(ComponentError, match="Unknown component type"):
            make_component_sweep("series_Q", 1.0, 2.0, 10, F)

    @pytest.mark.parametrize("sweep", [
        ComponentSweep(ComponentType.SERIES_L, 1e-9, 10e-9, 1, F),
        ComponentSweep(ComponentType.SERIES_L, 5e-9, 5e-9, 10, F),
        ComponentSweep(ComponentType.SERIES_L, 1e-9, 10e-9, 10, 0.0),
        ComponentSweep(ComponentType.SHUNT_R, 0.0, 100.0, 10, F),
        ComponentSweep(ComponentType.SERIES_C, 0.0, 1e-12, 10, F),
        ComponentSweep(ComponentType.SERIES_R, -1.0, 100.0, 10, F),
        ComponentSweep(ComponentType.TRANSMISSION_LINE, -0.1, 0.1, 10, F),
    ])
    def test_invalid_sweeps(self, sweep):
        with pytest.raises(InvalidSweepSpecificationError):
            validate_component_sweep(sweep)

    def test_valid_boundary_sweeps(self):
        validate_component_sweep(ComponentSweep(ComponentType.SERIES_R, 0.0, 100.0, 10, F))
        validate_component_sweep(ComponentSweep(ComponentType.TRANSMISSION_LINE, 0.0, 0.1, 10, F))


class TestRunComponentSweep:
    def test_series_inductor_trace(self):
        sweep = make_component_sweep("series_L", 1e-9, 10e-9, 10, F)
        results = run_component_sweep(sweep)
        expected = 50.0 + 1j * OMEGA * sweep.values()
        np.testing.assert_allclose(results.impedances, expected)
        np.testing.assert_allclose(results.admittances, 1.0 / expected)
        np.testing.assert_allclose(results.reflection_coefficients, (expected - 50.0) / (expected + 50.0))
        assert np.all(np.abs(results.smith_coordinates()) <= 1.0)
        np.testing.assert_allclose(results.normalized_impedances(), expected / 50.0)
        assert len(results) == 10 == len(results.s_parameters)

    def test_embedding_networks(self):
        sweep = make_component_sweep("series_R", 10.0, 100.0, 4, F)
        results = run_component_sweep(sweep, after=shunt_resistor(50.0), z_load=50.0)
        np.testing.assert_allclose(results.impedances, sweep.values() + 25.0)
        before = run_component_sweep(sweep, before=shunt_resistor(50.0), z_load=50.0)
        expected = 1.0 / (1.0 / 50.0 + 1.0 / (sweep.values() + 50.0))
        np.testing.assert_allclose(before.impedances, expected)

    def test_invalid_sweep_is_rejected(self):
        with pytest.raises(InvalidSweepSpecificationError):
            run_component_sweep(ComponentSweep(ComponentType.SHUNT_L, 0.0, 1e-9, 10, F))


class TestAdaptivePointCount:
    def test_inductor_points_follow_reactance_range(self):
        sweep = make_component_sweep("series_L", 1e-9, 100e-9, 10, F)
        assert calculate_optimal_points(sweep) == int(OMEGA * 99e-9 / 10.0)

    def test_capacitor_points_follow_reactance_range(self):
        sweep = make_component_sweep("shunt_C", 1e-12, 10e-12, 10, F)
        x_range = 1.0 / (OMEGA * 1e-12) - 1.0 / (OMEGA * 10e-12)
        assert calculate_optimal_points(sweep) == int(x_range / 10.0)

    def test_line_points_follow_phase_range(self):
        sweep = make_component_sweep("tline", 0.0, 1.0, 10, F)
        assert calculate_optimal_points(sweep, max_phase_change=30.0) == 40

    def test_requested_points_are_a_floor(self):
        sweep = make_component_sweep("series_R", 1.0, 1000.0, 300, F)
        assert calculate_optimal_points(sweep) == 300

    def test_point_count_is_capped(self):
        sweep = make_component_sweep("series_L", 1e-9, 1e-3, 10, F)
        assert calculate_optimal_points(sweep) == MAX_OPTIMAL_POINTS

    def test_adaptive_sweep(self):
        sweep = make_adaptive_component_sweep("series_L", 1e-9, 100e-9, F)
        assert sweep.num_points == int(OMEGA * 99e-9 / 10.0)
        narrow = make_adaptive_component_sweep("series_L", 1e-9, 2e-9, F)
        assert narrow.num_points == 50

    @pytest.mark.parametrize("args, options", [
        (("series_C", 0.0, 1e-12, F), {}),
        (("shunt_L", 0.0, 1e-9, F), {}),
        (("tline", 0.0, 0.1, F), {"velocity_factor": 0.0}),
        (("series_L", 1e-9, 10e-9, 0.0), {}),
    ])
    def test_adaptive_sweep_rejects_invalid_bounds(self, args, options):
        with pytest.raises(InvalidSweepSpecificationError):
            make_adaptive_component_sweep(*args, **options)

    def test_point_count_needs_a_valid_sweep(self):
        sweep = ComponentSweep(ComponentType.SHUNT_C, 0.0, 10e-12, 10, F)
        with pytest.raises(InvalidSweepSpecificationError, match="strictly positive"):
            calculate_optimal_points(sweep)


class TestArcAndAngle:
    def test_arc_range(self):
        arc = calculate_arc_range("series_L", 10e-9, F, tolerance=0.2)
        assert arc.value_min == pytest.approx(8e-9)
        assert arc.value_max == pytest.approx(12e-9)
        assert arc.z_start == pytest.approx(50.0 + 1j * OMEGA * 8e-9)
        assert arc.gamma_stop == pytest.approx((arc.z_stop - 50.0) / (arc.z_stop + 50.0))

    def test_find_value_at_angle(self):
        """Series L into 50 ohm: Gamma = jX / (100 + jX), whose angle is atan(100 / X)."""
        sweep = make_component_sweep("series_L", 1e-9, 20e-9, 10, F)
        value = find_component_value_at_angle(sweep, 60.0)
        expected = 100.0 / math.tan(math.radians(60.0)) / OMEGA
        assert value == pytest.approx(expected, rel=1e-4)
        gamma = (1j * OMEGA * value) / (100.0 + 1j * OMEGA * value)
        assert math.degrees(cmath.phase(gamma)) == pytest.approx(60.0, abs=1e-3)
