# tests/smith/test_smith_generator.py
import numpy as np
import pytest

from cascadix.components import make_butterworth_builder, series_inductor, series_resistor
from cascadix.network import TwoPortMatrix
from cascadix.smith import (
    PointStream, SmithChartConfig, SmithChartGenerator, TraceCollection, TraceMetadata, TraceType,
    generate_impedance_cloud, generate_network_sweep,
)
from cascadix.smith.generator import MAX_INTERPOLATION_POINTS
from cascadix.sweep import InvalidSweepSpecificationError, SweepSpecification, make_component_sweep


@pytest.fixture
def generator():
    return SmithChartGenerator()


def _inside_unit_square(points: np.ndarray) -> bool:
    return bool(np.all(points >= -1.0) and np.all(points <= 1.0))


class TestAdaptiveDensity:
    """Verifies the spacing profile and the interpolation count derived from it."""

    def test_point_spacing_profile(self, generator):
        assert generator.point_spacing(0.0) == pytest.approx(0.015)
        assert generator.point_spacing(0.35) == pytest.approx(0.009)
        assert generator.point_spacing(0.7) == pytest.approx(0.003)
        assert generator.point_spacing(1.0) == pytest.approx(0.003 / 5.0)

    def test_spacing_shrinks_towards_edge(self, generator):
        radii = np.linspace(0.0, 1.0, 21)
        spacings = [generator.point_spacing(r) for r in radii]
        assert np.all(np.diff(spacings) < 0)

    def test_interpolation_count(self, generator):
        # distance 0.1, average spacing (0.015 + 0.0132857) / 2
        assert generator.interpolation_count(0j, 0.1 + 0j) == 7
        assert generator.should_interpolate(0j, 0.1 + 0j)

    def test_close_points_are_not_interpolated(self, generator):
        assert generator.interpolation_count(0j, 0.001 + 0j) == 0
        assert not generator.should_interpolate(0j, 0.001 + 0j)

    def test_interpolation_count_is_capped(self, generator):
        assert generator.interpolation_count(-0.9 + 0j, 0.9 + 0j) == MAX_INTERPOLATION_POINTS

    def test_s11_data_is_densified_linearly(self, generator):
        points = generator.generate_from_s11_data([0j, 0.1 + 0j])
        assert points.dtype == np.float32
        coordinates = points.reshape(-1, 2)
        assert len(coordinates) == 9
        np.testing.assert_allclose(coordinates[:, 0], np.linspace(0.0, 0.1, 9), atol=1e-7)
        np.testing.assert_allclose(coordinates[:, 1], 0.0)

    def test_adaptive_sampling_can_be_disabled(self):
        generator = SmithChartGenerator(SmithChartConfig(adaptive_sampling=False))
        assert len(generator.generate_from_s11_data([0j, 0.5 + 0.5j])) == 4


class TestPathologicalImpedances:
    @pytest.mark.parametrize("z", [1e-6 + 0j, 50 + 1e6j, 1e12, -10.0, -30.0 + 1j])
    def test_coordinates_never_leave_unit_square(self, generator, z):
        assert _inside_unit_square(generator.impedances_to_points([z]))

    def test_negative_resistance_is_clamped(self, generator):
        points = generator.impedances_to_points([-10.0])
        np.testing.assert_array_equal(points, np.array([-1.0, 0.0], dtype=np.float32))

    def test_sweep_with_near_short_load(self, generator):
        spec = SweepSpecification.linear(1e9, 2e9, 5)
        points = generator.generate_sweep_points(lambda f: series_resistor(0.0), spec, z_load=1e-6)
        assert _inside_unit_square(points)
        np.testing.assert_allclose(points[0::2], -1.0, atol=1e-6)

    def test_stream_clamps_points(self):
        stream = PointStream()
        stream.add_point(2.0 + 2.0j, 1.0)
        np.testing.assert_array_equal(stream.points, np.array([1.0, 1.0], dtype=np.float32))


class TestSweepPoints:
    def test_fixed_network_repeats_one_point(self, generator):
        spec = SweepSpecification.linear(1e9, 2e9, 5)
        points = generator.generate_sweep_points(series_resistor(50.0), spec)
        coordinates = points.reshape(-1, 2)
        assert len(coordinates) == 5
        np.testing.assert_allclose(coordinates, [[1.0 / 3.0, 0.0]] * 5, rtol=1e-6)

    def test_builder_sweep_is_densified(self, generator):
        spec = SweepSpecification.logarithmic(1e8, 1e10, 11)
        points = generator.generate_sweep_points(make_butterworth_builder(1e9), spec)
        assert len(points) // 2 >= 11
        assert _inside_unit_square(points)

    def test_module_level_helpers(self):
        points = generate_network_sweep(make_butterworth_builder(1e9), 1e8, 1e10, 11)
        assert points.dtype == np.float32
        assert _inside_unit_square(points)
        np.testing.assert_array_equal(generate_impedance_cloud([50.0]), np.zeros(2, dtype=np.float32))


class TestPointStreams:
    def test_frequency_stream_values_are_interpolated_frequencies(self, generator):
        spec = SweepSpecification.linear(5e8, 3e9, 11)
        stream = generator.frequency_sweep_stream(make_butterworth_builder(1e9), spec)
        assert len(stream) >= 11
        assert stream.metadata.trace_type is TraceType.FREQUENCY_SWEEP
        values = stream.values
        assert values.dtype == np.float32
        assert values[0] == pytest.approx(5e8, rel=1e-6)
        assert values[-1] == pytest.approx(3e9, rel=1e-6)
        assert np.all(np.diff(values) >= 0)
        assert stream.coordinates().shape == (len(stream), 2)

    def test_component_stream(self, generator):
        sweep = make_component_sweep("series_L", 1e-9, 10e-9, 6, 1e9)
        stream = generator.component_sweep_stream(sweep)
        assert len(stream) == 6
        np.testing.assert_allclose(stream.values, sweep.values(), rtol=1e-6)
        assert stream.metadata.trace_type is TraceType.COMPONENT_SWEEP

    def test_monte_carlo_stream(self, generator):
        impedances = [50.0, 45.0 + 5.0j, 55.0 - 3.0j]
        stream = generator.monte_carlo_stream(impedances)
        np.testing.assert_allclose(stream.values, np.abs(impedances), rtol=1e-6)
        assert stream.metadata.show_markers

    def test_animated_sweep_timestamps(self, generator):
        spec = SweepSpecification.linear(1e9, 2e9, 5)
        stream = generator.animated_sweep(make_butterworth_builder(1e9), spec, duration_seconds=2.0)
        np.testing.assert_allclose(stream.timestamps, [0.0, 0.5, 1.0, 1.5, 2.0])

    def test_trace_collection(self, generator):
        collection = TraceCollection(title="demo")
        collection.add_trace(generator.monte_carlo_stream([50.0, 60.0]))
        collection.add_trace(PointStream(TraceMetadata(label="empty")))
        assert len(collection) == 2
        assert collection.total_points() == 2
        assert [trace.metadata.label for trace in collection][1] == "empty"


class TestMesh:
    def test_mesh_layout(self, generator):
        spec = SweepSpecification.linear(1e9, 2e9, 3)
        mesh = generator.generate_2d_mesh(
            lambda f, v: series_inductor(v, f), spec, component_min=1e-9, component_max=4e-9, component_steps=4,
        )
        assert (mesh.rows, mesh.cols) == (3, 4)
        assert mesh.vertices.shape == (24,)
        assert mesh.values.shape == (12,)
        assert mesh.indices.dtype == np.uint32
        assert len(mesh.indices) == (3 - 1) * (4 - 1) * 6
        np.testing.assert_array_equal(mesh.indices[:6], [0, 1, 4, 1, 5, 4])
        assert mesh.indices.max() < mesh.rows * mesh.cols
        np.testing.assert_allclose(mesh.values[:4], [1e-9, 2e-9, 3e-9, 4e-9], rtol=1e-6)

    def test_mesh_needs_two_steps(self, generator):
        spec = SweepSpecification.linear(1e9, 2e9, 3)
        with pytest.raises(InvalidSweepSpecificationError):
            generator.generate_2d_mesh(lambda f, v: TwoPortMatrix(), spec, 1.0, 2.0, 1)
