# tests/analysis/test_tolerance_statistics.py
import numpy as np
import pytest

from cascadix.analysis import (
    ComponentTolerance, MonteCarloAnalyzer, ParetoPoint, confidence_interval, find_pareto_front, histogram,
    robustness_metric, sensitivity_analysis,
)


@pytest.fixture
def series_shunt_result():
    """Series R varies around 50 ohm; shunt R is fixed at 1 kohm."""
    analyzer = MonteCarloAnalyzer(num_samples=500, seed=21)
    analyzer.add_component(ComponentTolerance("series_R", 50.0, 0.1))
    analyzer.add_component(ComponentTolerance("shunt_R", 1000.0, 0.0))
    return analyzer.analyze(1e9)


class TestConfidenceInterval:
    def test_bounds_of_uniform_ranks(self):
        lower, upper = confidence_interval(np.arange(1000), level=0.95)
        assert lower == pytest.approx(25, abs=1)
        assert upper == pytest.approx(975, abs=1)

    def test_unsorted_input(self):
        values = np.random.default_rng(4).permutation(200)
        lower, upper = confidence_interval(values, level=0.5)
        assert lower < upper
        assert lower == pytest.approx(50, abs=1)

    @pytest.mark.parametrize("values, level", [([], 0.95), ([1.0, 2.0], 0.0), ([1.0, 2.0], 1.5)])
    def test_invalid_requests(self, values, level):
        with pytest.raises(ValueError):
            confidence_interval(values, level)


class TestHistogram:
    def test_probabilities_sum_to_one(self):
        probabilities, edges = histogram(np.random.default_rng(5).normal(size=1000), bins=15)
        assert probabilities.sum() == pytest.approx(1.0)
        assert len(edges) == 16

    def test_empty_sample(self):
        with pytest.raises(ValueError):
            histogram([])


class TestSensitivity:
    def test_varying_component_dominates(self, series_shunt_result):
        sensitivities = sensitivity_analysis(series_shunt_result)
        assert [s.component_index for s in sensitivities] == [0, 1]
        # |Zin| = R + (1000 || 50) is linear in R with unit slope.
        assert sensitivities[0].sensitivity == pytest.approx(1.0, rel=1e-6)
        assert sensitivities[0].correlation == pytest.approx(1.0, rel=1e-6)
        assert sensitivities[1].sensitivity == 0.0
        assert sensitivities[1].correlation == 0.0

    def test_robustness_metric(self, series_shunt_result):
        assert robustness_metric(series_shunt_result, vswr_threshold=10.0) == 1.0
        assert robustness_metric(series_shunt_result, vswr_threshold=1.0) == 0.0


class TestParetoFront:
    def test_dominated_points_are_removed(self):
        points = [
            ParetoPoint((1.0,), (1.0, 5.0)),
            ParetoPoint((2.0,), (2.0, 2.0)),
            ParetoPoint((3.0,), (3.0, 3.0)),
            ParetoPoint((4.0,), (5.0, 1.0)),
        ]
        front = find_pareto_front(points)
        assert [p.component_values for p in front] == [(1.0,), (2.0,), (4.0,)]

    def test_identical_points_do_not_dominate_each_other(self):
        points = [ParetoPoint((1.0,), (1.0, 1.0)), ParetoPoint((2.0,), (1.0, 1.0))]
        assert len(find_pareto_front(points)) == 2
