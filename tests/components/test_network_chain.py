# tests/components/test_network_chain.py
import pytest

from cascadix.components import (
    ComponentError, ComponentType, NetworkChain, series_inductor, series_resistor, shunt_capacitor,
    shunt_resistor, transmission_line,
)
from cascadix.network import TwoPortMatrix


@pytest.fixture
def ladder():
    chain = NetworkChain()
    chain.append("series_L", 10e-9)
    chain.append(ComponentType.SHUNT_C, 2e-12)
    chain.append("tline", 0.05, z0=75.0)
    return chain


class TestNetworkChainEditing:
    def test_append_returns_index(self):
        chain = NetworkChain()
        assert chain.append("series_R", 10.0) == 0
        assert chain.append("shunt_R", 100.0) == 1
        assert len(chain) == 2
        assert chain[1].component_type is ComponentType.SHUNT_R

    def test_insert_and_remove(self, ladder):
        ladder.insert(0, "series_R", 5.0)
        assert ladder[0].component_type is ComponentType.SERIES_R
        removed = ladder.remove(0)
        assert removed.value == 5.0
        assert [e.component_type for e in ladder] == [
            ComponentType.SERIES_L, ComponentType.SHUNT_C, ComponentType.TRANSMISSION_LINE,
        ]

    def test_replace_keeps_type_and_options(self, ladder):
        ladder.replace(2, 0.1)
        assert ladder[2].value == 0.1
        assert ladder[2].options == {"z0": 75.0}

    def test_values_and_with_values(self, ladder):
        assert ladder.values == [10e-9, 2e-12, 0.05]
        copy = ladder.with_values([20e-9, 1e-12, 0.02])
        assert copy.values == [20e-9, 1e-12, 0.02]
        assert ladder.values == [10e-9, 2e-12, 0.05]
        with pytest.raises(ValueError, match="Expected 3 values"):
            ladder.with_values([1.0])

    @pytest.mark.parametrize("component_type, value", [
        ("shunt_R", 0.0),
        ("series_L", -1e-9),
        ("series_C", 0.0),
        ("unknown", 1.0),
    ])
    def test_invalid_elements_rejected(self, component_type, value):
        with pytest.raises(ComponentError):
            NetworkChain().append(component_type, value)

    def test_replace_validates(self, ladder):
        with pytest.raises(ComponentError):
            ladder.replace(0, 0.0)
        assert ladder[0].value == 10e-9


class TestNetworkChainEvaluation:
    def test_empty_chain_is_identity(self):
        assert NetworkChain().build(1e9) == TwoPortMatrix.identity()

    def test_build_cascades_in_order(self, ladder):
        f = 1.2e9
        expected = series_inductor(10e-9, f) @ shunt_capacitor(2e-12, f) @ transmission_line(0.05, 75.0, f)
        assert ladder.build(f).is_close(expected)

    def test_builder_snapshots_elements(self):
        chain = NetworkChain()
        chain.append("series_R", 50.0)
        builder = chain.builder()
        chain.append("shunt_R", 100.0)
        assert builder(1e9) == series_resistor(50.0)
        assert chain.build(1e9).is_close(series_resistor(50.0) @ shunt_resistor(100.0))

    def test_input_impedance(self):
        chain = NetworkChain()
        chain.append("series_R", 50.0)
        chain.append("shunt_R", 100.0)
        assert chain.input_impedance(1e9, 50.0) == pytest.approx(83.3333333)

    def test_str(self, ladder):
        assert str(ladder).startswith("series_L(1e-08) -> shunt_C(2e-12)")
        assert str(NetworkChain()) == "<empty chain>"
