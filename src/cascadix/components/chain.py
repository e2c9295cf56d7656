# src/cascadix/components/chain.py
"""
`NetworkChain`: an index-addressed, ordered ladder of single-valued elements
cascaded from port 1 to port 2. Elements are stored by value in a plain list;
positions are the only handles.
"""
import logging
from dataclasses import dataclass, field, replace as dc_replace
from typing import Any, Callable, Dict, Iterator, List, Sequence, Union

from ..network import TwoPortAccumulator, TwoPortMatrix
from .base import get_component_spec, resolve_component_type
from .base_enums import ComponentType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainElement:
    """One ladder position: a registered component type, its SI value and factory options."""
    component_type: ComponentType
    value: float
    options: Dict[str, Any] = field(default_factory=dict)

    def matrix(self, frequency: float) -> TwoPortMatrix:
        spec = get_component_spec(self.component_type)
        return spec.factory(self.value, frequency, **self.options)

    def with_value(self, value: float) -> "ChainElement":
        return dc_replace(self, value=float(value))

    def __str__(self) -> str:
        return f"{self.component_type.value}({self.value:.6g})"


class NetworkChain:
    """Ordered list of elements with list-like editing and matrix building."""

    def __init__(self, elements: Sequence[ChainElement] = ()):
        self._elements: List[ChainElement] = list(elements)

    @staticmethod
    def _make_element(component_type: Union[ComponentType, str], value: float, options: Dict[str, Any]) -> ChainElement:
        ctype = resolve_component_type(component_type)
        value = float(value)
        get_component_spec(ctype).check_value(value)
        return ChainElement(component_type=ctype, value=value, options=dict(options))

    # --- Editing ---

    def append(self, component_type: Union[ComponentType, str], value: float, **options) -> int:
        """Adds an element at port 2 and returns its index."""
        self._elements.append(self._make_element(component_type, value, options))
        return len(self._elements) - 1

    def insert(self, index: int, component_type: Union[ComponentType, str], value: float, **options) -> None:
        self._elements.insert(index, self._make_element(component_type, value, options))

    def remove(self, index: int) -> ChainElement:
        return self._elements.pop(index)

    def replace(self, index: int, value: float) -> None:
        """Changes the value of the element at `index`, keeping its type and options."""
        element = self._elements[index]
        get_component_spec(element.component_type).check_value(float(value))
        self._elements[index] = element.with_value(value)

    def with_values(self, values: Sequence[float]) -> "NetworkChain":
        """A copy with every element's value replaced, in order."""
        if len(values) != len(self._elements):
            raise ValueError(f"Expected {len(self._elements)} values, got {len(values)}.")
        return NetworkChain([element.with_value(v) for element, v in zip(self._elements, values)])

    # --- Sequence protocol ---

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[ChainElement]:
        return iter(self._elements)

    def __getitem__(self, index: int) -> ChainElement:
        return self._elements[index]

    @property
    def values(self) -> List[float]:
        return [element.value for element in self._elements]

    # --- Evaluation ---

    def build(self, frequency: float) -> TwoPortMatrix:
        """Cascade of all elements at `frequency`; the identity for an empty chain."""
        accumulator = TwoPortAccumulator()
        for element in self._elements:
            accumulator.cascade_inplace(element.matrix(frequency))
        return accumulator.freeze()

    def builder(self) -> Callable[[float], TwoPortMatrix]:
        """A ``frequency -> TwoPortMatrix`` callable over a snapshot of the current elements."""
        return NetworkChain(self._elements).build

    def input_impedance(self, frequency: float, z_load: complex) -> complex:
        return self.build(frequency).input_impedance(z_load)

    def __str__(self) -> str:
        return " -> ".join(str(e) for e in self._elements) or "<empty chain>"

    def __repr__(self) -> str:
        return f"NetworkChain({self._elements!r})"
