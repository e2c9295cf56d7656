# src/cascadix/components/base.py
"""
Shared building blocks for the component library: the result types returned
by the `*_element` factories, argument validation helpers, and the global
registry that maps a `ComponentType` to its factory.

A registered factory has the signature ``(value, frequency, **options) ->
TwoPortMatrix`` where `value` is the element's single SI value (ohms, henries,
farads, or metres for a line).
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from ..network import TwoPortMatrix
from .base_enums import ComponentType
from .exceptions import ComponentError


logger = logging.getLogger(__name__)

ComponentFactory = Callable[..., TwoPortMatrix]


@dataclass(frozen=True)
class ElementResult:
    """A lumped element's ABCD matrix plus the one-port quantity it was built from."""
    matrix: TwoPortMatrix
    impedance: Optional[complex] = None
    admittance: Optional[complex] = None


@dataclass(frozen=True)
class RLCResult:
    """ABCD matrix of a series or shunt RLC branch with its resonance side values."""
    matrix: TwoPortMatrix
    resonant_frequency: float
    q_factor: float
    impedance: Optional[complex] = None
    admittance: Optional[complex] = None


@dataclass(frozen=True)
class TransmissionLineResult:
    """ABCD matrix of a uniform line plus its propagation quantities at the build frequency."""
    matrix: TwoPortMatrix
    characteristic_impedance: complex
    propagation_constant: complex  # gamma = alpha + j*beta, per metre
    electrical_length_degrees: float


@dataclass(frozen=True)
class ComponentSpec:
    """Registry entry: the factory, the SI unit of its value, and its value domain."""
    component_type: ComponentType
    factory: ComponentFactory
    unit: str
    strictly_positive: bool

    def check_value(self, value: float) -> None:
        """Raises ComponentError if `value` lies outside this component's value domain."""
        if not math.isfinite(value):
            raise ComponentError(component=self.component_type.value, details=f"Value {value} is not finite.")
        if self.strictly_positive and value <= 0:
            raise ComponentError(
                component=self.component_type.value,
                details=f"Value must be strictly positive, got {value} {self.unit}."
            )
        if value < 0:
            raise ComponentError(
                component=self.component_type.value,
                details=f"Value must be non-negative, got {value} {self.unit}."
            )


# --- Argument validation helpers shared by the factory modules ---

def require_finite(component: str, name: str, value: float, frequency: Optional[float] = None) -> float:
    if not math.isfinite(value):
        raise ComponentError(component=component, details=f"{name} must be finite, got {value}.", frequency=frequency)
    return float(value)


def require_non_negative(component: str, name: str, value: float, frequency: Optional[float] = None) -> float:
    value = require_finite(component, name, value, frequency)
    if value < 0:
        raise ComponentError(
            component=component, details=f"{name} must be non-negative, got {value}.", frequency=frequency
        )
    return value


def require_positive(component: str, name: str, value: float, frequency: Optional[float] = None) -> float:
    value = require_finite(component, name, value, frequency)
    if value <= 0:
        raise ComponentError(
            component=component, details=f"{name} must be strictly positive, got {value}.", frequency=frequency
        )
    return value


def angular_frequency(component: str, frequency: float, strictly_positive: bool = False) -> float:
    """
    Returns omega = 2*pi*f after validating `frequency`.

    Elements whose reactance divides by omega (series C, shunt L) must pass
    ``strictly_positive=True``.
    """
    if strictly_positive:
        frequency = require_positive(component, "Frequency", frequency, frequency)
    else:
        frequency = require_non_negative(component, "Frequency", frequency, frequency)
    return 2.0 * math.pi * frequency


# --- Global Component Registry and Decorator ---

COMPONENT_REGISTRY: Dict[ComponentType, ComponentSpec] = {}


def register_component(component_type: ComponentType, unit: str, strictly_positive: bool = False):
    """
    A function decorator that registers a single-valued element factory in the
    global registry, making it available to the sweep engine, the Monte Carlo
    analyzer and the analysis file parser.
    """
    def decorator(func: ComponentFactory) -> ComponentFactory:
        if not callable(func):
            raise TypeError(f"Component factory for '{component_type.value}' must be callable.")
        if component_type in COMPONENT_REGISTRY:
            logger.warning(f"Component type '{component_type.value}' is being redefined/overwritten.")
        COMPONENT_REGISTRY[component_type] = ComponentSpec(
            component_type=component_type,
            factory=func,
            unit=unit,
            strictly_positive=strictly_positive,
        )
        logger.debug(f"Registered component type '{component_type.value}' -> {func.__name__}")
        return func
    return decorator


def resolve_component_type(component_type: Union[ComponentType, str]) -> ComponentType:
    """
    Accepts a `ComponentType` or its textual name (e.g. ``"series_L"``).

    Raises:
        ComponentError: for an unrecognized name.
    """
    if isinstance(component_type, ComponentType):
        return component_type
    try:
        return ComponentType(str(component_type).strip())
    except ValueError:
        known = ", ".join(t.value for t in ComponentType)
        raise ComponentError(
            component=str(component_type),
            details=f"Unknown component type '{component_type}'. Known types: {known}."
        ) from None


def get_component_spec(component_type: Union[ComponentType, str]) -> ComponentSpec:
    ctype = resolve_component_type(component_type)
    try:
        return COMPONENT_REGISTRY[ctype]
    except KeyError:
        raise ComponentError(
            component=ctype.value, details=f"No factory is registered for component type '{ctype.value}'."
        ) from None


def create_component_network(
    component_type: Union[ComponentType, str], value: float, frequency: float, **options
) -> TwoPortMatrix:
    """Builds the ABCD matrix of a registered single-valued element at `frequency`."""
    spec = get_component_spec(component_type)
    return spec.factory(value, frequency, **options)
