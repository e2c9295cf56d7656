# src/cascadix/components/__init__.py
from .base_enums import ComponentType, Mount
from .exceptions import ComponentError
from .base import (
    COMPONENT_REGISTRY, ComponentSpec, ElementResult, RLCResult, TransmissionLineResult,
    create_component_network, get_component_spec, register_component, resolve_component_type,
)
from .elements import (
    ideal_transformer, resonant_frequency,
    series_capacitor, series_capacitor_element, series_impedance, series_inductor, series_inductor_element,
    series_resistor, series_resistor_element, series_rlc, series_rlc_element,
    shunt_admittance, shunt_capacitor, shunt_capacitor_element, shunt_impedance, shunt_inductor,
    shunt_inductor_element, shunt_resistor, shunt_resistor_element, shunt_rlc, shunt_rlc_element,
)
from .tlines import (
    electrical_length_degrees, lossy_transmission_line, lossy_transmission_line_element,
    open_stub_impedance, phase_constant, quarter_wave_transmission_line, series_open_stub,
    series_short_stub, series_tee, short_stub_impedance, shunt_open_stub, shunt_short_stub,
    shunt_tee, stub, transmission_line, transmission_line_element,
    transmission_line_from_electrical_length, wavelength,
)
from .networks import (
    LMatchDesign, NetworkBuilder, butterworth_coefficients, butterworth_lowpass, butterworth_lowpass_3rd,
    butterworth_lowpass_values, cascade_builders, design_l_match, l_match, make_butterworth_builder,
    make_l_match_builder, make_series_rlc_builder, make_tline_builder, pi_attenuator,
    pi_attenuator_values, t_attenuator, t_attenuator_values,
)
from .chain import ChainElement, NetworkChain
