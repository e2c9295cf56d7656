# src/cascadix/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("Cascadix package initialized.")

from .units import ureg, pint, Quantity, to_si
from .errors import CascadixError, AnalysisRunError, DiagnosableError
from .network import (
    TwoPortMatrix, TwoPortAccumulator, ScatteringParameters, ImpedanceParameters, AdmittanceParameters,
    DegenerateNetworkError, NotSymmetricError, cascade, cascade_all,
)
from .components import (
    ComponentType, ComponentError, NetworkChain, create_component_network,
    series_impedance, shunt_admittance, series_resistor, shunt_resistor, series_inductor, shunt_inductor,
    series_capacitor, shunt_capacitor, ideal_transformer, series_rlc, shunt_rlc,
    transmission_line, lossy_transmission_line, quarter_wave_transmission_line,
    transmission_line_from_electrical_length, series_open_stub, series_short_stub, shunt_open_stub,
    shunt_short_stub, shunt_tee, butterworth_lowpass_3rd, pi_attenuator, t_attenuator, l_match,
)
from .sweep import (
    SweepSpecification, SweepDistribution, SweepResults, InvalidSweepSpecificationError,
    ComponentSweep, run_sweep, run_component_sweep, parse_sweep_config,
)
from .smith import (
    SmithChartConfig, SmithChartGenerator, PointStream, impedance_to_gamma, gamma_to_impedance,
)
from .analysis import (
    ComponentTolerance, DistributionType, MonteCarloAnalyzer, MonteCarloResult, ToleranceSpecificationError,
)
from .parser import AnalysisFileParser
from .execution import run_analysis_file, AnalysisReport

__all__ = [
    # Units
    "ureg", "pint", "Quantity", "to_si",
    # Two-port core
    "TwoPortMatrix", "TwoPortAccumulator", "ScatteringParameters", "ImpedanceParameters",
    "AdmittanceParameters", "cascade", "cascade_all",
    # Components
    "ComponentType", "NetworkChain", "create_component_network",
    "series_impedance", "shunt_admittance", "series_resistor", "shunt_resistor", "series_inductor",
    "shunt_inductor", "series_capacitor", "shunt_capacitor", "ideal_transformer", "series_rlc", "shunt_rlc",
    "transmission_line", "lossy_transmission_line", "quarter_wave_transmission_line",
    "transmission_line_from_electrical_length", "series_open_stub", "series_short_stub",
    "shunt_open_stub", "shunt_short_stub", "shunt_tee", "butterworth_lowpass_3rd",
    "pi_attenuator", "t_attenuator", "l_match",
    # Sweeps
    "SweepSpecification", "SweepDistribution", "SweepResults", "ComponentSweep",
    "run_sweep", "run_component_sweep", "parse_sweep_config",
    # Smith chart
    "SmithChartConfig", "SmithChartGenerator", "PointStream", "impedance_to_gamma", "gamma_to_impedance",
    # Monte Carlo
    "ComponentTolerance", "DistributionType", "MonteCarloAnalyzer", "MonteCarloResult",
    # Analysis files
    "AnalysisFileParser", "run_analysis_file", "AnalysisReport",
    # Errors (Actionable Diagnostics)
    "CascadixError", "AnalysisRunError", "DiagnosableError",
    "DegenerateNetworkError", "NotSymmetricError", "ComponentError",
    "InvalidSweepSpecificationError", "ToleranceSpecificationError",
]
