# src/cascadix/sweep/__init__.py
from .exceptions import InvalidSweepSpecificationError
from .config import SweepDistribution, SweepSpecification, parse_sweep_config
from .results import ArcRange, ComponentSweepResults, SweepResults
from .execution import (
    ComponentSweep, calculate_arc_range, calculate_optimal_points, find_component_value_at_angle,
    make_adaptive_component_sweep, make_component_sweep, run_component_sweep, run_sweep,
    sweep_s_parameters, validate_component_sweep,
)
