# src/cascadix/analysis/__init__.py
from .exceptions import ToleranceSpecificationError
from .tolerance import ComponentTolerance, DistributionType
from .results import MonteCarloResult
from .monte_carlo import MonteCarloAnalyzer
from .statistics import (
    ParetoPoint, SensitivityResult, confidence_interval, find_pareto_front, histogram,
    robustness_metric, sensitivity_analysis,
)
