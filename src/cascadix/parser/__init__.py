# src/cascadix/parser/__init__.py
from .definitions import AnalysisDefinition, MonteCarloSettings
from .parser import AnalysisFileParser
from .exceptions import ParsingError, SchemaValidationError

__all__ = [
    "AnalysisDefinition",
    "MonteCarloSettings",
    "AnalysisFileParser",
    "ParsingError",
    "SchemaValidationError",
]
