# src/cascadix/execution.py
"""
Public entry point for running a complete analysis from a YAML file.

`run_analysis_file` parses the file, sweeps the ladder over frequency, traces
the input reflection coefficient on the Smith chart and, when the file
configures it, runs a Monte Carlo tolerance analysis. Every diagnosable
failure is re-raised as a single `AnalysisRunError` carrying the report.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from .analysis import MonteCarloAnalyzer, MonteCarloResult
from .errors import AnalysisRunError, DiagnosableError, format_diagnostic_report
from .network import TwoPortMatrix
from .parser import AnalysisDefinition, AnalysisFileParser
from .smith import PointStream, SmithChartGenerator, TraceCollection, TraceMetadata, TraceType
from .sweep import SweepResults, run_sweep

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    """Everything produced by one analysis file run."""
    definition: AnalysisDefinition
    sweep: SweepResults
    smith_trace: PointStream
    monte_carlo: Optional[MonteCarloResult] = None

    def traces(self) -> TraceCollection:
        """The nominal trace plus, if present, the Monte Carlo cloud."""
        collection = TraceCollection(title=self.definition.name)
        collection.add_trace(self.smith_trace)
        if self.monte_carlo is not None:
            collection.add_trace(SmithChartGenerator(self.definition.smith_chart).monte_carlo_stream(
                self.monte_carlo.impedances, self.definition.reference_impedance,
                TraceMetadata(trace_type=TraceType.MONTE_CARLO, show_markers=True, label="Monte Carlo"),
            ))
        return collection


def _run_monte_carlo(definition: AnalysisDefinition) -> MonteCarloResult:
    settings = definition.monte_carlo
    analyzer = MonteCarloAnalyzer(num_samples=settings.num_samples, seed=settings.seed)
    indices = definition.toleranced_indices
    for index in indices:
        analyzer.add_component(definition.tolerances[index])

    nominal = definition.network

    def builder(sampled: Sequence[float]) -> TwoPortMatrix:
        values = nominal.values
        for index, value in zip(indices, sampled):
            values[index] = value
        return nominal.with_values(values).build(settings.frequency)

    return analyzer.analyze(
        frequency=settings.frequency,
        z0=definition.reference_impedance,
        z_load=definition.load_impedance,
        network_builder=builder,
        vswr_threshold=settings.vswr_threshold,
    )


def run_analysis_file(path: Union[str, Path]) -> AnalysisReport:
    """
    Runs the analysis described by the YAML file at `path`.

    Raises:
        AnalysisRunError: A user-friendly, diagnosable error if parsing or any
            stage of the analysis fails. The original exception is chained.
    """
    try:
        definition = AnalysisFileParser().parse(path)
        logger.info(f"--- Starting analysis '{definition.name}' ---")

        builder = definition.network.builder()
        sweep = run_sweep(
            builder, definition.sweep,
            z0=definition.reference_impedance,
            z_load=definition.load_impedance,
            z_source=definition.source_impedance,
        )
        trace = SmithChartGenerator(definition.smith_chart).frequency_sweep_stream(
            builder, definition.sweep,
            z_load=definition.load_impedance,
            z0=definition.reference_impedance,
            metadata=TraceMetadata(label=definition.name),
        )

        monte_carlo = None
        if definition.monte_carlo is not None:
            if definition.toleranced_indices:
                monte_carlo = _run_monte_carlo(definition)
            else:
                logger.warning("Monte Carlo configured but no network element carries a tolerance; skipping.")

        logger.info(f"Analysis '{definition.name}' finished: {len(sweep)} sweep points, "
                    f"{len(trace)} Smith chart points.")
        return AnalysisReport(definition=definition, sweep=sweep, smith_trace=trace, monte_carlo=monte_carlo)

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred during the analysis: {e}")
        raise AnalysisRunError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred during the analysis: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Analysis Error Occurred ({type(e).__name__})",
            details=f"The analysis encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={}
        )
        raise AnalysisRunError(report) from e
