# src/cascadix/errors.py
"""
User-facing error types and the shared diagnostic report layout.

Every subsystem raises its own `DiagnosableError` subclass; the analysis
facade turns any of them into an `AnalysisRunError` whose message is the
formatted report.
"""
from abc import abstractmethod
from typing import Any, Dict


class CascadixError(Exception):
    """Base class for all custom, user-facing errors in Cascadix."""


class AnalysisRunError(CascadixError):
    """
    Raised by `run_analysis_file` when parsing or any analysis stage fails.
    The message is a pre-formatted diagnostic report.
    """


class DiagnosableError(Exception):
    """
    Base for internal errors that can describe themselves to a user.

    Subclasses are dataclasses carrying a `details` field, which `__str__`
    returns, and implement `get_diagnostic_report`.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        details = getattr(self, "details", None)
        if details is not None:
            return str(details)
        return super().__str__()


#: Context keys shown in the report header, in order, with their labels.
_CONTEXT_LABELS = (
    ("operation", "Operation"),
    ("component", "Component"),
    ("source_file", "Source File"),
    ("frequency", "Frequency"),
)


def format_diagnostic_report(error_type: str, details: str, suggestion: str, context: Dict[str, Any]) -> str:
    """
    Formats the framed multi-line report shared by every `DiagnosableError`.

    Empty context entries are left out of the header.
    """
    lines = [
        "\n",
        "================ Cascadix: Actionable Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    for key, label in _CONTEXT_LABELS:
        value = context.get(key)
        if value:
            lines.append(f"{label + ':':<16}{value}")

    lines.append("\nDetails:")
    lines.extend(f"  {line}" for line in details.splitlines())
    if suggestion:
        lines.append("\nSuggestion:")
        lines.extend(f"  {line}" for line in suggestion.splitlines())

    lines.append("=" * 72)
    return "\n".join(lines)
