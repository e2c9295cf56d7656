# src/cascadix/parser/exceptions.py
"""
Diagnosable exceptions for loading and validating YAML analysis files.

`ParsingError` covers file-system, syntax and semantic problems (bad units,
non-physical values); `SchemaValidationError` covers structural violations
reported by the Cerberus schema.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """Common base for analysis file errors."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the analysis file.",
            context={}
        )


@dataclass()
class ParsingError(BaseParsingError):
    details: str
    file_path: Path

    def __str__(self):
        return f"Parsing error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Analysis File Error",
            details=self.details,
            suggestion="Ensure the file exists and is valid YAML, that quantities carry compatible units "
                       "(e.g. '10 nH' for an inductor, '2.4 GHz' for a frequency), and that values are physical.",
            context={'source_file': self.file_path}
        )


@dataclass()
class SchemaValidationError(BaseParsingError):
    errors: Dict[str, Any]
    file_path: Path

    def _error_lines(self, prefix: str):
        return [f"{prefix}'{k}': {v}" for k, v in sorted(self.errors.items(), key=lambda kv: str(kv[0]))]

    def __str__(self):
        return (
            f"Analysis file schema validation failed for '{self.file_path}':\n"
            + "\n".join(self._error_lines("  - In field "))
        )

    def get_diagnostic_report(self) -> str:
        error_list_str = "\n".join(self._error_lines("  - Field "))
        details = (
            "The structure of the analysis file does not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n{error_list_str}"
        )
        return format_diagnostic_report(
            error_type="YAML Schema Validation Error",
            details=details,
            suggestion="Correct the listed fields. The file needs a 'network' list of elements with 'type' and "
                       "'value', and a 'sweep' section with 'type', 'start', 'stop' and 'num_points'.",
            context={'source_file': self.file_path}
        )
