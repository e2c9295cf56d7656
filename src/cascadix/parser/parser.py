# src/cascadix/parser/parser.py
import logging
import re
import string
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import cerberus
import pint
import yaml

from ..analysis import ComponentTolerance, ToleranceSpecificationError
from ..components import ComponentError, ComponentType, NetworkChain, get_component_spec
from ..smith import SmithChartConfig
from ..sweep import InvalidSweepSpecificationError, parse_sweep_config
from ..units import to_si
from .definitions import AnalysisDefinition, MonteCarloSettings
from .exceptions import ParsingError, SchemaValidationError

logger = logging.getLogger(__name__)

ID_REGEX = r"^[a-zA-Z_][a-zA-Z0-9_]*$"
ALLOWED_ID_CHARS = set(string.ascii_letters + string.digits + "_")

#: Element keys that configure a transmission line rather than its value.
LINE_OPTION_KEYS = ("z0", "velocity_factor", "loss_db_per_m")


class EnhancedValidator(cerberus.Validator):
    """Cerberus validator with naming and physical-unit rules."""

    def _validate_id_regex(self, constraint: bool, field: str, value: Any):
        """
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint or not isinstance(value, str):
            return
        if not re.match(ID_REGEX, value):
            invalid_chars = sorted(set(value) - ALLOWED_ID_CHARS)
            self._error(
                field,
                f"Identifier '{value}' is invalid. Identifiers must start with a letter or underscore and can "
                f"only contain letters, numbers and underscores. Forbidden character(s): {invalid_chars}"
            )

    def _validate_si_unit(self, unit: str, field: str, value: Any):
        """
        Checks that a number or unit string converts to the given SI unit.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return
        try:
            to_si(value, unit)
        except (pint.DimensionalityError, pint.UndefinedUnitError, ValueError, TypeError) as e:
            self._error(field, f"'{value}' is not a valid quantity in {unit}: {e}")


def _quantity_rule(unit: str, required: bool = False) -> Dict[str, Any]:
    return {"type": ["string", "number"], "required": required, "si_unit": unit}


def _impedance_rule(required: bool = False) -> Dict[str, Any]:
    return {
        "required": required,
        "oneof": [
            {"type": ["string", "number"], "si_unit": "ohm"},
            {"type": "dict", "schema": {
                "real": _quantity_rule("ohm", required=True),
                "imag": _quantity_rule("ohm", required=True),
            }},
        ],
    }


class AnalysisFileParser:
    """
    Loads and validates a YAML analysis file and converts it into an
    `AnalysisDefinition` with every quantity in SI units.
    """
    _element_schema = {
        "type": {"type": "string", "required": True, "allowed": [t.value for t in ComponentType]},
        "value": {"type": ["string", "number"], "required": True},
        "tolerance": {"type": "number", "required": False, "min": 0},
        "distribution": {"type": "string", "required": False, "allowed": ["uniform", "gaussian", "triangular"]},
        "temperature_coefficient": {"type": "number", "required": False},
        "z0": _impedance_rule(),
        "velocity_factor": {"type": "number", "required": False, "min": 0.01, "max": 1.0},
        "loss_db_per_m": {"type": "number", "required": False, "min": 0},
    }

    _schema = {
        "name": {"type": "string", "required": False, "id_regex": True},
        "reference_impedance": _impedance_rule(),
        "load_impedance": _impedance_rule(),
        "source_impedance": _impedance_rule(),
        "network": {"type": "list", "required": True, "minlength": 1,
                    "schema": {"type": "dict", "schema": _element_schema}},
        "sweep": {
            "type": "dict", "required": True, "schema": {
                "type": {"type": "string", "required": True, "allowed": ["linear", "log"]},
                "start": _quantity_rule("hertz", required=True),
                "stop": _quantity_rule("hertz", required=True),
                "num_points": {"type": "integer", "required": True, "min": 2},
            },
        },
        "smith_chart": {
            "type": "dict", "required": False, "schema": {
                "min_spacing": {"type": "number", "min": 0},
                "max_spacing": {"type": "number", "min": 0},
                "edge_boost_factor": {"type": "number", "min": 0},
                "edge_threshold": {"type": "number", "min": 0, "max": 1},
                "adaptive_sampling": {"type": "boolean"},
            },
        },
        "monte_carlo": {
            "type": "dict", "required": False, "schema": {
                "num_samples": {"type": "integer", "min": 1},
                "seed": {"type": "integer", "nullable": True},
                "frequency": _quantity_rule("hertz", required=True),
                "vswr_threshold": {"type": "number", "min": 1},
            },
        },
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.debug("AnalysisFileParser initialized.")

    def parse(self, yaml_path: Union[str, Path]) -> AnalysisDefinition:
        """Parses the analysis file at `yaml_path`."""
        path = Path(yaml_path).resolve()
        logger.info(f"Parsing analysis file: {path}")
        return self.parse_data(self._load_yaml(path), path)

    def parse_data(self, content: Dict[str, Any], source_path: Union[str, Path] = Path("<memory>")) -> AnalysisDefinition:
        """Validates and converts an already loaded document."""
        source_path = Path(source_path)
        if not self._validator.validate(content):
            raise SchemaValidationError(self._validator.errors, source_path)
        data = self._validator.document

        try:
            z_ref = self._impedance(data.get("reference_impedance", 50.0))
            network, tolerances = self._build_network(data["network"])
            definition = AnalysisDefinition(
                name=data.get("name", source_path.stem),
                source_path=source_path,
                reference_impedance=z_ref,
                load_impedance=self._impedance(data["load_impedance"]) if "load_impedance" in data else z_ref,
                source_impedance=self._impedance(data["source_impedance"]) if "source_impedance" in data else z_ref,
                network=network,
                tolerances=tuple(tolerances),
                sweep=parse_sweep_config(data["sweep"]),
                smith_chart=SmithChartConfig.from_dict(data.get("smith_chart", {})),
                monte_carlo=self._monte_carlo(data.get("monte_carlo")),
            )
        except (ComponentError, ToleranceSpecificationError, InvalidSweepSpecificationError) as e:
            raise ParsingError(details=str(e), file_path=source_path) from e
        except (pint.DimensionalityError, pint.UndefinedUnitError, ValueError, TypeError) as e:
            raise ParsingError(details=f"Invalid value: {e}", file_path=source_path) from e

        logger.info(f"Parsed analysis '{definition.name}': {len(network)} elements, sweep {definition.sweep}.")
        return definition

    # --- Conversion helpers ---

    @staticmethod
    def _impedance(raw: Any) -> complex:
        if isinstance(raw, dict):
            return complex(to_si(raw["real"], "ohm"), to_si(raw["imag"], "ohm"))
        return complex(to_si(raw, "ohm"))

    def _build_network(self, raw_elements: List[Dict[str, Any]]):
        network = NetworkChain()
        tolerances: List[Optional[ComponentTolerance]] = []
        for index, raw in enumerate(raw_elements):
            ctype = ComponentType(raw["type"])
            options = {key: raw[key] for key in LINE_OPTION_KEYS if key in raw}
            if options and ctype is not ComponentType.TRANSMISSION_LINE:
                raise ValueError(
                    f"Element {index} ({ctype.value}): options {sorted(options)} only apply to 'tline' elements."
                )
            if "z0" in options:
                options["z0"] = self._impedance(options["z0"])

            value = to_si(raw["value"], get_component_spec(ctype).unit)
            network.append(ctype, value, **options)

            if "tolerance" in raw:
                tolerances.append(ComponentTolerance(
                    component_type=ctype,
                    nominal_value=value,
                    tolerance=raw["tolerance"],
                    distribution=raw.get("distribution", "gaussian"),
                    temperature_coefficient=raw.get("temperature_coefficient", 0.0),
                    options=options,
                ))
            else:
                tolerances.append(None)
        return network, tolerances

    @staticmethod
    def _monte_carlo(raw: Optional[Dict[str, Any]]) -> Optional[MonteCarloSettings]:
        if raw is None:
            return None
        return MonteCarloSettings(
            frequency=to_si(raw["frequency"], "hertz"),
            num_samples=raw.get("num_samples", 1000),
            seed=raw.get("seed"),
            vswr_threshold=float(raw.get("vswr_threshold", 2.0)),
        )

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ParsingError(details=f"Analysis file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if content is None:
            raise ParsingError(details="The YAML file is empty or contains no valid content.", file_path=source)
        if not isinstance(content, dict):
            raise ParsingError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)
        return content
