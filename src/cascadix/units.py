# src/cascadix/units.py
import logging
from numbers import Number
from typing import Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.info("Pint Unit Registry initialized.")


# --- Canonical dimensionality objects for explicit checks ---
ADMITTANCE_DIMENSIONALITY = ureg.parse_expression('siemens').dimensionality
IMPEDANCE_DIMENSIONALITY = ureg.parse_expression('ohm').dimensionality

#: SI unit expected for each component value kind, keyed by the unit string
#: passed to `to_si`.
SI_UNITS = {
    "ohm": ureg.ohm,
    "henry": ureg.henry,
    "farad": ureg.farad,
    "hertz": ureg.hertz,
    "meter": ureg.meter,
    "siemens": ureg.siemens,
    "dimensionless": ureg.dimensionless,
}


def to_si(value: Union[Number, str, Quantity], unit: str) -> float:
    """
    Converts a user-supplied value to a plain float in the SI unit `unit`.

    Plain numbers are taken to be in SI already. Strings are parsed by pint
    (e.g. "2.4 GHz", "10 nH", "50 ohm"), and Quantities are converted directly.

    Raises:
        pint.DimensionalityError: if the value's dimension does not match `unit`.
        pint.UndefinedUnitError: if a string references an unknown unit.
        TypeError: if the value is of an unsupported type.
    """
    target = SI_UNITS.get(unit, unit)
    if isinstance(value, bool):
        raise TypeError(f"Expected a number, string or Quantity for '{unit}', got a bool.")
    if isinstance(value, Number):
        return float(value)
    if isinstance(value, str):
        qty = ureg.Quantity(value)
    elif isinstance(value, Quantity):
        qty = value
    else:
        raise TypeError(f"Cannot convert value of type '{type(value).__name__}' to '{unit}'.")

    if not isinstance(qty, Quantity):
        # A unitless string such as "50" parses to a bare number.
        return float(qty)
    if qty.dimensionless and unit != "dimensionless":
        return float(qty.magnitude)
    return float(qty.to(target).magnitude)
