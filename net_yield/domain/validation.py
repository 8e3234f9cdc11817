"""Field validation rules for simulation submissions"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

from net_yield.domain.models import FieldError, SimulationInput, ValidationErrorCode
from net_yield.domain.exceptions import InvalidSimulationInputError

# local@domain.tld, no whitespace, single @
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
INTEGER_PATTERN = re.compile(r"[+-]?\d+")

REQUIRED_MESSAGE = "This field is required"


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_number(value: Any) -> Optional[float]:
    """Parse a finite real number, or None"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _parse_integer(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and INTEGER_PATTERN.fullmatch(value.strip()):
        return int(value.strip())
    return None


@dataclass(frozen=True)
class EmailField:
    """Contact address shaped like local@domain.tld"""

    def check(self, name: str, value: Any) -> Optional[FieldError]:
        if not isinstance(value, str) or not EMAIL_PATTERN.fullmatch(value):
            return FieldError(name, ValidationErrorCode.INVALID_EMAIL, "Please enter a valid email address")
        return None

    def convert(self, value: Any) -> str:
        return value.lower()


@dataclass(frozen=True)
class PositiveNumberField:
    """Real number strictly greater than zero"""

    def check(self, name: str, value: Any) -> Optional[FieldError]:
        number = _parse_number(value)
        if number is None:
            return FieldError(name, ValidationErrorCode.INVALID_NUMBER, "Please enter a valid number")
        if number < 0:
            return FieldError(name, ValidationErrorCode.NEGATIVE_NUMBER, "Please enter a positive number")
        if number == 0:
            return FieldError(name, ValidationErrorCode.ZERO_VALUE, "Please enter a value greater than zero")
        return None

    def convert(self, value: Any) -> float:
        return _parse_number(value)


@dataclass(frozen=True)
class NumberInRangeField:
    """Real number within an inclusive range"""

    minimum: float
    maximum: float
    code: ValidationErrorCode
    message: str

    def check(self, name: str, value: Any) -> Optional[FieldError]:
        number = _parse_number(value)
        if number is None:
            return FieldError(name, ValidationErrorCode.INVALID_NUMBER, "Please enter a valid number")
        if number < self.minimum or number > self.maximum:
            return FieldError(name, self.code, self.message)
        return None

    def convert(self, value: Any) -> float:
        return _parse_number(value)


@dataclass(frozen=True)
class IntegerChoiceField:
    """Integer picked from a fixed set, like a select input"""

    choices: FrozenSet[int]
    code: ValidationErrorCode
    message: str

    def check(self, name: str, value: Any) -> Optional[FieldError]:
        number = _parse_integer(value)
        if number is None or number not in self.choices:
            return FieldError(name, self.code, self.message)
        return None

    def convert(self, value: Any) -> int:
        return _parse_integer(value)


FieldKind = Union[EmailField, PositiveNumberField, NumberInRangeField, IntegerChoiceField]

# Declaration order is the order errors are reported in
FIELD_RULES: Dict[str, FieldKind] = {
    "purchase_price": PositiveNumberField(),
    "monthly_rent": PositiveNumberField(),
    "annual_fee": PositiveNumberField(),
    "email": EmailField(),
    "surface": NumberInRangeField(
        minimum=20,
        maximum=120,
        code=ValidationErrorCode.SURFACE_OUT_OF_RANGE,
        message="Surface must be between 20 and 120 m²",
    ),
    "bedrooms": IntegerChoiceField(
        choices=frozenset({1, 2, 3, 4}),
        code=ValidationErrorCode.BEDROOMS_OUT_OF_RANGE,
        message="Please select a number of bedrooms between 1 and 4",
    ),
    "location_score": NumberInRangeField(
        minimum=5.0,
        maximum=10.0,
        code=ValidationErrorCode.LOCATION_SCORE_OUT_OF_RANGE,
        message="Location score must be between 5.0 and 10.0",
    ),
}

BASE_FIELDS: Tuple[str, ...] = ("purchase_price", "monthly_rent", "annual_fee", "email")
DATA_DRIVEN_FIELDS: Tuple[str, ...] = ("surface", "bedrooms", "location_score")


def validate_field(name: str, value: Any, required: bool) -> Optional[FieldError]:
    """
    Validate one raw value against the rule registered for its field.

    Rules, first match wins:
    - required and empty -> REQUIRED_FIELD
    - empty and optional -> no error, value treated as absent
    - otherwise the field kind's own rule

    Raises:
        ValueError: When no rule is registered for the field name
    """
    if name not in FIELD_RULES:
        raise ValueError(f"No validation rule registered for field {name!r}")

    if _is_empty(value):
        if required:
            return FieldError(name, ValidationErrorCode.REQUIRED_FIELD, REQUIRED_MESSAGE)
        return None

    return FIELD_RULES[name].check(name, value)


def validate_simulation(raw: Mapping[str, Any], data_driven: bool = False) -> List[FieldError]:
    """
    Validate a whole submission.

    Args:
        raw: Field name -> raw value (string, number or None)
        data_driven: When True, surface, bedrooms and location score are required

    Returns:
        Errors in field declaration order, empty when the submission is valid
    """
    errors = []
    for name in FIELD_RULES:
        required = name in BASE_FIELDS or data_driven
        error = validate_field(name, raw.get(name), required)
        if error is not None:
            errors.append(error)
    return errors


def parse_simulation_input(raw: Mapping[str, Any], data_driven: bool = False) -> SimulationInput:
    """
    Validate a submission and convert it to a SimulationInput.

    Optional fields left empty become None, so a partially filled
    data-driven triple never activates the extended calculation.

    Raises:
        InvalidSimulationInputError: When any field fails validation
    """
    errors = validate_simulation(raw, data_driven=data_driven)
    if errors:
        raise InvalidSimulationInputError(errors)

    values = {
        name: None if _is_empty(raw.get(name)) else kind.convert(raw.get(name))
        for name, kind in FIELD_RULES.items()
    }
    return SimulationInput(**values)
