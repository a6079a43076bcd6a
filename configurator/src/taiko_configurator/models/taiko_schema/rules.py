"""
Field Validation Rules

Rules are plain callables ``rule(config, field, label) -> ValidationResult``.
Base rules check one value; ``conditional`` wraps a base rule so it only
applies while a guard field is truthy.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Mapping, Optional


class ValidationError(IntEnum):
    """Validation error codes"""
    OK = 0

    # Field errors (1-99)
    MISSING_VALUE = 1
    OUT_OF_RANGE = 2

    # Consistency errors (100-199)
    PIN_NOT_ANALOG = 100
    PIN_CONFLICT = 101
    PIN_UNAVAILABLE = 102
    THRESHOLD_ORDER = 103


_ERROR_MESSAGES = {
    ValidationError.OK: "OK",
    ValidationError.MISSING_VALUE: "Value is required",
    ValidationError.OUT_OF_RANGE: "Value out of range",
    ValidationError.PIN_NOT_ANALOG: "Pin is not an analog input",
    ValidationError.PIN_CONFLICT: "Pin is assigned to more than one sensor",
    ValidationError.PIN_UNAVAILABLE: "Pin is already in use",
    ValidationError.THRESHOLD_ORDER: "Heavy threshold is below light threshold",
}


def get_error_message(code: ValidationError) -> str:
    """Get generic message for an error code"""
    return _ERROR_MESSAGES.get(code, f"Unknown error ({int(code)})")


@dataclass
class ValidationResult:
    """Validation result with error details"""
    error: ValidationError = ValidationError.OK
    field: Optional[str] = None
    actual_value: Any = None
    expected_min: Optional[int] = None
    expected_max: Optional[int] = None
    detail: str = ""

    @property
    def is_valid(self) -> bool:
        return self.error == ValidationError.OK

    @property
    def message(self) -> str:
        return self.detail or get_error_message(self.error)

    def __bool__(self) -> bool:
        return self.is_valid


Rule = Callable[[Mapping[str, Any], str, str], ValidationResult]


def success(field: Optional[str] = None) -> ValidationResult:
    """Create success result"""
    return ValidationResult(field=field)


def error(code: ValidationError, field: str, detail: str = "", actual: Any = None,
          min_val: Optional[int] = None, max_val: Optional[int] = None) -> ValidationResult:
    """Create error result"""
    return ValidationResult(
        error=code,
        field=field,
        actual_value=actual,
        expected_min=min_val,
        expected_max=max_val,
        detail=detail,
    )


# ============================================================================
# Value helpers
# ============================================================================

def is_absent(value: Any) -> bool:
    """True when value counts as "not provided" (None or blank form input)."""
    return value is None or (isinstance(value, str) and not value.strip())


def to_number(value: Any) -> Optional[float]:
    """
    Coerce a field value to a finite number.

    Accepts int, float and numeric strings. Returns None for anything else,
    including bool, NaN, infinities and ints too large for a float.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_int(value: Any) -> Optional[int]:
    """Coerce a field value to an int; None unless it is a whole number."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = to_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def is_truthy(value: Any) -> bool:
    """Guard truthiness: nonzero number. Absent or non-numeric is falsy."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value != 0
    number = to_number(value)
    return number is not None and number != 0


# ============================================================================
# Rules
# ============================================================================

def required() -> Rule:
    """Value must be present. Any present value, including -1, passes."""
    def rule(config: Mapping[str, Any], field: str, label: str) -> ValidationResult:
        value = config.get(field)
        if is_absent(value):
            return error(ValidationError.MISSING_VALUE, field,
                         f"{label} is a required field", actual=value)
        return success(field)
    return rule


def in_range(minimum: int, maximum: int) -> Rule:
    """Value must be a whole number within [minimum, maximum]."""
    def rule(config: Mapping[str, Any], field: str, label: str) -> ValidationResult:
        value = config.get(field)

        def fail(detail: str) -> ValidationResult:
            return error(ValidationError.OUT_OF_RANGE, field, detail,
                         actual=value, min_val=minimum, max_val=maximum)

        if is_absent(value):
            return fail(f"{label} is a required field")
        # Ints compare exactly, whatever their size
        number = to_int(value)
        if number is None:
            if to_number(value) is None:
                return fail(f"{label} must be a number")
            return fail(f"{label} must be a whole number")
        if number < minimum:
            return fail(f"{label} must be greater than or equal to {minimum}")
        if number > maximum:
            return fail(f"{label} must be less than or equal to {maximum}")
        return success(field)
    return rule


def conditional(guard_field: str, base_rule: Rule) -> Rule:
    """Apply base_rule only while guard_field is truthy; pass otherwise."""
    def rule(config: Mapping[str, Any], field: str, label: str) -> ValidationResult:
        if not is_truthy(config.get(guard_field)):
            return success(field)
        return base_rule(config, field, label)
    return rule


def chain(*rules: Rule) -> Rule:
    """Run rules in order; the first failure wins."""
    def rule(config: Mapping[str, Any], field: str, label: str) -> ValidationResult:
        for inner in rules:
            result = inner(config, field, label)
            if not result:
                return result
        return success(field)
    return rule
