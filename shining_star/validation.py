"""
Input validation utilities.

Centralized validation logic with clear error messages. The catalog
validators never raise: they collect every violation and hand the list back
to the caller, which decides whether to reject the record.
"""

from typing import Any, Optional, List, Iterable, Dict
import math
import re
import logging

logger = logging.getLogger(__name__)

CALCULATION_TYPES = ['quantity', 'area', 'time', 'fixed']

EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'


class ValidationResult:
    """Result of a validation check"""

    def __init__(self, is_valid: bool, error: Optional[str] = None):
        self.is_valid = is_valid
        self.error = error

    def __bool__(self):
        return self.is_valid


def validate_string(
    value: Any,
    field_name: str,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    pattern: Optional[str] = None,
    required: bool = True
) -> ValidationResult:
    """
    Validate string value.

    Args:
        value: Value to validate
        field_name: Field name for error messages
        min_length: Minimum string length
        max_length: Maximum string length
        pattern: Regex pattern to match
        required: Whether field is required

    Returns:
        ValidationResult
    """
    if isinstance(value, str):
        value = value.strip()

    if not value and required:
        return ValidationResult(False, f"{field_name} is required")

    if not value and not required:
        return ValidationResult(True)

    str_value = str(value)

    if min_length is not None and len(str_value) < min_length:
        return ValidationResult(
            False,
            f"{field_name} must be at least {min_length} characters"
        )

    if max_length is not None and len(str_value) > max_length:
        return ValidationResult(
            False,
            f"{field_name} must be at most {max_length} characters"
        )

    if pattern and not re.match(pattern, str_value):
        return ValidationResult(
            False,
            f"{field_name} format is invalid"
        )

    return ValidationResult(True)


def validate_choice(
    value: Any,
    field_name: str,
    choices: List[Any]
) -> ValidationResult:
    """
    Validate value is in allowed choices.

    Args:
        value: Value to validate
        field_name: Field name for error messages
        choices: List of allowed values

    Returns:
        ValidationResult
    """
    if value not in choices:
        choices_str = ', '.join(str(c) for c in choices)
        return ValidationResult(
            False,
            f"{field_name} must be one of: {choices_str}"
        )

    return ValidationResult(True)


def validate_percentage(value: Any, field_name: str = "discount") -> ValidationResult:
    """Validate percentage value (0-100)"""
    return validate_strict_number(value, field_name, min_value=0, max_value=100)


def validate_email(value: Any, field_name: str = "email") -> ValidationResult:
    """Validate an email address"""
    return validate_string(value, field_name, max_length=254, pattern=EMAIL_PATTERN)


def validate_strict_number(
    value: Any,
    field_name: str,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
    exclusive_min: bool = False,
    integer: bool = False
) -> ValidationResult:
    """
    Validate an already-decoded JSON number.

    Strings and booleans are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        kind = "an integer" if integer else "a number"
        return ValidationResult(False, f"{field_name} must be {kind}")

    if not math.isfinite(value):
        return ValidationResult(False, f"{field_name} must be a finite number")

    if integer and value != int(value):
        return ValidationResult(False, f"{field_name} must be an integer")

    if min_value is not None:
        if exclusive_min and value <= min_value:
            return ValidationResult(False, f"{field_name} must be greater than {min_value}")
        if not exclusive_min and value < min_value:
            return ValidationResult(False, f"{field_name} must be at least {min_value}")

    if max_value is not None and value > max_value:
        return ValidationResult(False, f"{field_name} must be at most {max_value}")

    return ValidationResult(True)


def _collect(errors: List[str], result: ValidationResult):
    if not result:
        errors.append(result.error)


def _check_localized(payload: Dict, field: str, errors: List[str]):
    localized = payload.get(field)
    english = localized.get('en') if isinstance(localized, dict) else None
    if not isinstance(english, str) or not english.strip():
        errors.append(f"{field}.en is required")


def _check_optional_bool(payload: Dict, field: str, errors: List[str]):
    if field in payload and payload[field] is not None and not isinstance(payload[field], bool):
        errors.append(f"{field} must be a boolean")


def _present(payload: Dict, field: str) -> bool:
    return payload.get(field) is not None


# Catalog validators

def validate_service(payload: Any) -> List[str]:
    """
    Validate a service record before it is persisted.

    Every rule is evaluated; the returned list is empty when the record
    is valid.

    Args:
        payload: Decoded service record

    Returns:
        List of human-readable error messages
    """
    if not isinstance(payload, dict):
        return ["service must be an object"]

    errors: List[str] = []

    _check_localized(payload, 'name', errors)
    _check_localized(payload, 'description', errors)

    _collect(errors, validate_strict_number(payload.get('price'), 'price', min_value=0))
    _collect(errors, validate_strict_number(payload.get('duration'), 'duration', min_value=0, integer=True))

    calculation_type = payload.get('calculationType')
    _collect(errors, validate_choice(calculation_type, 'calculationType', CALCULATION_TYPES))

    if calculation_type in ('quantity', 'area'):
        unit = payload.get('unit')
        if not isinstance(unit, str) or not unit.strip():
            errors.append(f"unit is required for {calculation_type} type")

    # Bounds are checked whenever present, whatever the calculation type
    if _present(payload, 'maxQuantity'):
        _collect(errors, validate_strict_number(
            payload['maxQuantity'], 'maxQuantity', min_value=0, exclusive_min=True
        ))

    min_ok = max_ok = False
    if _present(payload, 'minArea'):
        min_result = validate_strict_number(payload['minArea'], 'minArea', min_value=0)
        _collect(errors, min_result)
        min_ok = min_result.is_valid
    if _present(payload, 'maxArea'):
        max_result = validate_strict_number(
            payload['maxArea'], 'maxArea', min_value=0, exclusive_min=True
        )
        _collect(errors, max_result)
        max_ok = max_result.is_valid
    if min_ok and max_ok and payload['minArea'] > payload['maxArea']:
        errors.append("minArea must not exceed maxArea")

    _check_optional_bool(payload, 'available', errors)

    if _present(payload, 'category') and not isinstance(payload['category'], str):
        errors.append("category must be a string")

    if errors:
        logger.debug(f"Service validation failed: {errors}")
    return errors


def validate_package(payload: Any, known_service_ids: Iterable[str]) -> List[str]:
    """
    Validate a package record against the current service catalog.

    Args:
        payload: Decoded package record
        known_service_ids: Ids of every existing service

    Returns:
        List of human-readable error messages
    """
    if not isinstance(payload, dict):
        return ["package must be an object"]

    errors: List[str] = []

    _check_localized(payload, 'name', errors)
    _check_localized(payload, 'description', errors)

    services = payload.get('services')
    if not isinstance(services, list):
        errors.append("services must be a list")
    else:
        known = set(known_service_ids)
        unknown = []
        for service_id in services:
            if not isinstance(service_id, str):
                if "services must contain only service ids" not in errors:
                    errors.append("services must contain only service ids")
            elif service_id not in known and service_id not in unknown:
                unknown.append(service_id)
        if unknown:
            errors.append(f"unknown service ids: {', '.join(str(s) for s in unknown)}")

    _collect(errors, validate_strict_number(payload.get('price'), 'price', min_value=0))
    _collect(errors, validate_percentage(payload.get('discount')))
    _collect(errors, validate_strict_number(payload.get('duration'), 'duration', min_value=0, integer=True))

    _check_optional_bool(payload, 'available', errors)

    if errors:
        logger.debug(f"Package validation failed: {errors}")
    return errors


def validate_portfolio_item(payload: Any) -> List[str]:
    """Validate a before/after gallery entry."""
    if not isinstance(payload, dict):
        return ["portfolio item must be an object"]

    errors: List[str] = []
    _check_localized(payload, 'title', errors)
    _check_localized(payload, 'description', errors)
    if _present(payload, 'category') and not isinstance(payload['category'], str):
        errors.append("category must be a string")
    _check_optional_bool(payload, 'featured', errors)
    return errors


def validate_contact_submission(payload: Dict) -> List[str]:
    """Validate a contact form or service request submission."""
    errors: List[str] = []
    _collect(errors, validate_string(payload.get('name'), 'name', max_length=120))
    _collect(errors, validate_email(payload.get('email')))
    _collect(errors, validate_string(payload.get('phone'), 'phone', max_length=40, required=False))
    _collect(errors, validate_string(payload.get('message'), 'message', max_length=5000, required=False))
    return errors
