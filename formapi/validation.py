"""Per-field validation used to gate a submission before it leaves the client.

Rules are checked in a fixed order and the first failing rule wins, so a
field never reports more than one message at a time.
"""
import datetime
import logging
import math
import re
from typing import Any, Dict, Optional

from formapi.models.form import FormConfig, FormFieldConfig

logger = logging.getLogger(__name__)


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def to_number(value: Any) -> Optional[float]:
    """Return `value` as a float, or None when it is not numeric."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def validate_field(field: FormFieldConfig, value: Any) -> Optional[str]:
    rules = field.validation_rules
    if rules is None:
        return None

    if rules.required and is_empty(value):
        return "This field is required"

    if field.type == "number":
        if not is_empty(value):
            number = to_number(value)
            if number is None:
                return "Value must be a number"
            # min/max length double as numeric bounds for number fields
            if rules.min_length and number < rules.min_length:
                return f"Minimum value is {rules.min_length}"
            if rules.max_length and number > rules.max_length:
                return f"Maximum value is {rules.max_length}"

    if isinstance(value, str):
        if rules.min_length and len(value) < rules.min_length:
            return f"Minimum length is {rules.min_length} characters"
        if rules.max_length and len(value) > rules.max_length:
            return f"Maximum length is {rules.max_length} characters"
        if rules.pattern and not re.search(rules.pattern, value):
            return "Invalid format"

    if rules.custom is not None:
        message = rules.custom(value)
        if message:
            return message

    if field.type == "date" and rules.required and not isinstance(value, datetime.date):
        return "Please select a date"

    return None


def validate_form(config: FormConfig, values: Dict[str, Any]) -> Dict[str, str]:
    """Validate every field of `config`, returning messages keyed by field id."""
    errors = {}
    for field in config.fields:
        message = validate_field(field, values.get(field.id))
        if message:
            errors[field.id] = message
    if errors:
        logger.debug("Form has invalid fields", extra={"fields": sorted(errors)})
    return errors


def initial_values(config: FormConfig) -> Dict[str, Any]:
    return {
        field.id: field.default_value
        for field in config.fields
        if field.default_value is not None
    }
