import logging
import math
from typing import Any, Dict, List

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError, ValidationError

from formapi.errors import SchemaValidationError

logger = logging.getLogger(__name__)


def format_violation(err: ValidationError) -> Dict[str, Any]:
    return {
        "path": ".".join(str(p) for p in err.absolute_path),
        "message": err.message,
        "validator": err.validator,
        "schema_path": "/".join(str(p) for p in err.absolute_schema_path),
    }


def compile_schema(schema: Dict[str, Any]) -> Draft7Validator:
    try:
        Draft7Validator.check_schema(schema)
    except SchemaError as e:
        logger.info("Rejected malformed schema: %s", e.message)
        raise SchemaValidationError([{
            "path": "",
            "message": f"Invalid schema: {e.message}",
            "validator": e.validator,
            "schema_path": "/".join(str(p) for p in e.absolute_schema_path),
        }]) from e
    return Draft7Validator(schema)


def non_finite_violations(value: Any, path: str = "") -> List[Dict[str, Any]]:
    """NaN and Infinity satisfy the "number" type but cannot be stored."""
    if isinstance(value, float) and not math.isfinite(value):
        return [{
            "path": path,
            "message": f"{value!r} is not a finite number",
            "validator": "type",
            "schema_path": "",
        }]
    if isinstance(value, dict):
        items = value.items()
    elif isinstance(value, list):
        items = enumerate(value)
    else:
        return []
    violations = []
    for key, item in items:
        violations.extend(non_finite_violations(item, f"{path}.{key}" if path else str(key)))
    return violations


def collect_violations(validator: Draft7Validator, values: Dict[str, Any]) -> List[Dict[str, Any]]:
    errors = sorted(validator.iter_errors(values), key=lambda e: list(map(str, e.absolute_path)))
    return [format_violation(e) for e in errors] + non_finite_violations(values)


def validate_values(schema: Dict[str, Any], values: Dict[str, Any]) -> Draft7Validator:
    """Compile `schema` and check `values` against it.

    Raises SchemaValidationError carrying every violation; nothing is
    accepted partially.
    """
    validator = compile_schema(schema)
    violations = collect_violations(validator, values)
    if violations:
        logger.info("Submission failed schema validation", extra={"violations": len(violations)})
        raise SchemaValidationError(violations)
    return validator
