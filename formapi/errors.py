from typing import Any, Dict, List


class SchemaValidationError(Exception):
    """Submitted values (or the schema itself) were rejected; maps to a 400."""

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__(f"{len(errors)} schema violation(s)")
        self.errors = errors


class UnsupportedPropertyType(SchemaValidationError):
    def __init__(self, key: str, type_: Any):
        super().__init__([{
            "path": key,
            "message": f"Unsupported property type {type_!r}",
            "validator": "type",
            "schema_path": f"properties/{key}/type",
        }])
        self.key = key
        self.type = type_


class PersistenceError(Exception):
    """Writing a record failed; maps to a generic 500."""
