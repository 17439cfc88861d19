"""Storage definitions and the record store.

A StorageDefinition is derived from the accepted declarative schema for a
single request and handed to the write explicitly. Every stored value is
tagged with the kind of column it was written as:

    {"name": {"kind": "text", "value": "Al"}, "age": {"kind": "number", "value": 30}}

Records also point at the schema they were written under, so older records
remain readable after the form changes.
"""
import datetime
import hashlib
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import sqlalchemy

from formapi.database import database, formrecord_table, formschema_table
from formapi.errors import PersistenceError, UnsupportedPropertyType
from formapi.validation import to_number

logger = logging.getLogger(__name__)

KIND_BY_TYPE = {
    "string": "text",
    "integer": "number",
    "number": "number",
    "boolean": "flag",
    "object": "blob",
}


@dataclass(frozen=True)
class StorageColumn:
    name: str
    kind: str
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None

    def cast(self, value: Any) -> Any:
        if self.kind == "text":
            if isinstance(value, (dict, list)):
                raise PersistenceError(f"Cannot store {type(value).__name__} in text column '{self.name}'")
            if isinstance(value, bool):
                text = "true" if value else "false"
            else:
                text = str(value)
            if self.min_length and len(text) < self.min_length:
                raise PersistenceError(f"'{self.name}' is shorter than {self.min_length}")
            if self.max_length and len(text) > self.max_length:
                raise PersistenceError(f"'{self.name}' is longer than {self.max_length}")
            return text
        if self.kind == "number":
            number = to_number(value)
            if number is None:
                raise PersistenceError(f"Cannot store {value!r} in number column '{self.name}'")
            return int(number) if number.is_integer() else number
        if self.kind == "flag":
            if isinstance(value, bool):
                return value
            if value in ("true", "false"):
                return value == "true"
            raise PersistenceError(f"Cannot store {value!r} in flag column '{self.name}'")
        return value


@dataclass(frozen=True)
class StorageDefinition:
    schema: Dict[str, Any]
    columns: Dict[str, StorageColumn] = field(default_factory=dict)

    @property
    def fingerprint(self) -> str:
        return schema_fingerprint(self.schema)

    def tag(self, values: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
        """Cast `values` against the columns, dropping undeclared keys."""
        dropped = sorted(set(values) - set(self.columns))
        if dropped:
            logger.debug("Dropping undeclared keys %s", dropped)

        tagged = {}
        for name, column in self.columns.items():
            value = values.get(name)
            if value is None:
                if column.required:
                    raise PersistenceError(f"'{name}' is required")
                continue
            tagged[name] = {"kind": column.kind, "value": column.cast(value)}
        return tagged


def schema_fingerprint(schema: Dict[str, Any]) -> str:
    canonical = json.dumps(schema, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def build_storage_definition(schema: Dict[str, Any]) -> StorageDefinition:
    required = set(schema.get("required", []))
    columns = {}
    for key, prop in schema.get("properties", {}).items():
        # boolean sub-schemas are valid draft 7 but declare no column type
        if not isinstance(prop, dict):
            raise UnsupportedPropertyType(key, prop)
        type_ = prop.get("type")
        kind = KIND_BY_TYPE.get(type_) if isinstance(type_, str) else None
        if kind is None:
            raise UnsupportedPropertyType(key, type_)
        columns[key] = StorageColumn(
            name=key,
            kind=kind,
            required=key in required,
            min_length=prop.get("minLength"),
            max_length=prop.get("maxLength"),
        )
    return StorageDefinition(schema=schema, columns=columns)


def untag(data: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    return {key: cell["value"] for key, cell in data.items()}


def isoformat(value: Optional[datetime.datetime]) -> Optional[str]:
    return value.isoformat() if value else None


async def get_or_create_schema(definition: StorageDefinition) -> int:
    fingerprint = definition.fingerprint
    query = formschema_table.select().where(formschema_table.c.fingerprint == fingerprint)
    row = await database.fetch_one(query)
    if row:
        return row.id

    logger.info("Storing new schema %s", fingerprint[:12])
    query = formschema_table.insert().values(
        fingerprint=fingerprint,
        schema=definition.schema,
        created_at=datetime.datetime.now(datetime.timezone.utc),
    )
    return await database.execute(query)


async def save_record(definition: StorageDefinition, values: Dict[str, Any]) -> int:
    """Write `values` under `definition` and return the new record id."""
    data = definition.tag(values)
    now = datetime.datetime.now(datetime.timezone.utc)
    try:
        async with database.transaction():
            schema_id = await get_or_create_schema(definition)
            query = formrecord_table.insert().values(
                schema_id=schema_id,
                data=data,
                created_at=now,
                updated_at=now,
            )
            record_id = await database.execute(query)
    except Exception as e:
        logger.exception("Failed to save record")
        raise PersistenceError("Database write failed") from e
    logger.debug("Saved record %s under schema %s", record_id, schema_id)
    return record_id


def record_from_row(row) -> Dict[str, Any]:
    return {
        "id": row.id,
        "schema_id": row.schema_id,
        "values": untag(row.data),
        "created_at": isoformat(row.created_at),
        "updated_at": isoformat(row.updated_at),
    }


async def get_record(record_id: int) -> Optional[Dict[str, Any]]:
    query = formrecord_table.select().where(formrecord_table.c.id == record_id)
    row = await database.fetch_one(query)
    return record_from_row(row) if row else None


async def get_schema(schema_id: int) -> Optional[Dict[str, Any]]:
    query = formschema_table.select().where(formschema_table.c.id == schema_id)
    row = await database.fetch_one(query)
    return row.schema if row else None


async def list_records(page: int = 1, per_page: int = 10) -> Dict[str, Any]:
    offset = (page - 1) * per_page
    count_query = sqlalchemy.select(sqlalchemy.func.count()).select_from(formrecord_table)
    total = await database.fetch_val(count_query)

    query = (
        formrecord_table.select()
        .order_by(formrecord_table.c.id.desc())
        .limit(per_page)
        .offset(offset)
    )
    rows = await database.fetch_all(query)
    return {
        "records": [record_from_row(row) for row in rows],
        "page": page,
        "per_page": per_page,
        "total": total,
        "total_pages": (total + per_page - 1) // per_page,
    }
