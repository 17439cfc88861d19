import logging

from fastapi import APIRouter
from formapi.compiler import validate_values
from formapi.models.record import Submission
from formapi.storage import build_storage_definition, save_record

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", status_code=200)
async def validate_submission(submission: Submission):
    """
    Payload:
    {
      "values": { "name": "Al", "age": 30, ... },
      "schema": { "type": "object", "properties": {...}, "required": [...] }
    }
    400 with {"errors": [...]} when the values do not match the schema,
    500 with {"error": ...} when the record cannot be written.
    """
    schema = submission.schema_
    validate_values(schema, submission.values)

    # built per request; nothing outside this call sees it
    definition = build_storage_definition(schema)
    record_id = await save_record(definition, submission.values)

    logger.info(f"Accepted submission as record {record_id}")
    return {"message": "Data saved successfully", "record_id": record_id}
