from fastapi import APIRouter
from formapi.forms import contact_form
from formapi.schema import generate_schema

router = APIRouter()


@router.get("", status_code=200)
async def get_form():
    # custom predicates stay server-side; they are excluded from the dump
    return {
        "config": contact_form.model_dump(),
        "schema": generate_schema(contact_form),
    }
