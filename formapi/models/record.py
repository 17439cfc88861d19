from pydantic import BaseModel, Field
from typing import List, Dict, Any, Optional


class Submission(BaseModel):
    values: Dict[str, Any]
    schema_: Dict[str, Any] = Field(alias="schema")

    model_config = {"populate_by_name": True}


class Record(BaseModel):
    id: Optional[int] = None
    schema_id: int
    values: Dict[str, Any]
    created_at: Optional[str] = None  # ISO format date string
    updated_at: Optional[str] = None  # ISO format date string


class RecordPage(BaseModel):
    records: List[Record]
    page: int
    per_page: int
    total: int
    total_pages: int


class UploadedFile(BaseModel):
    filename: str
    content_type: str
    url: str
    size: int
