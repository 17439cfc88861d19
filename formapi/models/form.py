from pydantic import BaseModel, Field, model_validator
from typing import Any, Callable, List, Literal, Optional

FieldType = Literal["text", "textarea", "select", "checkbox", "radio", "date", "image", "number"]


class FieldOption(BaseModel):
    label: str
    value: str


class ValidationRules(BaseModel):
    type: Optional[str] = None
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    # returns an error message, or None when the value is acceptable
    custom: Optional[Callable[[Any], Optional[str]]] = Field(default=None, exclude=True)


class FormFieldConfig(BaseModel):
    id: str
    type: FieldType
    label: str
    default_value: Any = None
    validation_rules: Optional[ValidationRules] = None
    options: Optional[List[FieldOption]] = None
    info: Optional[str] = None


class Layout(BaseModel):
    type: Literal["vertical", "horizontal"] = "vertical"
    columns: Optional[int] = None


class FormConfig(BaseModel):
    fields: List[FormFieldConfig]
    layout: Layout = Field(default_factory=Layout)

    @model_validator(mode="after")
    def check_unique_ids(self):
        seen = set()
        for field in self.fields:
            if field.id in seen:
                raise ValueError(f"Duplicate field id '{field.id}'")
            seen.add(field.id)
        return self
