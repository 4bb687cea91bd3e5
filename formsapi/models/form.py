import math
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from formsapi.config import config

FieldType = Literal["text", "email", "password", "date", "number", "dropdown"]


class FieldValidation(BaseModel):
    pattern: Optional[str] = None
    message: Optional[str] = Field(default=None, max_length=200)


class FormField(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=50, pattern=r"^[a-zA-Z][a-zA-Z0-9_]*$")
    type: FieldType
    label: str = Field(min_length=1, max_length=100)
    required: bool = False
    min_length: Optional[int] = Field(default=None, alias="minLength", ge=0)
    max_length: Optional[int] = Field(default=None, alias="maxLength", ge=1)
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    options: Optional[List[str]] = None
    placeholder: Optional[str] = Field(default=None, max_length=200)
    validation: Optional[FieldValidation] = None


class FormSchema(BaseModel):
    id: Optional[int] = None
    name: str = Field(min_length=1, max_length=100, pattern=r"^[a-zA-Z0-9_-]+$")
    description: Optional[str] = Field(default=None, max_length=500)
    fields: List[FormField]

    @field_validator("fields")
    @classmethod
    def check_fields(cls, fields: List[FormField]) -> List[FormField]:
        if not fields:
            raise ValueError("At least one field is required")
        if len(fields) > config.MAX_FORM_FIELDS:
            raise ValueError(f"Cannot have more than {config.MAX_FORM_FIELDS} fields")
        seen = set()
        for f in fields:
            if f.name in seen:
                raise ValueError(f"Duplicate field name '{f.name}'")
            seen.add(f.name)
        return fields


class FieldError(BaseModel):
    field: str
    message: str


def _has_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, list):
        return any(_has_non_finite(v) for v in value)
    return False


class SubmissionIn(BaseModel):
    data: Dict[str, Any]

    @field_validator("data")
    @classmethod
    def check_not_empty(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        if not data:
            raise ValueError("Form data cannot be empty")
        # json.loads accepts NaN and Infinity literals
        if _has_non_finite(data):
            raise ValueError("Form data cannot contain NaN or Infinity")
        return data


class Submission(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    data: Dict[str, Any]
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class ValidateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schema_name: Optional[str] = Field(default=None, alias="schemaName")
    data: Optional[Dict[str, Any]] = None
