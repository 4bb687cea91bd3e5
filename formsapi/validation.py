"""
Field and schema validation.

``validate_field`` returns the first failing check's message for one field,
``validate_schema`` runs it over every field of a schema and collects all of
the errors. Both produce the same messages a form client shows inline.
"""
import logging
import math
import re
from datetime import date, datetime
from functools import lru_cache
from typing import Any, Mapping, List, Optional, Union

from formsapi.errors import MalformedPattern
from formsapi.models.form import FieldError, FormField, FormSchema

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NUMBER_RE = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")
INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def to_number(value: Any) -> Optional[Union[int, float]]:
    """Coerce a submitted value to a finite number, or None when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        # int()/float() also take "1_000" and non-ASCII digits
        if not NUMBER_RE.match(text):
            return None
        number = int(text) if INTEGER_RE.match(text) else float(text)
        return number if math.isfinite(number) else None
    return None


def format_number(number: Union[int, float]) -> str:
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def to_text(value: Any) -> str:
    """String form of a value as a form client would render it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def is_valid_email(value: str) -> bool:
    return EMAIL_RE.match(value) is not None


def is_valid_date(value: Any) -> bool:
    if isinstance(value, (date, datetime)):
        return True
    if not isinstance(value, str) or not value.strip():
        return False
    text = value.strip()
    try:
        date.fromisoformat(text)
        return True
    except ValueError:
        pass
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        datetime.fromisoformat(text)
    except ValueError:
        return False
    return True


@lru_cache(maxsize=256)
def _compiled(pattern: str) -> re.Pattern:
    # raised errors are not cached, a bad pattern warns on every use
    return re.compile(pattern)


def compile_pattern(pattern: str) -> Optional[re.Pattern]:
    try:
        return _compiled(pattern)
    except re.error as e:
        logger.warning(
            "Invalid regex pattern, skipping pattern validation",
            extra={"pattern": pattern, "error": str(e)},
        )
        return None


def validate_field(field: FormField, value: Any) -> Optional[str]:
    if is_empty(value):
        if field.required:
            return f"{field.label} is required"
        return None

    text = to_text(value)

    if field.type == "email":
        if not is_valid_email(text):
            return "Please enter a valid email address"

    elif field.type == "number":
        number = to_number(value)
        if number is None:
            return "Please enter a valid number"
        if field.min is not None and number < field.min:
            return f"Value must be at least {format_number(field.min)}"
        if field.max is not None and number > field.max:
            return f"Value must be at most {format_number(field.max)}"

    elif field.type == "date":
        if not is_valid_date(value):
            return "Please enter a valid date"

    elif field.type == "dropdown":
        if field.options is not None and text not in field.options:
            return "Please select a valid option"

    elif field.type in ("text", "password"):
        if field.min_length is not None and len(text) < field.min_length:
            return f"{field.label} must be at least {field.min_length} characters long"
        if field.max_length is not None and len(text) > field.max_length:
            return f"{field.label} must be at most {field.max_length} characters long"

    if field.validation and field.validation.pattern:
        regex = compile_pattern(field.validation.pattern)
        if regex is not None and not regex.search(text):
            return field.validation.message or "Invalid format"

    return None


def validate_schema(schema: FormSchema, data: Mapping[str, Any]) -> List[FieldError]:
    errors = []
    for field in schema.fields:
        message = validate_field(field, data.get(field.name))
        if message is not None:
            errors.append(FieldError(field=field.name, message=message))
    return errors


def check_patterns(schema: FormSchema) -> None:
    """Raise MalformedPattern for the first field whose pattern does not compile."""
    for field in schema.fields:
        if field.validation and field.validation.pattern:
            try:
                re.compile(field.validation.pattern)
            except re.error as e:
                raise MalformedPattern(field.name, field.validation.pattern) from e
