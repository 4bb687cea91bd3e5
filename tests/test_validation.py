import logging

import pytest

from formsapi.errors import MalformedPattern
from formsapi.models.form import FormField, FormSchema
from formsapi.validation import check_patterns, validate_field, validate_schema


def make_field(**kwargs) -> FormField:
    defaults = {"name": "field", "type": "text", "label": "Field"}
    defaults.update(kwargs)
    return FormField.model_validate(defaults)


@pytest.mark.parametrize("field_type", ["text", "email", "password", "date", "number", "dropdown"])
@pytest.mark.parametrize("value", [None, ""])
def test_required_empty_value_is_error(field_type, value):
    field = make_field(type=field_type, label="Name", required=True, options=["a"],
                       validation={"pattern": "^x$"})
    assert validate_field(field, value) == "Name is required"


@pytest.mark.parametrize("field_type", ["text", "email", "password", "date", "number", "dropdown"])
@pytest.mark.parametrize("value", [None, ""])
def test_optional_empty_value_is_valid(field_type, value):
    field = make_field(type=field_type, minLength=5, min=10, options=["a"], validation={"pattern": "^x$"})
    assert validate_field(field, value) is None


def test_age_scenario():
    field = make_field(name="age", type="number", label="Age", min=13, max=120, required=True)

    assert validate_field(field, 10) == "Value must be at least 13"
    assert validate_field(field, "abc") == "Please enter a valid number"
    assert validate_field(field, 45) is None


def test_number_max_and_numeric_strings():
    field = make_field(type="number", min=0, max=5.5)

    assert validate_field(field, "3") is None
    assert validate_field(field, "6") == "Value must be at most 5.5"
    assert validate_field(field, "inf") == "Please enter a valid number"
    assert validate_field(field, True) == "Please enter a valid number"


@pytest.mark.parametrize("value", ["1_000", "١٢", "１２", "0x10", "1e", "."])
def test_number_accepts_only_plain_ascii_literals(value):
    field = make_field(type="number")
    assert validate_field(field, value) == "Please enter a valid number"


@pytest.mark.parametrize("value", [" 42 ", "-7", "+3.5", ".5", "5.", "1e3", "2.5E-1"])
def test_number_plain_literals(value):
    assert validate_field(make_field(type="number"), value) is None


def test_email():
    field = make_field(type="email")

    assert validate_field(field, "jane@example.com") is None
    assert validate_field(field, "jane@example") == "Please enter a valid email address"
    assert validate_field(field, "ja ne@example.com") == "Please enter a valid email address"
    assert validate_field(field, "a@b@c.com") == "Please enter a valid email address"


def test_date():
    field = make_field(type="date")

    assert validate_field(field, "1995-05-15") is None
    assert validate_field(field, "2024-01-31T10:00:00.000Z") is None
    assert validate_field(field, "2024-02-30") == "Please enter a valid date"
    assert validate_field(field, "yesterday") == "Please enter a valid date"


def test_dropdown():
    field = make_field(type="dropdown", options=["Male", "Female"])

    assert validate_field(field, "Male") is None
    assert validate_field(field, "male") == "Please select a valid option"
    assert validate_field(make_field(type="dropdown"), "anything") is None


def test_text_length():
    field = make_field(type="password", label="Password", minLength=8, maxLength=10)

    assert validate_field(field, "short") == "Password must be at least 8 characters long"
    assert validate_field(field, "much-too-long-secret") == "Password must be at most 10 characters long"
    assert validate_field(field, "just-right") is None


def test_irrelevant_constraints_are_ignored():
    field = make_field(type="text", options=["only"], min=100, max=1)
    assert validate_field(field, "free text") is None


def test_pattern_runs_after_type_check():
    field = make_field(
        type="text", minLength=3, validation={"pattern": "^[0-9]+$", "message": "Digits only"}
    )

    assert validate_field(field, "12") == "Field must be at least 3 characters long"
    assert validate_field(field, "12a") == "Digits only"
    assert validate_field(field, "123") is None


def test_pattern_default_message_and_number_value():
    field = make_field(type="number", validation={"pattern": "^[0-9]{2}$"})

    assert validate_field(field, 12) is None
    assert validate_field(field, 12.0) is None
    assert validate_field(field, 123) == "Invalid format"


def test_malformed_pattern_fails_open(caplog):
    field = make_field(validation={"pattern": "([a-z", "message": "never shown"})

    with caplog.at_level(logging.WARNING, logger="formsapi.validation"):
        assert validate_field(field, "anything") is None
    assert "Invalid regex pattern" in caplog.text


def test_malformed_pattern_warns_on_every_use(caplog):
    field = make_field(validation={"pattern": "(unclosed-[0-9"})

    with caplog.at_level(logging.WARNING, logger="formsapi.validation"):
        assert validate_field(field, "first") is None
        assert "Invalid regex pattern" in caplog.text
        caplog.clear()

        assert validate_field(field, "second") is None
        assert "Invalid regex pattern" in caplog.text


def test_check_patterns_raises_for_malformed_pattern():
    schema = FormSchema.model_validate(
        {"name": "strict", "fields": [{"name": "a", "type": "text", "label": "A",
                                       "validation": {"pattern": "(unclosed"}}]}
    )
    with pytest.raises(MalformedPattern) as excinfo:
        check_patterns(schema)
    assert excinfo.value.field == "a"


def test_schema_collects_all_errors_in_order():
    schema = FormSchema.model_validate(
        {
            "name": "t",
            "fields": [
                {"name": "a", "type": "text", "label": "a", "required": True},
                {"name": "b", "type": "text", "label": "b", "required": True},
            ],
        }
    )

    errors = validate_schema(schema, {})

    assert [(e.field, e.message) for e in errors] == [("a", "a is required"), ("b", "b is required")]


def test_schema_ignores_unknown_keys(registration_schema):
    schema = FormSchema.model_validate(registration_schema)
    data = {"firstName": "Jo", "email": "jo@example.com", "age": 30, "gender": "Other", "extra": object()}

    assert validate_schema(schema, data) == []


def test_schema_valid_iff_every_field_valid(registration_schema):
    schema = FormSchema.model_validate(registration_schema)
    data = {"firstName": "J", "email": "jo@example.com", "age": "12", "gender": "Other", "phoneNumber": "12"}

    per_field = {f.name: validate_field(f, data.get(f.name)) for f in schema.fields}
    errors = validate_schema(schema, data)

    assert {e.field: e.message for e in errors} == {k: v for k, v in per_field.items() if v is not None}
    assert [e.field for e in errors] == ["firstName", "age", "phoneNumber"]


def test_schema_rejects_duplicate_field_names():
    with pytest.raises(ValueError):
        FormSchema.model_validate(
            {"name": "dupes", "fields": [{"name": "a", "type": "text", "label": "A"},
                                         {"name": "a", "type": "email", "label": "A2"}]}
        )


def test_schema_rejects_too_many_fields():
    fields = [{"name": f"f{i}", "type": "text", "label": f"F{i}"} for i in range(21)]
    with pytest.raises(ValueError):
        FormSchema.model_validate({"name": "big", "fields": fields})
