#!/usr/bin/env python3
"""
Integration tests for the JSON schema model.
"""
import pytest

# autopep8: off
from utils import setup
setup()
import json_schema_model
from json_schema_model import (
    AllOfSchema,
    AnyOfSchema,
    ArraySchema,
    BooleanSchema,
    EnumSchema,
    ErrorCode,
    IntegerSchema,
    Invalid,
    MissingField,
    NotSchema,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    OneOfSchema,
    OutOfRange,
    RangeKind,
    StringSchema,
    UniqueViolation,
    Valid,
    ValidationContext,
    ValidationException,
    Validator,
    parse_schema,
    to_json_schema,
)
# autopep8: on


@pytest.fixture
def config_schema():
    """Schema for a build configuration keyed by project name."""
    return parse_schema({
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "title": "Project Configuration",
        "type": "object",
        "additionalProperties": {
            "type": "object",
            "properties": {
                "library": {"type": "boolean"},
                "executable": {"type": "boolean"},
                "includes": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "platform": {"type": "string", "enum": ["any", "windows", "linux"]},
                            "public": {"type": "array", "items": {"type": "string"}},
                            "private": {"type": "array", "items": {"type": "string"}}
                        },
                        "required": ["platform"]
                    }
                }
            }
        }
    })


@pytest.fixture
def valid_config():
    """Create a valid configuration for testing."""
    return {
        "test_project": {
            "library": True,
            "executable": False,
            "includes": [
                {
                    "platform": "any",
                    "public": ["include/header.h"]
                }
            ]
        }
    }


@pytest.fixture
def invalid_config():
    """Create an invalid configuration for testing."""
    return {
        "test_project": {
            "library": "yes",
            "executable": False,
            "includes": [
                {
                    "public": ["include/header.h"]
                },
                {
                    "platform": "macos"
                }
            ]
        }
    }


def test_successful_validation(config_schema, valid_config):
    assert Validator().validate(config_schema, valid_config) == Valid()


def test_config_errors(config_schema, invalid_config):
    result = Validator().validate(config_schema, invalid_config)
    assert isinstance(result, Invalid)
    assert [(error.path, error.code) for error in result.errors] == [
        ("/test_project/library", ErrorCode.TYPE_MISMATCH),
        ("/test_project/includes/0", ErrorCode.REQUIRED_PROPERTY_MISSING),
        ("/test_project/includes/1/platform", ErrorCode.ENUM_MISMATCH),
    ]


class TestScenarios:
    """End-to-end validation scenarios."""

    def test_missing_required_name(self):
        schema = ObjectSchema(properties={"name": StringSchema(min_length=1)}, required=("name",))
        assert Validator().validate(schema, {}) == Invalid((MissingField("/", name="name"),))

    def test_duplicate_items(self):
        schema = ArraySchema(items=StringSchema(), unique_items=True)
        assert Validator().validate(schema, ["a", "a"]) == Invalid((UniqueViolation("/"),))

    def test_one_of_circle(self):
        circle = ObjectSchema(
            properties={"type": EnumSchema.of("circle"), "radius": NumberSchema(minimum=0)},
            required=("type", "radius"),
        )
        rectangle = ObjectSchema(
            properties={
                "type": EnumSchema.of("rectangle"),
                "width": NumberSchema(minimum=0),
                "height": NumberSchema(minimum=0),
            },
            required=("type", "width", "height"),
        )
        result = Validator().validate(OneOfSchema((circle, rectangle)), {"type": "circle", "radius": 5})
        assert result == Valid()

    def test_integer_below_minimum(self):
        result = Validator().validate(IntegerSchema(minimum=0, maximum=25), -5)
        assert not result.valid
        assert OutOfRange("/", kind=RangeKind.MINIMUM, bound=0, actual=-5) in result.errors

    def test_path_accuracy(self):
        schema = ObjectSchema.of(address=ObjectSchema.of(street=StringSchema(min_length=1)))
        result = Validator().validate(schema, {"address": {"street": ""}})
        assert len(result.errors) == 1
        assert result.errors[0].path == "/address/street"

    def test_escaped_paths(self):
        schema = ObjectSchema.of(**{"a/b": ObjectSchema.of(**{"m~n": IntegerSchema()})})
        result = Validator().validate(schema, {"a/b": {"m~n": "x"}})
        assert result.errors[0].path == "/a~1b/m~0n"


class TestProperties:
    """Properties that hold across schemas and values."""

    VALUES = [None, False, True, 0, -1, 2.5, "", "a", "hello world", [], [1, 1], ["a", None],
              {}, {"a": 1}, {"a": None, "b": [1, {"c": "d"}]}]

    SCHEMAS = [
        StringSchema(min_length=2, pattern="^h"),
        IntegerSchema(minimum=0, multiple_of=2),
        NumberSchema(exclusive_maximum=1).as_nullable(),
        BooleanSchema(const=True),
        NullSchema(),
        EnumSchema.of("a", 1, None),
        ArraySchema(items=IntegerSchema(), unique_items=True, max_items=1),
        ObjectSchema.of(required=("a",), a=IntegerSchema()),
        AnyOfSchema((StringSchema(), ArraySchema())),
        AllOfSchema((ObjectSchema(), ObjectSchema(min_properties=1))),
        OneOfSchema((NumberSchema(), IntegerSchema())),
        NotSchema(NullSchema()),
    ]

    def test_totality(self):
        validator = Validator()
        for schema in self.SCHEMAS:
            for value in self.VALUES:
                result = validator.validate(schema, value)
                assert isinstance(result, (Valid, Invalid))
                assert result.valid == (len(result.errors) == 0)

    def test_required_field(self):
        schema = ObjectSchema(required=("a",))
        assert Validator().validate(schema, {}).errors == (MissingField("/", name="a"),)
        for value in self.VALUES:
            result = Validator().validate(schema, {"a": value})
            assert MissingField("/", name="a") not in result.errors

    def test_all_of_and_not_laws(self):
        validator = Validator()
        for first in self.SCHEMAS[:6]:
            for second in self.SCHEMAS[6:]:
                for value in self.VALUES:
                    both = validator.validate(AllOfSchema((first, second)), value).valid
                    assert both == (validator.validate(first, value).valid
                                    and validator.validate(second, value).valid)
                    assert validator.validate(NotSchema(first), value).valid != \
                        validator.validate(first, value).valid

    def test_one_of_overlap(self):
        schema = OneOfSchema((NumberSchema(), IntegerSchema()))
        assert not Validator().validate(schema, 3).valid
        assert Validator().validate(schema, 3.5).valid

    def test_serialization_stable(self):
        for schema in self.SCHEMAS:
            assert to_json_schema(schema) == to_json_schema(schema)
            assert parse_schema(to_json_schema(schema)) == schema


class TestEntryPoints:
    """Tests for the convenience entry points."""

    def test_schema_validate(self):
        schema = StringSchema(max_length=3)
        assert schema.validate("abc").valid
        assert schema.validate("abcd").errors[0].code == ErrorCode.STRING_TOO_LONG

    def test_package_validate(self):
        result = json_schema_model.validate(IntegerSchema(), "1")
        assert result.errors[0].code == ErrorCode.TYPE_MISMATCH

    def test_validate_with_context(self):
        context = ValidationContext().with_property("items").with_index(3)
        result = IntegerSchema().validate("x", context)
        assert result.errors[0].path == "/items/3"

    def test_raise_if_invalid(self):
        StringSchema().validate("ok").raise_if_invalid()
        with pytest.raises(ValidationException) as exc_info:
            StringSchema().validate(5).raise_if_invalid()
        assert exc_info.value.errors[0].path == "/"

    def test_validator_is_reusable(self):
        validator = Validator()
        schema = ObjectSchema.of(required=("id",), id=IntegerSchema())
        results = [validator.validate(schema, {"id": n}) for n in range(3)]
        assert all(result.valid for result in results)
        assert not validator.validate(schema, {}).valid


if __name__ == "__main__":
    pytest.main(["-xvs", __file__])
