#!/usr/bin/env python3
"""
Tests for object-specific validation features.
"""
import pytest

# autopep8: off
from utils import setup
setup()
from json_schema_model import (
    AdditionalProperty,
    BooleanSchema,
    ErrorCode,
    IntegerSchema,
    MaxPropertiesViolation,
    MinPropertiesViolation,
    MissingField,
    ObjectSchema,
    PatternMismatch,
    SchemaError,
    StringSchema,
    TypeMismatch,
    UnevaluatedProperty,
    Validator,
)
# autopep8: on


class TestObjectValidation:
    """Tests for ObjectSchema validation."""

    def setup_method(self):
        """Set up the test environment."""
        self.validator = Validator()

    def test_type(self):
        result = self.validator.validate(ObjectSchema(), [1, 2])
        assert result.errors == (TypeMismatch("/", expected="object", actual="array"),)

    def test_required(self):
        """ObjectSchema{name: minLength 1, required name} against {}."""
        schema = ObjectSchema(properties={"name": StringSchema(min_length=1)}, required=("name",))
        result = self.validator.validate(schema, {})
        assert result.errors == (MissingField("/", name="name"),)

    def test_required_declaration_order(self):
        schema = ObjectSchema(required=("b", "a", "c"))
        result = self.validator.validate(schema, {"a": 1})
        assert [error.name for error in result.errors] == ["b", "c"]

    def test_required_without_property_schema(self):
        schema = ObjectSchema(required=("id",))
        assert self.validator.validate(schema, {"id": None}).valid

    def test_properties(self):
        schema = ObjectSchema.of(
            required=("name",),
            name=StringSchema(min_length=1),
            age=IntegerSchema(minimum=0),
        )
        assert self.validator.validate(schema, {"name": "Alice", "age": 30}).valid
        assert self.validator.validate(schema, {"name": "Alice"}).valid

        result = self.validator.validate(schema, {"name": "", "age": -1})
        assert [(error.path, error.code) for error in result.errors] == [
            ("/name", ErrorCode.STRING_TOO_SHORT),
            ("/age", ErrorCode.NUMBER_TOO_SMALL),
        ]

    def test_property_count(self):
        schema = ObjectSchema(min_properties=1, max_properties=2)
        assert self.validator.validate(schema, {"a": 1}).valid

        result = self.validator.validate(schema, {})
        assert result.errors == (MinPropertiesViolation("/", min=1, actual=0),)

        result = self.validator.validate(schema, {"a": 1, "b": 2, "c": 3})
        assert result.errors == (MaxPropertiesViolation("/", max=2, actual=3),)

    def test_additional_properties_disallowed(self):
        schema = ObjectSchema(properties={"a": StringSchema()}, additional_properties=False)
        assert self.validator.validate(schema, {"a": "x"}).valid

        result = self.validator.validate(schema, {"a": "x", "b": 1, "c": 2})
        assert result.errors == (
            AdditionalProperty("/", name="b"),
            AdditionalProperty("/", name="c"),
        )
        assert result.errors[0].code == ErrorCode.ADDITIONAL_PROPERTY_NOT_ALLOWED

    def test_additional_properties_schema(self):
        schema = ObjectSchema(properties={"a": StringSchema()}, additional_properties=IntegerSchema())
        assert self.validator.validate(schema, {"a": "x", "b": 1}).valid

        result = self.validator.validate(schema, {"a": "x", "b": "y"})
        assert result.errors == (TypeMismatch("/b", expected="integer", actual="string"),)

    def test_additional_properties_allowed_by_default(self):
        schema = ObjectSchema(properties={"a": StringSchema()})
        assert self.validator.validate(schema, {"a": "x", "anything": [1]}).valid

    def test_pattern_properties(self):
        schema = ObjectSchema(
            properties={"id": StringSchema()},
            pattern_properties={"^x-": StringSchema(), "^n_": IntegerSchema()},
            additional_properties=False,
        )
        assert self.validator.validate(schema, {"id": "1", "x-trace": "t", "n_count": 3}).valid

        result = self.validator.validate(schema, {"id": "1", "n_count": "3", "other": True})
        assert result.errors == (
            TypeMismatch("/n_count", expected="integer", actual="string"),
            AdditionalProperty("/", name="other"),
        )

    def test_pattern_properties_skip_declared_properties(self):
        schema = ObjectSchema(
            properties={"x-id": StringSchema()},
            pattern_properties={"^x-": IntegerSchema()},
        )
        assert self.validator.validate(schema, {"x-id": "abc"}).valid

    def test_every_matching_pattern_applies(self):
        schema = ObjectSchema(pattern_properties={
            "^a": StringSchema(min_length=3),
            "b$": StringSchema(max_length=1),
        })
        result = self.validator.validate(schema, {"ab": "xy"})
        assert [error.code for error in result.errors] == [
            ErrorCode.STRING_TOO_SHORT,
            ErrorCode.STRING_TOO_LONG,
        ]

    def test_property_names(self):
        schema = ObjectSchema(property_names=StringSchema(pattern="^[a-z]+$"))
        assert self.validator.validate(schema, {"abc": 1, "def": 2}).valid

        result = self.validator.validate(schema, {"abc": 1, "Bad": 2})
        assert result.errors == (PatternMismatch("/Bad", pattern="^[a-z]+$", actual="Bad"),)

    def test_property_names_length(self):
        schema = ObjectSchema(property_names=StringSchema(max_length=3))
        result = self.validator.validate(schema, {"toolong": 1})
        assert result.errors[0].code == ErrorCode.STRING_TOO_LONG

    def test_dependent_required(self):
        schema = ObjectSchema(dependent_required={"credit_card": ("billing_address", "cvv")})
        assert self.validator.validate(schema, {"name": "x"}).valid
        assert self.validator.validate(schema, {"credit_card": 1, "billing_address": "a", "cvv": 1}).valid

        result = self.validator.validate(schema, {"credit_card": 1, "cvv": 123})
        assert result.errors == (MissingField("/", name="billing_address"),)

    def test_dependent_schemas(self):
        schema = ObjectSchema(
            properties={"name": StringSchema()},
            dependent_schemas={
                "credit_card": ObjectSchema(required=("billing_address",)),
            },
        )
        assert self.validator.validate(schema, {"name": "x"}).valid

        result = self.validator.validate(schema, {"credit_card": 1})
        assert result.errors == (MissingField("/", name="billing_address"),)

    def test_unevaluated_properties(self):
        schema = ObjectSchema(
            properties={"a": StringSchema()},
            pattern_properties={"^x-": BooleanSchema()},
            unevaluated_properties=False,
        )
        assert self.validator.validate(schema, {"a": "1", "x-flag": True}).valid

        result = self.validator.validate(schema, {"a": "1", "b": 2})
        assert result.errors == (UnevaluatedProperty("/", name="b"),)
        assert result.errors[0].code == ErrorCode.UNEVALUATED_PROPERTY

    def test_unevaluated_properties_with_additional_schema(self):
        schema = ObjectSchema(additional_properties=IntegerSchema(), unevaluated_properties=False)
        assert self.validator.validate(schema, {"a": 1}).valid

    def test_nested_paths(self):
        schema = ObjectSchema(properties={
            "user": ObjectSchema(properties={"address": ObjectSchema(required=("city",))}),
        })
        result = self.validator.validate(schema, {"user": {"address": {}}})
        assert result.errors == (MissingField("/user/address", name="city"),)

    def test_escaped_paths(self):
        schema = ObjectSchema(properties={"a/b": IntegerSchema(), "c~d": IntegerSchema()})
        result = self.validator.validate(schema, {"a/b": "x", "c~d": "y"})
        assert [error.path for error in result.errors] == ["/a~1b", "/c~0d"]

    def test_check_order(self):
        """Counts, required, properties, additional properties, dependencies."""
        schema = ObjectSchema(
            properties={"a": IntegerSchema()},
            required=("z",),
            max_properties=1,
            additional_properties=False,
            dependent_required={"a": ("y",)},
        )
        result = self.validator.validate(schema, {"a": "1", "b": 2})
        assert [error.code for error in result.errors] == [
            ErrorCode.OBJECT_TOO_MANY_PROPERTIES,
            ErrorCode.REQUIRED_PROPERTY_MISSING,
            ErrorCode.TYPE_MISMATCH,
            ErrorCode.ADDITIONAL_PROPERTY_NOT_ALLOWED,
            ErrorCode.REQUIRED_PROPERTY_MISSING,
        ]


class TestObjectSchemaConstruction:
    """Tests for ObjectSchema construction checks."""

    def test_invalid_pattern_property(self):
        with pytest.raises(SchemaError):
            ObjectSchema(pattern_properties={"(": StringSchema()})

    def test_invalid_additional_properties(self):
        with pytest.raises(SchemaError):
            ObjectSchema(additional_properties="no")

    def test_required_deduplicated(self):
        assert ObjectSchema(required=["a", "b", "a"]).required == ("a", "b")

    def test_properties_read_only(self):
        properties = {"a": StringSchema()}
        schema = ObjectSchema(properties=properties)
        properties["b"] = StringSchema()
        assert list(schema.properties) == ["a"]
        with pytest.raises(TypeError):
            schema.properties["c"] = StringSchema()


if __name__ == "__main__":
    pytest.main(["-xvs", __file__])
