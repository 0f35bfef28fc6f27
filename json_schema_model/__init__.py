#!/usr/bin/env python3
"""
JSON Schema Model

This package models JSON Schema (2020-12) documents as immutable Python
values, validates JSON data against them, and serializes them back into
JSON Schema documents.
"""

import logging
from typing import Any, Optional

from .api import (
    AdditionalProperty,
    CompositionKind,
    CompositionViolation,
    ConstMismatch,
    ContainsViolation,
    EnumMismatch,
    ErrorCode,
    Invalid,
    InvalidFormat,
    JsonValue,
    MaxItemsViolation,
    MaxLengthViolation,
    MaxPropertiesViolation,
    MinItemsViolation,
    MinLengthViolation,
    MinPropertiesViolation,
    MissingField,
    MultipleOfViolation,
    OutOfRange,
    PatternMismatch,
    RangeKind,
    SchemaError,
    TypeMismatch,
    UnevaluatedItem,
    UnevaluatedProperty,
    UniqueViolation,
    Valid,
    ValidationError,
    ValidationException,
    ValidationResult,
)
from .context import ValidationContext
from .formats import FormatChecker
from .parser import SchemaParser, parse_schema
from .registry import SchemaRegistry
from .schemas import (
    NOT_SET,
    AllOfSchema,
    AnyOfSchema,
    ArraySchema,
    BooleanSchema,
    CompositionSchema,
    EnumSchema,
    IfThenElseSchema,
    IntegerSchema,
    NotSchema,
    NullSchema,
    NumberSchema,
    NumericSchema,
    ObjectSchema,
    OneOfSchema,
    RefSchema,
    Schema,
    SchemaMetadata,
    StringSchema,
    TypedSchema,
    accept_all,
    reject_all,
)
from .serializer import SchemaSerializer, to_json_schema
from .validator import Validator
from .version import __version__

logger = logging.getLogger("json_schema_model")


def validate(schema: Schema, value: Any, context: Optional[ValidationContext] = None) -> ValidationResult:
    """
    Validate a JSON value against a schema with a default validator.

    Args:
        schema: Schema to validate against
        value: JSON value to validate
        context: Starting context (defaults to the document root)

    Returns:
        Valid, or Invalid with every error found
    """
    return Validator().validate(schema, value, context)


# Export public classes and functions
__all__ = [
    "Validator",
    "ValidationContext",
    "ValidationResult",
    "Valid",
    "Invalid",
    "ValidationError",
    "ValidationException",
    "SchemaError",
    "ErrorCode",
    "RangeKind",
    "CompositionKind",
    "JsonValue",
    "TypeMismatch",
    "ConstMismatch",
    "EnumMismatch",
    "MinLengthViolation",
    "MaxLengthViolation",
    "PatternMismatch",
    "InvalidFormat",
    "OutOfRange",
    "MultipleOfViolation",
    "MinItemsViolation",
    "MaxItemsViolation",
    "UniqueViolation",
    "ContainsViolation",
    "UnevaluatedItem",
    "MinPropertiesViolation",
    "MaxPropertiesViolation",
    "MissingField",
    "AdditionalProperty",
    "UnevaluatedProperty",
    "CompositionViolation",
    "FormatChecker",
    "SchemaParser",
    "parse_schema",
    "SchemaRegistry",
    "SchemaSerializer",
    "to_json_schema",
    "validate",
    "__version__",
    "NOT_SET",
    "Schema",
    "SchemaMetadata",
    "TypedSchema",
    "StringSchema",
    "NumericSchema",
    "NumberSchema",
    "IntegerSchema",
    "BooleanSchema",
    "NullSchema",
    "EnumSchema",
    "ArraySchema",
    "ObjectSchema",
    "CompositionSchema",
    "AllOfSchema",
    "AnyOfSchema",
    "OneOfSchema",
    "NotSchema",
    "IfThenElseSchema",
    "RefSchema",
    "accept_all",
    "reject_all",
]
