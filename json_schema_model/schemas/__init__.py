"""
Schema model package initialization.
"""

from .base import NOT_SET, Schema, SchemaMetadata, TypedSchema
from .strings import StringSchema
from .numbers import IntegerSchema, NumberSchema, NumericSchema
from .booleans import BooleanSchema
from .nulls import NullSchema
from .enums import EnumSchema
from .arrays import ArraySchema
from .objects import ObjectSchema
from .logical import (
    AllOfSchema,
    AnyOfSchema,
    CompositionSchema,
    IfThenElseSchema,
    NotSchema,
    OneOfSchema,
    accept_all,
    reject_all,
)
from .references import RefSchema

__all__ = [
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
