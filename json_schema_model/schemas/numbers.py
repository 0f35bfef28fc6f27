"""
Number and integer schema variants.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from ..api import SchemaError
from ..utils import TypeUtils
from .base import SchemaMetadata, TypedSchema

Number = Union[int, float]


@dataclass(frozen=True)
class NumericSchema(TypedSchema):
    """
    Shared keywords of number and integer schemas.

    Attributes:
        minimum: Inclusive lower bound
        maximum: Inclusive upper bound
        exclusive_minimum: Exclusive lower bound
        exclusive_maximum: Exclusive upper bound
        multiple_of: Value must be a multiple of this (strictly positive)
        const: The only allowed value
    """
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    exclusive_minimum: Optional[Number] = None
    exclusive_maximum: Optional[Number] = None
    multiple_of: Optional[Number] = None
    const: Optional[Number] = None
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    def __post_init__(self):
        owner = type(self).__name__
        for keyword in ("minimum", "maximum", "exclusive_minimum", "exclusive_maximum", "multiple_of", "const"):
            value = getattr(self, keyword)
            if value is not None and not TypeUtils.is_number(value):
                raise SchemaError(f"{owner}: '{keyword}' must be a number, got {value!r}")
        if self.multiple_of is not None and self.multiple_of <= 0:
            raise SchemaError(f"{owner}: 'multipleOf' must be strictly positive, got {self.multiple_of}")


@dataclass(frozen=True)
class NumberSchema(NumericSchema):
    """Schema for any JSON number."""

    json_type = "number"


@dataclass(frozen=True)
class IntegerSchema(NumericSchema):
    """Schema for integral JSON numbers (1.0 counts as an integer)."""

    json_type = "integer"
