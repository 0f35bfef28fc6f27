"""
Array schema variant.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..api import SchemaError
from .base import Schema, SchemaMetadata, TypedSchema, check_non_negative


@dataclass(frozen=True)
class ArraySchema(TypedSchema):
    """
    Schema for array values.

    Attributes:
        items: Schema for elements not covered by ``prefix_items`` (None allows any)
        min_items: Minimum number of elements
        max_items: Maximum number of elements
        unique_items: Whether elements must be pairwise distinct
        prefix_items: Schemas for the leading tuple positions
        contains: Schema that some elements must satisfy
        min_contains: Minimum number of matching elements (default 1)
        max_contains: Maximum number of matching elements (default unbounded)
        unevaluated_items: False rejects elements no other keyword evaluated
    """
    items: Optional[Schema] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    unique_items: Optional[bool] = None
    prefix_items: Tuple[Schema, ...] = ()
    contains: Optional[Schema] = None
    min_contains: Optional[int] = None
    max_contains: Optional[int] = None
    unevaluated_items: Optional[bool] = None
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    json_type = "array"

    def __post_init__(self):
        object.__setattr__(self, "prefix_items", tuple(self.prefix_items or ()))
        for keyword, value in (("minItems", self.min_items), ("maxItems", self.max_items),
                               ("minContains", self.min_contains), ("maxContains", self.max_contains)):
            check_non_negative("ArraySchema", keyword, value)
        if self.contains is None and (self.min_contains is not None or self.max_contains is not None):
            raise SchemaError("ArraySchema: 'minContains'/'maxContains' require 'contains'")
