"""
Enum schema variant.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Tuple

from ..api import SchemaError
from .base import Schema, SchemaMetadata


@dataclass(frozen=True)
class EnumSchema(Schema):
    """
    Schema accepting one of a fixed set of JSON values.

    Covers string, number, boolean and null enumerations as well as
    heterogeneous ones. Membership uses JSON structural equality.

    Attributes:
        values: Allowed values, in declaration order
    """
    values: Tuple[Any, ...]
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise SchemaError("EnumSchema: 'enum' must contain at least one value")

    @property
    def string_only(self) -> bool:
        """True when every allowed value is a string."""
        return all(isinstance(value, str) for value in self.values)

    @classmethod
    def of(cls, *values: Any) -> "EnumSchema":
        """Build an enum from positional values."""
        return cls(values)

    def as_nullable(self) -> Schema:
        if any(value is None for value in self.values):
            return self
        return replace(self, values=self.values + (None,))
