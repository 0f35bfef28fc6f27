"""
Boolean schema variant.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..api import SchemaError
from .base import SchemaMetadata, TypedSchema


@dataclass(frozen=True)
class BooleanSchema(TypedSchema):
    """
    Schema for boolean values.

    Attributes:
        const: The only allowed value
    """
    const: Optional[bool] = None
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    json_type = "boolean"

    def __post_init__(self):
        if self.const is not None and not isinstance(self.const, bool):
            raise SchemaError(f"BooleanSchema: 'const' must be a boolean, got {self.const!r}")
