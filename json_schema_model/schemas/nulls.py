"""
Null schema variant.
"""

from dataclasses import dataclass, field

from .base import Schema, SchemaMetadata, TypedSchema


@dataclass(frozen=True)
class NullSchema(TypedSchema):
    """Schema accepting only JSON null."""
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    json_type = "null"

    def as_nullable(self) -> Schema:
        return self
