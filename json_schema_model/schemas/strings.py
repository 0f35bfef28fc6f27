"""
String schema variant.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..api import SchemaError
from .base import SchemaMetadata, TypedSchema, check_non_negative, check_pattern


@dataclass(frozen=True)
class StringSchema(TypedSchema):
    """
    Schema for string values.

    Attributes:
        min_length: Minimum length in code points
        max_length: Maximum length in code points
        pattern: Regular expression searched for anywhere in the string
        format: Named format checked by the format checker
        const: The only allowed value
    """
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    format: Optional[str] = None
    const: Optional[str] = None
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    json_type = "string"

    def __post_init__(self):
        check_non_negative("StringSchema", "minLength", self.min_length)
        check_non_negative("StringSchema", "maxLength", self.max_length)
        check_pattern(self.pattern)
        if self.const is not None and not isinstance(self.const, str):
            raise SchemaError(f"StringSchema: 'const' must be a string, got {self.const!r}")
