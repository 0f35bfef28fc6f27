"""
Reference schema variant.
"""

from dataclasses import dataclass, field

from ..api import SchemaError
from ..utils import JsonPointer
from .base import Schema, SchemaMetadata


@dataclass(frozen=True)
class RefSchema(Schema):
    """
    Reference to another schema, resolved through a SchemaRegistry.

    Only local references (``#`` or ``#/$defs/<name>``) are supported.

    Attributes:
        ref: JSON Pointer reference, e.g. "#/$defs/Address"
    """
    ref: str
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    def __post_init__(self):
        if not isinstance(self.ref, str) or not self.ref.startswith("#"):
            raise SchemaError(f"RefSchema: only local references are supported, got {self.ref!r}")

    @classmethod
    def to_def(cls, name: str) -> "RefSchema":
        """Reference the ``$defs`` entry called ``name``."""
        return cls("#" + JsonPointer.from_parts(["$defs", name]))
