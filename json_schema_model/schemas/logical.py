"""
Composition schema variants: allOf, anyOf, oneOf, not and if/then/else.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple

from ..api import CompositionKind, SchemaError
from .base import Schema, SchemaMetadata


class CompositionSchema(Schema):
    """Base class for schemas that combine other schemas."""

    kind: ClassVar[Optional[CompositionKind]] = None


@dataclass(frozen=True)
class _BranchSchema(CompositionSchema):
    schemas: Tuple[Schema, ...]
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    allow_empty: ClassVar[bool] = False

    def __post_init__(self):
        object.__setattr__(self, "schemas", tuple(self.schemas))
        if not self.schemas and not self.allow_empty:
            raise SchemaError(f"{type(self).__name__}: '{self.kind.value}' must contain at least one schema")
        for schema in self.schemas:
            if not isinstance(schema, Schema):
                raise SchemaError(f"{type(self).__name__}: expected a schema, got {schema!r}")

    @classmethod
    def of(cls, *schemas: Schema):
        return cls(schemas)


@dataclass(frozen=True)
class AllOfSchema(_BranchSchema):
    """
    Value must be valid against every branch.

    An empty ``allOf`` accepts every value.
    """

    kind = CompositionKind.ALL_OF
    allow_empty = True


@dataclass(frozen=True)
class AnyOfSchema(_BranchSchema):
    """Value must be valid against at least one branch."""

    kind = CompositionKind.ANY_OF


@dataclass(frozen=True)
class OneOfSchema(_BranchSchema):
    """Value must be valid against exactly one branch."""

    kind = CompositionKind.ONE_OF


@dataclass(frozen=True)
class NotSchema(CompositionSchema):
    """Value must not be valid against the wrapped schema."""
    schema: Schema
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    kind = CompositionKind.NOT


@dataclass(frozen=True)
class IfThenElseSchema(CompositionSchema):
    """
    Conditional schema.

    When the value is valid against ``condition`` it is validated against
    ``then_schema``, otherwise against ``else_schema``. A missing branch
    accepts the value.
    """
    condition: Schema
    then_schema: Optional[Schema] = None
    else_schema: Optional[Schema] = None
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)


def accept_all() -> Schema:
    """The schema that accepts every value (JSON ``true``)."""
    return AllOfSchema(())


def reject_all() -> Schema:
    """The schema that rejects every value (JSON ``false``)."""
    return NotSchema(AllOfSchema(()))
