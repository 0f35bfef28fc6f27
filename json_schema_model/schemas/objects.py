"""
Object schema variant.
"""

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Tuple, Union

from ..api import SchemaError
from .base import (
    Schema,
    SchemaMetadata,
    TypedSchema,
    check_non_negative,
    check_pattern,
    frozen_mapping,
    ordered_names,
)


@dataclass(frozen=True)
class ObjectSchema(TypedSchema):
    """
    Schema for object values.

    Attributes:
        properties: Schemas for named properties
        required: Property names that must be present
        min_properties: Minimum number of properties
        max_properties: Maximum number of properties
        additional_properties: True allows any extra property, False disallows
            extra properties, a Schema validates them
        pattern_properties: Schemas for properties whose names match a regex
        property_names: Schema every property name must satisfy
        dependent_required: Names required when the key property is present
        dependent_schemas: Schemas applied to the object when the key property is present
        unevaluated_properties: False rejects properties no other keyword evaluated
    """
    properties: Mapping[str, Schema] = field(default_factory=dict)
    required: Tuple[str, ...] = ()
    min_properties: Optional[int] = None
    max_properties: Optional[int] = None
    additional_properties: Union[bool, Schema] = True
    pattern_properties: Mapping[str, Schema] = field(default_factory=dict)
    property_names: Optional[Schema] = None
    dependent_required: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    dependent_schemas: Mapping[str, Schema] = field(default_factory=dict)
    unevaluated_properties: Optional[bool] = None
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    json_type = "object"

    def __post_init__(self):
        object.__setattr__(self, "properties", frozen_mapping(self.properties))
        object.__setattr__(self, "required", ordered_names(self.required))
        object.__setattr__(self, "pattern_properties", frozen_mapping(self.pattern_properties))
        object.__setattr__(self, "dependent_required", frozen_mapping({
            name: ordered_names(deps) for name, deps in (self.dependent_required or {}).items()
        }))
        object.__setattr__(self, "dependent_schemas", frozen_mapping(self.dependent_schemas))

        check_non_negative("ObjectSchema", "minProperties", self.min_properties)
        check_non_negative("ObjectSchema", "maxProperties", self.max_properties)
        for pattern in self.pattern_properties:
            check_pattern(pattern)
        if not isinstance(self.additional_properties, (bool, Schema)):
            raise SchemaError(
                "ObjectSchema: 'additionalProperties' must be a boolean or a schema, "
                f"got {self.additional_properties!r}"
            )

    @classmethod
    def of(cls, required: Iterable[str] = (), **properties: Schema) -> "ObjectSchema":
        """Build an object schema from keyword properties."""
        return cls(properties=properties, required=tuple(required))
