"""
Reference registry: maps local ``$ref`` pointers to schemas.
"""

import logging
from typing import Dict, Iterator, Mapping, Optional

from .api import SchemaError
from .schemas import (
    AllOfSchema,
    AnyOfSchema,
    ArraySchema,
    IfThenElseSchema,
    NotSchema,
    ObjectSchema,
    OneOfSchema,
    RefSchema,
    Schema,
)
from .utils import JsonPointer

logger = logging.getLogger("json_schema_model")

ROOT_REF = "#"


def iter_subschemas(schema: Schema) -> Iterator[Schema]:
    """
    Yield the direct child schemas of a schema, including its ``$defs``.

    References are not followed.
    """
    if schema.metadata.defs:
        yield from schema.metadata.defs.values()

    if isinstance(schema, ArraySchema):
        yield from schema.prefix_items
        for child in (schema.items, schema.contains):
            if child is not None:
                yield child
    elif isinstance(schema, ObjectSchema):
        yield from schema.properties.values()
        yield from schema.pattern_properties.values()
        if isinstance(schema.additional_properties, Schema):
            yield schema.additional_properties
        if schema.property_names is not None:
            yield schema.property_names
        yield from schema.dependent_schemas.values()
    elif isinstance(schema, (AllOfSchema, AnyOfSchema, OneOfSchema)):
        yield from schema.schemas
    elif isinstance(schema, NotSchema):
        yield schema.schema
    elif isinstance(schema, IfThenElseSchema):
        for child in (schema.condition, schema.then_schema, schema.else_schema):
            if child is not None:
                yield child


def walk(schema: Schema) -> Iterator[Schema]:
    """Yield a schema and every schema nested in it, depth first."""
    stack = [schema]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_subschemas(current))))


class SchemaRegistry:
    """
    Registry of schemas addressable by ``$ref``.

    References are local JSON Pointers: ``#`` for the root schema and
    ``#/$defs/<name>`` for definitions.
    """

    def __init__(self, schemas: Optional[Mapping[str, Schema]] = None):
        """
        Initialize a new registry.

        Args:
            schemas: Initial mapping of references to schemas
        """
        self._schemas: Dict[str, Schema] = {}
        for ref, schema in (schemas or {}).items():
            self.register(ref, schema)

    @classmethod
    def from_schema(cls, root: Schema) -> "SchemaRegistry":
        """
        Build a registry from a root schema.

        The root is registered as ``#`` and every ``$defs`` entry found in
        the tree as ``#/$defs/<name>``. Definitions nested deeper than the
        root share the same namespace; two different definitions with the
        same name are rejected.

        Args:
            root: Root schema

        Returns:
            Populated registry

        Raises:
            SchemaError: If two different definitions share a name
        """
        registry = cls()
        registry.register(ROOT_REF, root)

        for schema in walk(root):
            for name, definition in (schema.metadata.defs or {}).items():
                ref = RefSchema.to_def(name).ref
                existing = registry._schemas.get(ref)
                if existing is None:
                    registry.register(ref, definition)
                elif existing != definition:
                    raise SchemaError(f"Conflicting definitions for '{ref}'")

        logger.debug(f"Registry built with {len(registry)} schema(s)")
        return registry

    def register(self, ref: str, schema: Schema) -> "SchemaRegistry":
        """
        Register a schema under a reference.

        Args:
            ref: Local reference ("#" or "#/...")
            schema: Schema the reference resolves to

        Returns:
            This registry, for chaining

        Raises:
            SchemaError: If the reference is not local or the value is not a schema
        """
        if not isinstance(schema, Schema):
            raise SchemaError(f"Cannot register {schema!r} as '{ref}': not a schema")
        try:
            JsonPointer.to_parts(ref)
        except ValueError as e:
            raise SchemaError(f"Invalid reference '{ref}': {e}") from e
        if not ref.startswith(ROOT_REF):
            raise SchemaError(f"External references not supported: {ref}")

        self._schemas[ref] = schema
        return self

    def resolve(self, ref: str) -> Schema:
        """
        Resolve a reference to a concrete (non-reference) schema.

        Chains of references are followed.

        Args:
            ref: Reference to resolve

        Returns:
            The schema the chain ends at

        Raises:
            SchemaError: If a reference is unknown or the chain is cyclic
        """
        seen = []
        current = ref
        while True:
            if current in seen:
                chain = " -> ".join(seen + [current])
                raise SchemaError(f"Cyclic reference: {chain}")
            seen.append(current)

            schema = self._schemas.get(current)
            if schema is None:
                raise SchemaError(f"Unresolved reference '{current}'")
            if not isinstance(schema, RefSchema):
                logger.debug(f"Resolved '{ref}' via {len(seen)} reference(s)")
                return schema
            current = schema.ref

    def check_references(self, schema: Schema) -> None:
        """
        Resolve every reference reachable from a schema.

        Registered schemas reached through references are checked too.

        Raises:
            SchemaError: If any reference cannot be resolved
        """
        checked = set()
        pending = [schema]
        while pending:
            for current in walk(pending.pop()):
                if isinstance(current, RefSchema) and current.ref not in checked:
                    checked.add(current.ref)
                    pending.append(self.resolve(current.ref))

    def __contains__(self, ref: str) -> bool:
        return ref in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __str__(self) -> str:
        return f"SchemaRegistry(refs={list(self._schemas)})"
