"""
Serializer from the schema model to JSON Schema 2020-12 documents.
"""

from typing import Any, Callable, Dict, Type

from .api import SchemaError
from .schemas import (
    AllOfSchema,
    AnyOfSchema,
    ArraySchema,
    BooleanSchema,
    EnumSchema,
    IfThenElseSchema,
    IntegerSchema,
    NotSchema,
    NullSchema,
    NumberSchema,
    NumericSchema,
    ObjectSchema,
    OneOfSchema,
    RefSchema,
    Schema,
    SchemaMetadata,
    StringSchema,
)
from .utils import SchemaKeywords as K

Document = Dict[str, Any]


def _put(document: Document, keyword: str, value: Any) -> None:
    if value is not None:
        document[keyword] = value


class SchemaSerializer:
    """
    Renders schema trees as JSON Schema documents.

    Keywords use their 2020-12 spelling. ``type`` comes first, then the
    variant's keywords, then metadata. Absent keywords are omitted, and so
    is ``type`` for variants whose type was inferred.
    """

    def __init__(self):
        self._handlers: Dict[Type[Schema], Callable[[Any], Document]] = {
            StringSchema: self._serialize_string,
            NumberSchema: self._serialize_numeric,
            IntegerSchema: self._serialize_numeric,
            BooleanSchema: self._serialize_boolean,
            NullSchema: self._serialize_typed,
            EnumSchema: self._serialize_enum,
            ArraySchema: self._serialize_array,
            ObjectSchema: self._serialize_object,
            AllOfSchema: self._serialize_all_of,
            AnyOfSchema: lambda schema: {K.ANY_OF: self._serialize_all(schema.schemas)},
            OneOfSchema: lambda schema: {K.ONE_OF: self._serialize_all(schema.schemas)},
            NotSchema: lambda schema: {K.NOT: self.serialize(schema.schema)},
            IfThenElseSchema: self._serialize_if_then_else,
            RefSchema: lambda schema: {K.REF: schema.ref},
        }

    def serialize(self, schema: Schema) -> Document:
        """
        Serialize a schema.

        Args:
            schema: Schema to render

        Returns:
            JSON Schema document as a dict

        Raises:
            SchemaError: If the schema is not a known variant
        """
        handler = self._handlers.get(type(schema))
        if handler is None:
            raise SchemaError(f"Unsupported schema type: {type(schema).__name__}")

        document = handler(schema)
        document.update(self._serialize_metadata(schema.metadata))
        return document

    def _serialize_all(self, schemas) -> list:
        return [self.serialize(schema) for schema in schemas]

    def _serialize_typed(self, schema: Schema) -> Document:
        if schema.metadata.inferred_type:
            return {}
        if schema.metadata.nullable and schema.json_type != "null":
            return {K.TYPE: [schema.json_type, "null"]}
        return {K.TYPE: schema.json_type}

    def _serialize_string(self, schema: StringSchema) -> Document:
        document = self._serialize_typed(schema)
        _put(document, K.MIN_LENGTH, schema.min_length)
        _put(document, K.MAX_LENGTH, schema.max_length)
        _put(document, K.PATTERN, schema.pattern)
        _put(document, K.FORMAT, schema.format)
        _put(document, K.CONST, schema.const)
        return document

    def _serialize_numeric(self, schema: NumericSchema) -> Document:
        document = self._serialize_typed(schema)
        _put(document, K.MINIMUM, schema.minimum)
        _put(document, K.MAXIMUM, schema.maximum)
        _put(document, K.EXCLUSIVE_MINIMUM, schema.exclusive_minimum)
        _put(document, K.EXCLUSIVE_MAXIMUM, schema.exclusive_maximum)
        _put(document, K.MULTIPLE_OF, schema.multiple_of)
        _put(document, K.CONST, schema.const)
        return document

    def _serialize_boolean(self, schema: BooleanSchema) -> Document:
        document = self._serialize_typed(schema)
        _put(document, K.CONST, schema.const)
        return document

    def _serialize_enum(self, schema: EnumSchema) -> Document:
        document: Document = {}
        if schema.string_only:
            document[K.TYPE] = "string"
        document[K.ENUM] = list(schema.values)
        return document

    def _serialize_array(self, schema: ArraySchema) -> Document:
        document = self._serialize_typed(schema)
        if schema.prefix_items:
            document[K.PREFIX_ITEMS] = self._serialize_all(schema.prefix_items)
        if schema.items is not None:
            document[K.ITEMS] = self.serialize(schema.items)
        _put(document, K.MIN_ITEMS, schema.min_items)
        _put(document, K.MAX_ITEMS, schema.max_items)
        _put(document, K.UNIQUE_ITEMS, schema.unique_items)
        if schema.contains is not None:
            document[K.CONTAINS] = self.serialize(schema.contains)
        _put(document, K.MIN_CONTAINS, schema.min_contains)
        _put(document, K.MAX_CONTAINS, schema.max_contains)
        _put(document, K.UNEVALUATED_ITEMS, schema.unevaluated_items)
        return document

    def _serialize_object(self, schema: ObjectSchema) -> Document:
        document = self._serialize_typed(schema)
        if schema.properties:
            document[K.PROPERTIES] = {
                name: self.serialize(child) for name, child in schema.properties.items()
            }
        if schema.required:
            document[K.REQUIRED] = list(schema.required)
        _put(document, K.MIN_PROPERTIES, schema.min_properties)
        _put(document, K.MAX_PROPERTIES, schema.max_properties)

        if schema.additional_properties is False:
            document[K.ADDITIONAL_PROPERTIES] = False
        elif isinstance(schema.additional_properties, Schema):
            document[K.ADDITIONAL_PROPERTIES] = self.serialize(schema.additional_properties)

        if schema.pattern_properties:
            document[K.PATTERN_PROPERTIES] = {
                pattern: self.serialize(child) for pattern, child in schema.pattern_properties.items()
            }
        if schema.property_names is not None:
            document[K.PROPERTY_NAMES] = self.serialize(schema.property_names)
        if schema.dependent_required:
            document[K.DEPENDENT_REQUIRED] = {
                name: list(dependencies) for name, dependencies in schema.dependent_required.items()
            }
        if schema.dependent_schemas:
            document[K.DEPENDENT_SCHEMAS] = {
                name: self.serialize(child) for name, child in schema.dependent_schemas.items()
            }
        _put(document, K.UNEVALUATED_PROPERTIES, schema.unevaluated_properties)
        return document

    def _serialize_all_of(self, schema: AllOfSchema) -> Document:
        # An empty allOf accepts everything, which is the empty schema
        if not schema.schemas:
            return {}
        return {K.ALL_OF: self._serialize_all(schema.schemas)}

    def _serialize_if_then_else(self, schema: IfThenElseSchema) -> Document:
        document = {K.IF: self.serialize(schema.condition)}
        if schema.then_schema is not None:
            document[K.THEN] = self.serialize(schema.then_schema)
        if schema.else_schema is not None:
            document[K.ELSE] = self.serialize(schema.else_schema)
        return document

    def _serialize_metadata(self, metadata: SchemaMetadata) -> Document:
        document: Document = {}
        _put(document, K.SCHEMA, metadata.schema)
        _put(document, K.ID, metadata.id)
        _put(document, K.COMMENT, metadata.comment)
        _put(document, K.TITLE, metadata.title)
        _put(document, K.DESCRIPTION, metadata.description)
        if metadata.has_default:
            document[K.DEFAULT] = metadata.default
        if metadata.examples is not None:
            document[K.EXAMPLES] = list(metadata.examples)
        _put(document, K.READ_ONLY, metadata.read_only)
        _put(document, K.WRITE_ONLY, metadata.write_only)
        _put(document, K.DEPRECATED, metadata.deprecated)
        if metadata.defs is not None:
            document[K.DEFS] = {name: self.serialize(child) for name, child in metadata.defs.items()}
        return document


def to_json_schema(schema: Schema, include_meta_schema: bool = False) -> Document:
    """
    Serialize a schema to a JSON Schema document.

    Args:
        schema: Schema to render
        include_meta_schema: Add the 2020-12 "$schema" URL when the schema
            does not carry one

    Returns:
        JSON Schema document as a dict
    """
    document = SchemaSerializer().serialize(schema)
    if include_meta_schema and K.SCHEMA not in document:
        document = {K.SCHEMA: K.META_SCHEMA_URL, **document}
    return document
