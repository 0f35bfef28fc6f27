"""
Parser from JSON Schema 2020-12 documents to the schema model.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from .api import SchemaError
from .schemas import (
    NOT_SET,
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
    ObjectSchema,
    OneOfSchema,
    RefSchema,
    Schema,
    SchemaMetadata,
    StringSchema,
    TypedSchema,
    accept_all,
    reject_all,
)
from .utils import JsonPointer, TypeUtils
from .utils import SchemaKeywords as K

logger = logging.getLogger("json_schema_model")

_TYPE_KEYWORDS = {
    "string": K.STRING_KEYWORDS,
    "number": K.NUMBER_KEYWORDS,
    "integer": K.NUMBER_KEYWORDS,
    "boolean": frozenset(),
    "null": frozenset(),
    "array": K.ARRAY_KEYWORDS,
    "object": K.OBJECT_KEYWORDS,
}

_GENERAL_KEYWORDS = (
    K.METADATA_KEYWORDS | K.COMPOSITION_KEYWORDS
    | {K.TYPE, K.ENUM, K.CONST, K.REF, K.THEN, K.ELSE}
)

_NUMBER = (int, float)


class SchemaParser:
    """
    Builds schema trees from JSON Schema documents.

    This is the inverse of the serializer: parsing a serialized schema
    yields an equal schema.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize a new schema parser.

        Args:
            verbose: If True, log type inference and ignored keywords
        """
        self.verbose = verbose
        if verbose:
            logger.setLevel(logging.DEBUG)

    def parse(self, document: Any) -> Schema:
        """
        Parse a JSON Schema document.

        Args:
            document: Schema document (a dict, or a boolean schema)

        Returns:
            Root of the schema tree

        Raises:
            SchemaError: If the document is malformed
        """
        return self._parse(document, "#")

    def _parse(self, document: Any, path: str) -> Schema:
        if document is True:
            return accept_all()
        if document is False:
            return reject_all()
        if not isinstance(document, dict):
            raise SchemaError(f"Schema at '{path}' must be an object or a boolean, got {document!r}")

        metadata = self._parse_metadata(document, path)

        parts: List[Schema] = []
        if K.REF in document:
            ref = self._get(document, K.REF, str, path)
            parts.append(RefSchema(ref))
        parts.extend(self._parse_typed(document, path))
        parts.extend(self._parse_composition(document, path))

        if not parts:
            schema = accept_all()
        elif len(parts) == 1:
            schema = parts[0]
        else:
            logger.debug(f"Combining {len(parts)} schema parts at '{path}' into allOf")
            schema = AllOfSchema(tuple(parts))

        if isinstance(schema, TypedSchema):
            metadata = replace(metadata, nullable=schema.metadata.nullable,
                               inferred_type=schema.metadata.inferred_type)
        return replace(schema, metadata=metadata)

    def _get(self, document: Dict[str, Any], keyword: str, expected, path: str, default=None):
        """
        Read a keyword, checking the JSON type of its value.

        Raises:
            SchemaError: If the value has the wrong type
        """
        if keyword not in document:
            return default
        value = document[keyword]
        if isinstance(value, bool) and bool not in (expected if isinstance(expected, tuple) else (expected,)):
            raise SchemaError(f"'{keyword}' at '{path}' has invalid value {value!r}")
        if not isinstance(value, expected):
            raise SchemaError(f"'{keyword}' at '{path}' has invalid value {value!r}")
        return value

    def _child(self, document: Dict[str, Any], keyword: str, path: str) -> Optional[Schema]:
        if keyword not in document:
            return None
        return self._parse(document[keyword], JsonPointer.join(path, keyword))

    def _children(self, document: Dict[str, Any], keyword: str, path: str) -> Tuple[Schema, ...]:
        values = self._get(document, keyword, list, path, [])
        base = JsonPointer.join(path, keyword)
        return tuple(self._parse(value, JsonPointer.join(base, index)) for index, value in enumerate(values))

    def _child_map(self, document: Dict[str, Any], keyword: str, path: str) -> Dict[str, Schema]:
        values = self._get(document, keyword, dict, path, {})
        base = JsonPointer.join(path, keyword)
        return {name: self._parse(value, JsonPointer.join(base, name)) for name, value in values.items()}

    def _parse_metadata(self, document: Dict[str, Any], path: str) -> SchemaMetadata:
        examples = self._get(document, K.EXAMPLES, list, path)
        defs = self._child_map(document, K.DEFS, path) if K.DEFS in document else None
        return SchemaMetadata(
            title=self._get(document, K.TITLE, str, path),
            description=self._get(document, K.DESCRIPTION, str, path),
            default=document.get(K.DEFAULT, NOT_SET),
            examples=tuple(examples) if examples is not None else None,
            schema=self._get(document, K.SCHEMA, str, path),
            id=self._get(document, K.ID, str, path),
            comment=self._get(document, K.COMMENT, str, path),
            defs=defs,
            read_only=self._get(document, K.READ_ONLY, bool, path),
            write_only=self._get(document, K.WRITE_ONLY, bool, path),
            deprecated=self._get(document, K.DEPRECATED, bool, path),
        )

    def _parse_composition(self, document: Dict[str, Any], path: str) -> List[Schema]:
        parts: List[Schema] = []
        if K.ALL_OF in document:
            parts.append(AllOfSchema(self._children(document, K.ALL_OF, path)))
        if K.ANY_OF in document:
            parts.append(AnyOfSchema(self._children(document, K.ANY_OF, path)))
        if K.ONE_OF in document:
            parts.append(OneOfSchema(self._children(document, K.ONE_OF, path)))
        if K.NOT in document:
            parts.append(NotSchema(self._child(document, K.NOT, path)))
        if K.IF in document:
            parts.append(IfThenElseSchema(
                condition=self._child(document, K.IF, path),
                then_schema=self._child(document, K.THEN, path),
                else_schema=self._child(document, K.ELSE, path),
            ))
        elif K.THEN in document or K.ELSE in document:
            logger.warning(f"Ignoring 'then'/'else' without 'if' at '{path}'")
        return parts

    def _determine_schema_types(self, document: Dict[str, Any], path: str) -> List[str]:
        """
        Infer the types of a schema without an explicit "type".

        Returns:
            Types whose keywords appear in the document, possibly empty
        """
        implied = {K.get_implied_type(keyword) for keyword in document}
        types = [json_type for json_type in ("array", "object", "string", "number") if json_type in implied]
        if types:
            logger.debug(f"Inferred type(s) {types} at '{path}' from keywords")
        return types

    def _parse_typed(self, document: Dict[str, Any], path: str) -> List[Schema]:
        declared = document.get(K.TYPE)
        enum = self._parse_enum(document, path)
        constrained = any(K.get_implied_type(keyword) for keyword in document)

        if enum is not None and not constrained and K.CONST not in document:
            if declared is None or (declared == "string" and enum.string_only):
                return [enum]

        if declared is not None:
            parts = [self._create_typed_schema(declared, document, path)]
        else:
            parts = self._create_inferred_schemas(document, path)

        if K.CONST in document and not self._holds_const(parts, document[K.CONST]):
            parts.append(EnumSchema((document[K.CONST],)))
        if enum is not None:
            parts.append(enum)
        return parts

    def _parse_enum(self, document: Dict[str, Any], path: str) -> Optional[EnumSchema]:
        if K.ENUM not in document:
            return None
        values = self._get(document, K.ENUM, list, path)
        if not values:
            raise SchemaError(f"'enum' at '{path}' must contain at least one value")
        return EnumSchema(tuple(values))

    def _create_inferred_schemas(self, document: Dict[str, Any], path: str) -> List[Schema]:
        types = self._determine_schema_types(document, path)
        if types:
            # Inferred variants never carry "const"; it becomes its own part
            loose = {keyword: value for keyword, value in document.items() if keyword != K.CONST}
            allowed = frozenset().union(*(_TYPE_KEYWORDS[json_type] for json_type in types))
            return [
                self._create_single_type(json_type, loose, path, allowed).as_inferred()
                for json_type in types
            ]

        if K.CONST in document:
            json_type = TypeUtils.get_json_type(document[K.CONST])
            if json_type in ("string", "number", "integer", "boolean", "null"):
                logger.debug(f"Inferred type '{json_type}' at '{path}' from 'const'")
                return [self._create_single_type(json_type, document, path)]
        return []

    @staticmethod
    def _holds_const(parts: List[Schema], const: Any) -> bool:
        """Whether a single strictly typed part already enforces ``const``."""
        if len(parts) != 1:
            return False
        part = parts[0]
        if part.metadata.nullable or part.metadata.inferred_type:
            return False
        if isinstance(part, NullSchema):
            return const is None
        return getattr(part, "const", None) is not None

    def _create_typed_schema(self, declared: Any, document: Dict[str, Any], path: str) -> Schema:
        if isinstance(declared, list):
            types = list(dict.fromkeys(declared))
            for json_type in types:
                self._check_type_name(json_type, path)
            if len(types) == 2 and "null" in types:
                (json_type,) = [t for t in types if t != "null"]
                return self._create_single_type(json_type, document, path).as_nullable()
            if len(types) == 1:
                return self._create_single_type(types[0], document, path)
            if not types:
                raise SchemaError(f"'type' at '{path}' must not be empty")
            return AnyOfSchema(tuple(self._create_single_type(t, document, path) for t in types))

        self._check_type_name(declared, path)
        return self._create_single_type(declared, document, path)

    def _check_type_name(self, json_type: Any, path: str) -> None:
        if json_type not in _TYPE_KEYWORDS:
            raise SchemaError(f"Unknown type {json_type!r} at '{path}'")

    def _create_single_type(self, json_type: str, document: Dict[str, Any], path: str,
                            allowed: frozenset = frozenset()) -> Schema:
        ignored = set(document) - _GENERAL_KEYWORDS - _TYPE_KEYWORDS[json_type] - allowed
        for keyword in sorted(ignored):
            logger.warning(f"Ignoring keyword '{keyword}' at '{path}' for type '{json_type}'")

        if json_type == "string":
            return self._create_string_schema(document, path)
        if json_type in ("number", "integer"):
            return self._create_number_schema(json_type, document, path)
        if json_type == "boolean":
            return BooleanSchema(const=self._get(document, K.CONST, bool, path))
        if json_type == "null":
            return NullSchema()
        if json_type == "array":
            return self._create_array_schema(document, path)
        return self._create_object_schema(document, path)

    def _create_string_schema(self, document: Dict[str, Any], path: str) -> StringSchema:
        return StringSchema(
            min_length=self._get(document, K.MIN_LENGTH, int, path),
            max_length=self._get(document, K.MAX_LENGTH, int, path),
            pattern=self._get(document, K.PATTERN, str, path),
            format=self._get(document, K.FORMAT, str, path),
            const=self._get(document, K.CONST, str, path),
        )

    def _create_number_schema(self, json_type: str, document: Dict[str, Any], path: str):
        schema_class = IntegerSchema if json_type == "integer" else NumberSchema
        return schema_class(
            minimum=self._get(document, K.MINIMUM, _NUMBER, path),
            maximum=self._get(document, K.MAXIMUM, _NUMBER, path),
            exclusive_minimum=self._get(document, K.EXCLUSIVE_MINIMUM, _NUMBER, path),
            exclusive_maximum=self._get(document, K.EXCLUSIVE_MAXIMUM, _NUMBER, path),
            multiple_of=self._get(document, K.MULTIPLE_OF, _NUMBER, path),
            const=self._get(document, K.CONST, _NUMBER, path),
        )

    def _create_array_schema(self, document: Dict[str, Any], path: str) -> ArraySchema:
        return ArraySchema(
            items=self._child(document, K.ITEMS, path),
            min_items=self._get(document, K.MIN_ITEMS, int, path),
            max_items=self._get(document, K.MAX_ITEMS, int, path),
            unique_items=self._get(document, K.UNIQUE_ITEMS, bool, path),
            prefix_items=self._children(document, K.PREFIX_ITEMS, path),
            contains=self._child(document, K.CONTAINS, path),
            min_contains=self._get(document, K.MIN_CONTAINS, int, path),
            max_contains=self._get(document, K.MAX_CONTAINS, int, path),
            unevaluated_items=self._get(document, K.UNEVALUATED_ITEMS, bool, path),
        )

    def _create_object_schema(self, document: Dict[str, Any], path: str) -> ObjectSchema:
        additional = document.get(K.ADDITIONAL_PROPERTIES, True)
        if not isinstance(additional, bool):
            additional = self._child(document, K.ADDITIONAL_PROPERTIES, path)

        required = self._get(document, K.REQUIRED, list, path, [])
        if not all(isinstance(name, str) for name in required):
            raise SchemaError(f"'required' at '{path}' must be a list of strings")

        dependent_required = self._get(document, K.DEPENDENT_REQUIRED, dict, path, {})
        for name, dependencies in dependent_required.items():
            if not isinstance(dependencies, list) or not all(isinstance(d, str) for d in dependencies):
                raise SchemaError(f"'dependentRequired' entry '{name}' at '{path}' must be a list of strings")

        return ObjectSchema(
            properties=self._child_map(document, K.PROPERTIES, path),
            required=tuple(required),
            min_properties=self._get(document, K.MIN_PROPERTIES, int, path),
            max_properties=self._get(document, K.MAX_PROPERTIES, int, path),
            additional_properties=additional,
            pattern_properties=self._child_map(document, K.PATTERN_PROPERTIES, path),
            property_names=self._child(document, K.PROPERTY_NAMES, path),
            dependent_required=dependent_required,
            dependent_schemas=self._child_map(document, K.DEPENDENT_SCHEMAS, path),
            unevaluated_properties=self._get(document, K.UNEVALUATED_PROPERTIES, bool, path),
        )


def parse_schema(document: Any, verbose: bool = False) -> Schema:
    """
    Parse a JSON Schema document into a schema tree.

    Args:
        document: Schema document
        verbose: If True, log parsing details

    Returns:
        Root of the schema tree
    """
    return SchemaParser(verbose=verbose).parse(document)
