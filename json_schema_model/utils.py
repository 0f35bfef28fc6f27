"""
Utility classes and functions for the JSON Schema model validator.
"""

import json
import re
from functools import lru_cache
from typing import Any, Hashable, List, Pattern

from .api import SchemaError


class JsonPointer:
    """
    Utility class for handling JSON Pointers (RFC 6901).

    JSON Pointers are used to reference specific locations within a JSON document.
    """

    @staticmethod
    def from_parts(parts: List[Any]) -> str:
        """
        Create a JSON Pointer from path parts.

        Args:
            parts: List of path segments

        Returns:
            JSON Pointer string, "/" for the document root
        """
        if not parts:
            return "/"

        return "/" + "/".join(JsonPointer.escape_part(part) for part in parts)

    @staticmethod
    def join(pointer: str, part: Any) -> str:
        """
        Append a single segment to a JSON Pointer.

        Args:
            pointer: Existing pointer ("/" denotes the root)
            part: Path segment to append

        Returns:
            Extended JSON Pointer string
        """
        escaped = JsonPointer.escape_part(part)
        if pointer in ("", "/"):
            return "/" + escaped
        return f"{pointer}/{escaped}"

    @staticmethod
    def escape_part(part: Any) -> str:
        """
        Escape a JSON Pointer path segment.

        Args:
            part: Path segment to escape

        Returns:
            Escaped path segment
        """
        # Replace ~ with ~0 and / with ~1
        return str(part).replace("~", "~0").replace("/", "~1")

    @staticmethod
    def unescape_part(part: str) -> str:
        """
        Unescape a JSON Pointer path segment.

        Args:
            part: Escaped path segment

        Returns:
            Unescaped path segment
        """
        # Replace ~1 with / and ~0 with ~
        return part.replace("~1", "/").replace("~0", "~")

    @staticmethod
    def to_parts(pointer: str) -> List[str]:
        """
        Split a JSON Pointer into its component parts.

        A leading "#" (URI fragment form, as used by $ref) is accepted.

        Args:
            pointer: JSON Pointer string

        Returns:
            List of path segments

        Raises:
            ValueError: If the pointer does not start with "/"
        """
        if pointer.startswith("#"):
            pointer = pointer[1:]

        if pointer in ("", "/"):
            return []

        if not pointer.startswith("/"):
            raise ValueError(f"Invalid JSON Pointer: {pointer}")

        return [JsonPointer.unescape_part(part) for part in pointer[1:].split("/")]


class TypeUtils:
    """Utilities for working with JSON types."""

    @staticmethod
    def get_json_type(value: Any) -> str:
        """
        Get the JSON type name for a Python value.

        Args:
            value: Python value

        Returns:
            JSON type name ("integer" for int, "number" for float)
        """
        if value is None:
            return "null"
        elif isinstance(value, bool):
            return "boolean"
        elif isinstance(value, int):
            return "integer"
        elif isinstance(value, float):
            return "number"
        elif isinstance(value, str):
            return "string"
        elif isinstance(value, (list, tuple)):
            return "array"
        elif isinstance(value, dict):
            return "object"
        else:
            return type(value).__name__

    @staticmethod
    def is_number(value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    @staticmethod
    def is_integer(value: Any) -> bool:
        """Integers, and floats with an integral value (1.0 is an integer in JSON)."""
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        return isinstance(value, float) and value.is_integer()

    @staticmethod
    def matches_type(value: Any, json_type: str) -> bool:
        """
        Check whether a value has the given JSON type.

        Args:
            value: Value to check
            json_type: JSON type name

        Returns:
            True if the value belongs to the type
        """
        if json_type == "number":
            return TypeUtils.is_number(value)
        if json_type == "integer":
            return TypeUtils.is_integer(value)
        return TypeUtils.get_json_type(value) == json_type


def json_equal(left: Any, right: Any) -> bool:
    """
    Structural equality with JSON semantics.

    Booleans never equal numbers, 1 equals 1.0, arrays compare element-wise
    and objects compare their key sets and values.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if TypeUtils.is_number(left) and TypeUtils.is_number(right):
        return left == right
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(json_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(json_equal(left[k], right[k]) for k in left)
    if type(left) is not type(right):
        return False
    return left == right


def freeze(value: Any) -> Hashable:
    """
    Build a hashable key such that freeze(a) == freeze(b) iff json_equal(a, b).
    """
    if isinstance(value, bool):
        return ("boolean", value)
    if TypeUtils.is_number(value):
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return ("number", value)
    if isinstance(value, (list, tuple)):
        return ("array", tuple(freeze(item) for item in value))
    if isinstance(value, dict):
        return ("object", frozenset((key, freeze(item)) for key, item in value.items()))
    return (TypeUtils.get_json_type(value), value)


def format_json_value(value: Any) -> str:
    """Render a JSON value for error messages."""
    try:
        return json.dumps(value, sort_keys=True)
    except (TypeError, ValueError):
        return repr(value)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Pattern:
    """
    Compile a schema regular expression.

    Args:
        pattern: Regular expression source

    Returns:
        Compiled pattern

    Raises:
        SchemaError: If the pattern is not a valid regular expression
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise SchemaError(f"Invalid regex pattern '{pattern}': {e}") from e


class SchemaKeywords:
    """Constants for JSON Schema 2020-12 keywords."""

    # Type keywords
    TYPE = "type"

    # Number keywords
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXCLUSIVE_MINIMUM = "exclusiveMinimum"
    EXCLUSIVE_MAXIMUM = "exclusiveMaximum"
    MULTIPLE_OF = "multipleOf"

    # String keywords
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    FORMAT = "format"

    # Array keywords
    ITEMS = "items"
    PREFIX_ITEMS = "prefixItems"
    MIN_ITEMS = "minItems"
    MAX_ITEMS = "maxItems"
    UNIQUE_ITEMS = "uniqueItems"
    CONTAINS = "contains"
    MIN_CONTAINS = "minContains"
    MAX_CONTAINS = "maxContains"
    UNEVALUATED_ITEMS = "unevaluatedItems"

    # Object keywords
    PROPERTIES = "properties"
    PATTERN_PROPERTIES = "patternProperties"
    ADDITIONAL_PROPERTIES = "additionalProperties"
    REQUIRED = "required"
    PROPERTY_NAMES = "propertyNames"
    MIN_PROPERTIES = "minProperties"
    MAX_PROPERTIES = "maxProperties"
    DEPENDENT_REQUIRED = "dependentRequired"
    DEPENDENT_SCHEMAS = "dependentSchemas"
    UNEVALUATED_PROPERTIES = "unevaluatedProperties"

    # Schema composition
    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"
    NOT = "not"
    IF = "if"
    THEN = "then"
    ELSE = "else"

    # Miscellaneous
    ENUM = "enum"
    CONST = "const"

    # Core vocabulary
    REF = "$ref"
    DEFS = "$defs"
    ID = "$id"
    SCHEMA = "$schema"
    COMMENT = "$comment"

    # Schema metadata
    TITLE = "title"
    DESCRIPTION = "description"
    DEFAULT = "default"
    EXAMPLES = "examples"
    READ_ONLY = "readOnly"
    WRITE_ONLY = "writeOnly"
    DEPRECATED = "deprecated"

    STRING_KEYWORDS = frozenset({MIN_LENGTH, MAX_LENGTH, PATTERN, FORMAT})
    NUMBER_KEYWORDS = frozenset({MINIMUM, MAXIMUM, EXCLUSIVE_MINIMUM, EXCLUSIVE_MAXIMUM, MULTIPLE_OF})
    ARRAY_KEYWORDS = frozenset({
        ITEMS, PREFIX_ITEMS, MIN_ITEMS, MAX_ITEMS, UNIQUE_ITEMS,
        CONTAINS, MIN_CONTAINS, MAX_CONTAINS, UNEVALUATED_ITEMS
    })
    OBJECT_KEYWORDS = frozenset({
        PROPERTIES, PATTERN_PROPERTIES, ADDITIONAL_PROPERTIES, REQUIRED,
        PROPERTY_NAMES, MIN_PROPERTIES, MAX_PROPERTIES, DEPENDENT_REQUIRED,
        DEPENDENT_SCHEMAS, UNEVALUATED_PROPERTIES
    })
    COMPOSITION_KEYWORDS = frozenset({ALL_OF, ANY_OF, ONE_OF, NOT, IF})
    METADATA_KEYWORDS = frozenset({
        TITLE, DESCRIPTION, DEFAULT, EXAMPLES, READ_ONLY, WRITE_ONLY,
        DEPRECATED, ID, SCHEMA, COMMENT, DEFS
    })

    # JSON Schema 2020-12 meta-schema URL
    META_SCHEMA_URL = "https://json-schema.org/draft/2020-12/schema"

    @staticmethod
    def get_implied_type(keyword: str):
        """
        Get the type implied by a schema keyword.

        Args:
            keyword: Schema keyword

        Returns:
            Implied type, or None if the keyword doesn't imply a type
        """
        if keyword in SchemaKeywords.NUMBER_KEYWORDS:
            return "number"
        if keyword in SchemaKeywords.STRING_KEYWORDS:
            return "string"
        if keyword in SchemaKeywords.ARRAY_KEYWORDS:
            return "array"
        if keyword in SchemaKeywords.OBJECT_KEYWORDS:
            return "object"
        return None
