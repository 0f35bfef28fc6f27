"""
Base classes for the schema model.

Every schema variant is a frozen dataclass deriving from ``Schema``. The set
of variants is closed: validation and serialization dispatch on the concrete
class and reject anything they do not know.
"""

from abc import ABC
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Iterable, Mapping, Optional, Tuple

from ..api import SchemaError, ValidationResult
from ..utils import compile_pattern

if TYPE_CHECKING:
    from ..context import ValidationContext


class _NotSet:
    """Marker for metadata values that are absent (as opposed to JSON null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_SET"

    def __bool__(self) -> bool:
        return False


NOT_SET = _NotSet()


def frozen_mapping(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    """Copy a mapping into a read-only view."""
    return MappingProxyType(dict(mapping or {}))


def ordered_names(names: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """Deduplicate names while keeping their first-seen order."""
    return tuple(dict.fromkeys(names or ()))


def check_non_negative(owner: str, keyword: str, value: Optional[int]) -> None:
    """
    Reject negative or non-integer counts.

    Raises:
        SchemaError: If the value is set and is not a non-negative integer
    """
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaError(f"{owner}: '{keyword}' must be a non-negative integer, got {value!r}")


def check_pattern(pattern: Optional[str]) -> None:
    """Fail fast on malformed regular expressions."""
    if pattern is not None:
        compile_pattern(pattern)


@dataclass(frozen=True)
class SchemaMetadata:
    """
    Annotations shared by every schema variant.

    Attributes:
        title: Short title
        description: Longer description
        default: Default value; NOT_SET when absent (None means JSON null)
        examples: Example values
        schema: The "$schema" dialect URI
        id: The "$id" URI
        comment: The "$comment" string
        defs: Reusable definitions ("$defs") referenced via "#/$defs/<name>"
        read_only: The "readOnly" annotation
        write_only: The "writeOnly" annotation
        deprecated: The "deprecated" annotation
        nullable: Whether JSON null is accepted alongside the schema's type
        inferred_type: Whether the type was implied by keywords rather than
            declared; values of other types are then left unconstrained
    """
    title: Optional[str] = None
    description: Optional[str] = None
    default: Any = NOT_SET
    examples: Optional[Tuple[Any, ...]] = None
    schema: Optional[str] = None
    id: Optional[str] = None
    comment: Optional[str] = None
    defs: Optional[Mapping[str, "Schema"]] = None
    read_only: Optional[bool] = None
    write_only: Optional[bool] = None
    deprecated: Optional[bool] = None
    nullable: bool = False
    inferred_type: bool = False

    __hash__ = None

    def __post_init__(self):
        if self.examples is not None:
            object.__setattr__(self, "examples", tuple(self.examples))
        if self.defs is not None:
            object.__setattr__(self, "defs", frozen_mapping(self.defs))

    @property
    def has_default(self) -> bool:
        return self.default is not NOT_SET


class Schema(ABC):
    """
    Base class for all schema variants.

    Subclasses are frozen dataclasses whose last field is ``metadata``.
    They compare by value and are unhashable: fields may hold mappings and
    arbitrary JSON values.
    """

    metadata: SchemaMetadata

    # JSON type enforced by the variant, None when the variant is not typed
    json_type: ClassVar[Optional[str]] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # Set before @dataclass runs so it does not generate a __hash__
        cls.__hash__ = None

    @property
    def title(self) -> Optional[str]:
        return self.metadata.title

    @property
    def description(self) -> Optional[str]:
        return self.metadata.description

    @property
    def default(self) -> Any:
        return self.metadata.default

    @property
    def examples(self) -> Optional[Tuple[Any, ...]]:
        return self.metadata.examples

    @property
    def defs(self) -> Optional[Mapping[str, "Schema"]]:
        return self.metadata.defs

    def _with_metadata(self, **changes) -> "Schema":
        return replace(self, metadata=replace(self.metadata, **changes))

    # Modifier methods for chaining

    def with_title(self, title: str) -> "Schema":
        return self._with_metadata(title=title)

    def with_description(self, description: str) -> "Schema":
        return self._with_metadata(description=description)

    def with_default(self, value: Any) -> "Schema":
        return self._with_metadata(default=value)

    def with_examples(self, *examples: Any) -> "Schema":
        return self._with_metadata(examples=tuple(examples))

    def with_id(self, id: str) -> "Schema":
        return self._with_metadata(id=id)

    def with_schema(self, schema: str) -> "Schema":
        return self._with_metadata(schema=schema)

    def with_comment(self, comment: str) -> "Schema":
        return self._with_metadata(comment=comment)

    def with_defs(self, **defs: "Schema") -> "Schema":
        merged = dict(self.metadata.defs or {})
        merged.update(defs)
        return self._with_metadata(defs=merged)

    def as_read_only(self) -> "Schema":
        return self._with_metadata(read_only=True)

    def as_write_only(self) -> "Schema":
        return self._with_metadata(write_only=True)

    def as_deprecated(self) -> "Schema":
        return self._with_metadata(deprecated=True)

    def as_nullable(self) -> "Schema":
        """
        Accept JSON null in addition to this schema.

        Untyped variants are wrapped in ``anyOf`` with a null schema.
        """
        from .logical import AnyOfSchema
        from .nulls import NullSchema

        return AnyOfSchema((self, NullSchema()))

    def validate(self, value: Any, context: Optional["ValidationContext"] = None) -> ValidationResult:
        """
        Validate a JSON value against this schema.

        Args:
            value: JSON value to validate
            context: Validation context (defaults to the document root)

        Returns:
            Valid or Invalid with every error found
        """
        from ..validator import Validator

        return Validator().validate(self, value, context)

    def to_json_schema(self) -> Dict[str, Any]:
        """Render this schema as a JSON Schema 2020-12 document."""
        from ..serializer import SchemaSerializer

        return SchemaSerializer().serialize(self)


class TypedSchema(Schema):
    """
    Base class for variants that enforce a single JSON type.

    The type is checked before any keyword; a mismatch is the only error
    reported for that value. Inferred variants skip values of other types
    instead.
    """

    def as_nullable(self) -> "Schema":
        return self._with_metadata(nullable=True)

    def as_inferred(self) -> "Schema":
        """Apply the keywords only to values of this type; accept values of any other type."""
        return self._with_metadata(inferred_type=True)
