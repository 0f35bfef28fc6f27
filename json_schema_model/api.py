"""
Public result and error types for the JSON Schema model validator.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, ClassVar, Iterable, Optional, Tuple


class ErrorCode(Enum):
    """Enumeration of validation error codes."""
    TYPE_MISMATCH = auto()
    CONST_MISMATCH = auto()
    ENUM_MISMATCH = auto()
    STRING_TOO_SHORT = auto()
    STRING_TOO_LONG = auto()
    PATTERN_MISMATCH = auto()
    INVALID_FORMAT = auto()
    NUMBER_TOO_SMALL = auto()
    NUMBER_TOO_LARGE = auto()
    NUMBER_NOT_MULTIPLE = auto()
    ARRAY_TOO_SHORT = auto()
    ARRAY_TOO_LONG = auto()
    ARRAY_ITEMS_NOT_UNIQUE = auto()
    CONTAINS_VIOLATION = auto()
    UNEVALUATED_ITEM = auto()
    OBJECT_TOO_FEW_PROPERTIES = auto()
    OBJECT_TOO_MANY_PROPERTIES = auto()
    REQUIRED_PROPERTY_MISSING = auto()
    ADDITIONAL_PROPERTY_NOT_ALLOWED = auto()
    UNEVALUATED_PROPERTY = auto()
    ALL_OF_FAILED = auto()
    ANY_OF_NO_MATCH = auto()
    ONE_OF_NO_MATCH = auto()
    ONE_OF_MULTIPLE_MATCHES = auto()
    NOT_SCHEMA_MATCHED = auto()


class RangeKind(Enum):
    """The numeric bound keyword an OutOfRange error refers to."""
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXCLUSIVE_MINIMUM = "exclusiveMinimum"
    EXCLUSIVE_MAXIMUM = "exclusiveMaximum"

    @property
    def is_lower(self) -> bool:
        return self in (RangeKind.MINIMUM, RangeKind.EXCLUSIVE_MINIMUM)


class CompositionKind(Enum):
    """The composition keyword a CompositionViolation refers to."""
    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"
    NOT = "not"


class SchemaError(ValueError):
    """
    Raised for schema configuration errors.

    These are problems with the schema itself (malformed regex, invalid
    bounds, unresolved references, malformed documents) and are reported
    before or instead of validation, never as validation failures.
    """


@dataclass(frozen=True)
class ValidationError:
    """
    Base class of all validation errors.

    Attributes:
        path: JSON Pointer to the value that failed validation
    """
    path: str

    code: ClassVar[ErrorCode]

    @property
    def message(self) -> str:
        return self.code.name.lower().replace("_", " ")

    def __str__(self) -> str:
        return f"Error at '{self.path}': {self.message}"


@dataclass(frozen=True)
class TypeMismatch(ValidationError):
    expected: str
    actual: str

    code: ClassVar[ErrorCode] = ErrorCode.TYPE_MISMATCH

    @property
    def message(self) -> str:
        return f"Expected {self.expected}, got {self.actual}"


@dataclass(frozen=True)
class ConstMismatch(TypeMismatch):
    """A value differed from the schema's ``const``."""

    code: ClassVar[ErrorCode] = ErrorCode.CONST_MISMATCH

    @property
    def message(self) -> str:
        return f"Expected constant value {self.expected}, got {self.actual}"


@dataclass(frozen=True)
class EnumMismatch(TypeMismatch):
    """A value was not one of the enumerated values; ``expected`` lists them."""

    code: ClassVar[ErrorCode] = ErrorCode.ENUM_MISMATCH

    @property
    def message(self) -> str:
        return f"Value {self.actual} not in enumeration: [{self.expected}]"


@dataclass(frozen=True)
class MinLengthViolation(ValidationError):
    min: int
    actual: int

    code: ClassVar[ErrorCode] = ErrorCode.STRING_TOO_SHORT

    @property
    def message(self) -> str:
        return f"String length is {self.actual}, but minimum is {self.min}"


@dataclass(frozen=True)
class MaxLengthViolation(ValidationError):
    max: int
    actual: int

    code: ClassVar[ErrorCode] = ErrorCode.STRING_TOO_LONG

    @property
    def message(self) -> str:
        return f"String length is {self.actual}, but maximum is {self.max}"


@dataclass(frozen=True)
class PatternMismatch(ValidationError):
    pattern: str
    actual: str

    code: ClassVar[ErrorCode] = ErrorCode.PATTERN_MISMATCH

    @property
    def message(self) -> str:
        return f"String '{self.actual}' does not match pattern '{self.pattern}'"


@dataclass(frozen=True)
class InvalidFormat(ValidationError):
    format: str
    value: str

    code: ClassVar[ErrorCode] = ErrorCode.INVALID_FORMAT

    @property
    def message(self) -> str:
        return f"String '{self.value}' is not a valid '{self.format}'"


@dataclass(frozen=True)
class OutOfRange(ValidationError):
    kind: RangeKind
    bound: float
    actual: float

    @property
    def code(self) -> ErrorCode:  # type: ignore[override]
        return ErrorCode.NUMBER_TOO_SMALL if self.kind.is_lower else ErrorCode.NUMBER_TOO_LARGE

    @property
    def message(self) -> str:
        relation = {
            RangeKind.MINIMUM: "greater than or equal to",
            RangeKind.EXCLUSIVE_MINIMUM: "greater than",
            RangeKind.MAXIMUM: "less than or equal to",
            RangeKind.EXCLUSIVE_MAXIMUM: "less than",
        }[self.kind]
        return f"Value {self.actual} must be {relation} {self.bound}"


@dataclass(frozen=True)
class MultipleOfViolation(ValidationError):
    multiple_of: float
    actual: float

    code: ClassVar[ErrorCode] = ErrorCode.NUMBER_NOT_MULTIPLE

    @property
    def message(self) -> str:
        return f"Value {self.actual} is not a multiple of {self.multiple_of}"


@dataclass(frozen=True)
class MinItemsViolation(ValidationError):
    min: int
    actual: int

    code: ClassVar[ErrorCode] = ErrorCode.ARRAY_TOO_SHORT

    @property
    def message(self) -> str:
        return f"Array has {self.actual} items, but minimum is {self.min}"


@dataclass(frozen=True)
class MaxItemsViolation(ValidationError):
    max: int
    actual: int

    code: ClassVar[ErrorCode] = ErrorCode.ARRAY_TOO_LONG

    @property
    def message(self) -> str:
        return f"Array has {self.actual} items, but maximum is {self.max}"


@dataclass(frozen=True)
class UniqueViolation(ValidationError):
    code: ClassVar[ErrorCode] = ErrorCode.ARRAY_ITEMS_NOT_UNIQUE

    @property
    def message(self) -> str:
        return "Array items must be unique"


@dataclass(frozen=True)
class ContainsViolation(ValidationError):
    min: int
    max: Optional[int]
    actual: int

    code: ClassVar[ErrorCode] = ErrorCode.CONTAINS_VIOLATION

    @property
    def message(self) -> str:
        upper = "unbounded" if self.max is None else str(self.max)
        return (f"Array has {self.actual} items matching 'contains', "
                f"expected between {self.min} and {upper}")


@dataclass(frozen=True)
class UnevaluatedItem(ValidationError):
    index: int

    code: ClassVar[ErrorCode] = ErrorCode.UNEVALUATED_ITEM

    @property
    def message(self) -> str:
        return f"Unevaluated item at index {self.index} not allowed"


@dataclass(frozen=True)
class MinPropertiesViolation(ValidationError):
    min: int
    actual: int

    code: ClassVar[ErrorCode] = ErrorCode.OBJECT_TOO_FEW_PROPERTIES

    @property
    def message(self) -> str:
        return f"Object has {self.actual} properties, but minimum is {self.min}"


@dataclass(frozen=True)
class MaxPropertiesViolation(ValidationError):
    max: int
    actual: int

    code: ClassVar[ErrorCode] = ErrorCode.OBJECT_TOO_MANY_PROPERTIES

    @property
    def message(self) -> str:
        return f"Object has {self.actual} properties, but maximum is {self.max}"


@dataclass(frozen=True)
class MissingField(ValidationError):
    name: str

    code: ClassVar[ErrorCode] = ErrorCode.REQUIRED_PROPERTY_MISSING

    @property
    def message(self) -> str:
        return f"Missing required property '{self.name}'"


@dataclass(frozen=True)
class AdditionalProperty(ValidationError):
    name: str

    code: ClassVar[ErrorCode] = ErrorCode.ADDITIONAL_PROPERTY_NOT_ALLOWED

    @property
    def message(self) -> str:
        return f"Additional property '{self.name}' not allowed"


@dataclass(frozen=True)
class UnevaluatedProperty(ValidationError):
    name: str

    code: ClassVar[ErrorCode] = ErrorCode.UNEVALUATED_PROPERTY

    @property
    def message(self) -> str:
        return f"Unevaluated property '{self.name}' not allowed"


@dataclass(frozen=True)
class CompositionViolation(ValidationError):
    """
    A composition keyword (allOf, anyOf, oneOf, not) was not satisfied.

    Attributes:
        kind: The composition keyword
        detail: Human-readable explanation
        matched: Indices of branches that matched (oneOf only)
    """
    kind: CompositionKind
    detail: str
    matched: Tuple[int, ...] = ()

    @property
    def code(self) -> ErrorCode:  # type: ignore[override]
        if self.kind is CompositionKind.ALL_OF:
            return ErrorCode.ALL_OF_FAILED
        if self.kind is CompositionKind.ANY_OF:
            return ErrorCode.ANY_OF_NO_MATCH
        if self.kind is CompositionKind.ONE_OF:
            if len(self.matched) > 1:
                return ErrorCode.ONE_OF_MULTIPLE_MATCHES
            return ErrorCode.ONE_OF_NO_MATCH
        return ErrorCode.NOT_SCHEMA_MATCHED

    @property
    def message(self) -> str:
        return self.detail


class ValidationException(Exception):
    """Raised by ``raise_if_invalid`` when a result carries errors."""

    def __init__(self, errors: Iterable[ValidationError]):
        self.errors = tuple(errors)
        super().__init__(", ".join(str(error) for error in self.errors))


class ValidationResult(ABC):
    """
    Result of schema validation.

    Exactly one of two variants: ``Valid`` (no errors) or ``Invalid``
    (a non-empty tuple of errors in the order they were produced).
    """

    errors: Tuple[ValidationError, ...]

    @property
    @abstractmethod
    def valid(self) -> bool:
        """Whether the validation was successful."""

    def __bool__(self) -> bool:
        return self.valid

    def combine(self, other: "ValidationResult") -> "ValidationResult":
        """Concatenate the errors of two results."""
        return ValidationResult.from_errors(self.errors + other.errors)

    def raise_if_invalid(self) -> None:
        """
        Raise a ValidationException if this result carries errors.

        Raises:
            ValidationException: If the result is Invalid
        """
        if not self.valid:
            raise ValidationException(self.errors)

    @staticmethod
    def from_errors(errors: Iterable[ValidationError]) -> "ValidationResult":
        """
        Build a result from collected errors.

        Args:
            errors: Errors produced during validation

        Returns:
            Valid when there are no errors, Invalid otherwise
        """
        errors = tuple(errors)
        if not errors:
            return Valid()
        return Invalid(errors)


@dataclass(frozen=True)
class Valid(ValidationResult):
    """Successful validation result."""

    @property
    def valid(self) -> bool:
        return True

    @property
    def errors(self) -> Tuple[ValidationError, ...]:  # type: ignore[override]
        return ()


@dataclass(frozen=True)
class Invalid(ValidationResult):
    """Failed validation result with at least one error."""
    errors: Tuple[ValidationError, ...]

    def __post_init__(self):
        object.__setattr__(self, "errors", tuple(self.errors))
        if not self.errors:
            raise ValueError("Invalid requires at least one validation error")

    @property
    def valid(self) -> bool:
        return False


JsonValue = Any
"""A JSON value as produced by ``json.loads``: None, bool, int, float, str, list or dict."""
