"""
Recursive validator for the schema model.
"""

import logging
import math
from fractions import Fraction
from typing import Any, Callable, Dict, List, Optional, Type

from .api import (
    AdditionalProperty,
    CompositionKind,
    CompositionViolation,
    ConstMismatch,
    ContainsViolation,
    EnumMismatch,
    InvalidFormat,
    MaxItemsViolation,
    MaxLengthViolation,
    MaxPropertiesViolation,
    MinItemsViolation,
    MinLengthViolation,
    MinPropertiesViolation,
    MissingField,
    MultipleOfViolation,
    OutOfRange,
    PatternMismatch,
    RangeKind,
    SchemaError,
    TypeMismatch,
    UnevaluatedItem,
    UnevaluatedProperty,
    UniqueViolation,
    ValidationError,
    ValidationResult,
)
from .context import ValidationContext
from .formats import FormatChecker
from .registry import SchemaRegistry
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
    StringSchema,
)
from .utils import TypeUtils, compile_pattern, format_json_value, freeze, json_equal

logger = logging.getLogger("json_schema_model")

Errors = List[ValidationError]


def is_multiple_of(value: float, multiple_of: float) -> bool:
    """
    Check divisibility, tolerating floating-point error.

    Args:
        value: Number to test
        multiple_of: Strictly positive divisor

    Returns:
        True if value / multiple_of is (close to) an integer
    """
    if isinstance(value, int) and isinstance(multiple_of, int):
        return value % multiple_of == 0
    if isinstance(value, float) and not math.isfinite(value):
        return False
    # Past 2**53 floats lose digits; compare exactly against the decimal divisor
    if isinstance(value, int) and abs(value) > 2 ** 53:
        return Fraction(value) % Fraction(str(multiple_of)) == 0

    quotient = value / multiple_of
    if math.isinf(quotient):
        return Fraction(value) % Fraction(str(multiple_of)) == 0
    return math.isclose(quotient, round(quotient), rel_tol=1e-9, abs_tol=1e-9)


class Validator:
    """
    Validates JSON values against schema trees.

    Every violated keyword is reported; checks never stop at the first
    error. Errors come back in the order the keywords are checked.
    """

    def __init__(self, verbose: bool = False, registry: Optional[SchemaRegistry] = None,
                 format_checker: Optional[FormatChecker] = None):
        """
        Initialize a new validator.

        Args:
            verbose: If True, log additional details during validation
            registry: Registry used to resolve references (by default one is
                built from the validated schema's definitions)
            format_checker: Checker for the ``format`` keyword
        """
        self.verbose = verbose
        self.registry = registry
        self.format_checker = format_checker or FormatChecker()
        if verbose:
            logger.setLevel(logging.DEBUG)

        self._handlers: Dict[Type[Schema], Callable[[Any, Any, ValidationContext], Errors]] = {
            StringSchema: self._validate_string,
            NumberSchema: self._validate_number,
            IntegerSchema: self._validate_number,
            BooleanSchema: self._validate_boolean,
            NullSchema: self._validate_null,
            EnumSchema: self._validate_enum,
            ArraySchema: self._validate_array,
            ObjectSchema: self._validate_object,
            AllOfSchema: self._validate_all_of,
            AnyOfSchema: self._validate_any_of,
            OneOfSchema: self._validate_one_of,
            NotSchema: self._validate_not,
            IfThenElseSchema: self._validate_if_then_else,
            RefSchema: self._validate_ref,
        }

    def validate(self, schema: Schema, value: Any,
                 context: Optional[ValidationContext] = None) -> ValidationResult:
        """
        Validate a value against a schema.

        Args:
            schema: Schema to validate against
            value: JSON value to validate
            context: Starting context (defaults to the document root)

        Returns:
            Valid, or Invalid with every error found

        Raises:
            SchemaError: If the schema is not a known variant or contains
                references that cannot be resolved
        """
        if context is None:
            context = ValidationContext()

        registry = context.registry or self.registry or SchemaRegistry.from_schema(schema)
        registry.check_references(schema)
        context = context.with_registry(registry)

        errors = self._collect(schema, value, context)
        if errors:
            logger.debug(f"Validation at {context.path} produced {len(errors)} error(s)")
        return ValidationResult.from_errors(errors)

    def _collect(self, schema: Schema, value: Any, context: ValidationContext) -> Errors:
        handler = self._handlers.get(type(schema))
        if handler is None:
            raise SchemaError(f"Unsupported schema type: {type(schema).__name__}")

        if schema.json_type is not None:
            if value is None and schema.metadata.nullable:
                return []
            if not TypeUtils.matches_type(value, schema.json_type):
                if schema.metadata.inferred_type:
                    return []
                return [TypeMismatch(context.path, expected=schema.json_type,
                                     actual=TypeUtils.get_json_type(value))]

        return handler(schema, value, context)

    def _const_errors(self, const: Any, value: Any, context: ValidationContext) -> Errors:
        if const is None or json_equal(value, const):
            return []
        return [ConstMismatch(context.path, expected=format_json_value(const),
                              actual=format_json_value(value))]

    # Scalars

    def _validate_string(self, schema: StringSchema, value: str, context: ValidationContext) -> Errors:
        errors: Errors = []
        length = len(value)

        if schema.min_length is not None and length < schema.min_length:
            errors.append(MinLengthViolation(context.path, min=schema.min_length, actual=length))

        if schema.max_length is not None and length > schema.max_length:
            errors.append(MaxLengthViolation(context.path, max=schema.max_length, actual=length))

        if schema.pattern is not None and compile_pattern(schema.pattern).search(value) is None:
            errors.append(PatternMismatch(context.path, pattern=schema.pattern, actual=value))

        errors.extend(self._const_errors(schema.const, value, context))

        if schema.format is not None and not self.format_checker.check(schema.format, value):
            errors.append(InvalidFormat(context.path, format=schema.format, value=value))

        return errors

    def _validate_number(self, schema: NumericSchema, value: float, context: ValidationContext) -> Errors:
        errors: Errors = []

        bounds = (
            (RangeKind.MINIMUM, schema.minimum, lambda bound: value < bound),
            (RangeKind.MAXIMUM, schema.maximum, lambda bound: value > bound),
            (RangeKind.EXCLUSIVE_MINIMUM, schema.exclusive_minimum, lambda bound: value <= bound),
            (RangeKind.EXCLUSIVE_MAXIMUM, schema.exclusive_maximum, lambda bound: value >= bound),
        )
        for kind, bound, violated in bounds:
            if bound is not None and violated(bound):
                errors.append(OutOfRange(context.path, kind=kind, bound=bound, actual=value))

        if schema.multiple_of is not None and not is_multiple_of(value, schema.multiple_of):
            errors.append(MultipleOfViolation(context.path, multiple_of=schema.multiple_of, actual=value))

        errors.extend(self._const_errors(schema.const, value, context))
        return errors

    def _validate_boolean(self, schema: BooleanSchema, value: bool, context: ValidationContext) -> Errors:
        return self._const_errors(schema.const, value, context)

    def _validate_null(self, schema: NullSchema, value: None, context: ValidationContext) -> Errors:
        return []

    def _validate_enum(self, schema: EnumSchema, value: Any, context: ValidationContext) -> Errors:
        if any(json_equal(value, allowed) for allowed in schema.values):
            return []
        expected = ", ".join(format_json_value(allowed) for allowed in schema.values)
        return [EnumMismatch(context.path, expected=expected, actual=format_json_value(value))]

    # Containers

    def _validate_array(self, schema: ArraySchema, value: list, context: ValidationContext) -> Errors:
        errors: Errors = []
        count = len(value)

        if schema.min_items is not None and count < schema.min_items:
            errors.append(MinItemsViolation(context.path, min=schema.min_items, actual=count))

        if schema.max_items is not None and count > schema.max_items:
            errors.append(MaxItemsViolation(context.path, max=schema.max_items, actual=count))

        if schema.unique_items and len({freeze(item) for item in value}) != count:
            errors.append(UniqueViolation(context.path))

        evaluated = set()
        for index, item in enumerate(value):
            if index < len(schema.prefix_items):
                item_schema = schema.prefix_items[index]
            elif schema.items is not None:
                item_schema = schema.items
            else:
                continue
            evaluated.add(index)
            errors.extend(self._collect(item_schema, item, context.with_index(index)))

        if schema.contains is not None:
            matches = [
                index for index, item in enumerate(value)
                if not self._collect(schema.contains, item, context.with_index(index))
            ]
            evaluated.update(matches)
            lower = 1 if schema.min_contains is None else schema.min_contains
            upper = schema.max_contains
            if len(matches) < lower or (upper is not None and len(matches) > upper):
                errors.append(ContainsViolation(context.path, min=lower, max=upper, actual=len(matches)))

        if schema.unevaluated_items is False:
            for index in range(count):
                if index not in evaluated:
                    errors.append(UnevaluatedItem(context.path, index=index))

        return errors

    def _validate_object(self, schema: ObjectSchema, value: dict, context: ValidationContext) -> Errors:
        errors: Errors = []
        count = len(value)

        if schema.min_properties is not None and count < schema.min_properties:
            errors.append(MinPropertiesViolation(context.path, min=schema.min_properties, actual=count))

        if schema.max_properties is not None and count > schema.max_properties:
            errors.append(MaxPropertiesViolation(context.path, max=schema.max_properties, actual=count))

        for name in schema.required:
            if name not in value:
                errors.append(MissingField(context.path, name=name))

        if schema.property_names is not None:
            for key in value:
                errors.extend(self._collect(schema.property_names, key, context.with_property(key)))

        evaluated = set()
        for name, property_schema in schema.properties.items():
            if name in value:
                evaluated.add(name)
                errors.extend(self._collect(property_schema, value[name], context.with_property(name)))

        pattern_matched = set()
        for key, item in value.items():
            if key in schema.properties:
                continue
            for pattern, pattern_schema in schema.pattern_properties.items():
                if compile_pattern(pattern).search(key) is not None:
                    pattern_matched.add(key)
                    errors.extend(self._collect(pattern_schema, item, context.with_property(key)))
        evaluated.update(pattern_matched)

        additional = schema.additional_properties
        if additional is not True:
            for key, item in value.items():
                if key in schema.properties or key in pattern_matched:
                    continue
                evaluated.add(key)
                if additional is False:
                    errors.append(AdditionalProperty(context.path, name=key))
                else:
                    errors.extend(self._collect(additional, item, context.with_property(key)))

        for trigger, dependencies in schema.dependent_required.items():
            if trigger in value:
                for name in dependencies:
                    if name not in value:
                        errors.append(MissingField(context.path, name=name))

        for trigger, dependent_schema in schema.dependent_schemas.items():
            if trigger in value:
                errors.extend(self._collect(dependent_schema, value, context))

        if schema.unevaluated_properties is False:
            for key in value:
                if key not in evaluated:
                    errors.append(UnevaluatedProperty(context.path, name=key))

        return errors

    # Composition

    def _branch_errors(self, schemas, value: Any, context: ValidationContext) -> List[Errors]:
        return [self._collect(branch, value, context) for branch in schemas]

    def _validate_all_of(self, schema: AllOfSchema, value: Any, context: ValidationContext) -> Errors:
        branch_errors = self._branch_errors(schema.schemas, value, context)
        failed = [index for index, errors in enumerate(branch_errors) if errors]
        if not failed:
            return []

        summary = CompositionViolation(
            context.path,
            kind=CompositionKind.ALL_OF,
            detail=f"Value failed {len(failed)} of {len(schema.schemas)} 'allOf' schemas",
        )
        return [summary] + [error for errors in branch_errors for error in errors]

    def _validate_any_of(self, schema: AnyOfSchema, value: Any, context: ValidationContext) -> Errors:
        branch_errors = []
        for branch in schema.schemas:
            errors = self._collect(branch, value, context)
            if not errors:
                return []
            branch_errors.append(errors)

        summary = CompositionViolation(
            context.path,
            kind=CompositionKind.ANY_OF,
            detail=f"Value does not match any of the {len(schema.schemas)} 'anyOf' schemas",
        )
        return [summary] + [error for errors in branch_errors for error in errors]

    def _validate_one_of(self, schema: OneOfSchema, value: Any, context: ValidationContext) -> Errors:
        branch_errors = self._branch_errors(schema.schemas, value, context)
        matched = tuple(index for index, errors in enumerate(branch_errors) if not errors)

        if len(matched) == 1:
            return []

        if not matched:
            summary = CompositionViolation(
                context.path,
                kind=CompositionKind.ONE_OF,
                detail=f"Value does not match any of the {len(schema.schemas)} 'oneOf' schemas",
            )
            return [summary] + [error for errors in branch_errors for error in errors]

        logger.debug(f"oneOf at {context.path} matched branches {list(matched)}")
        return [CompositionViolation(
            context.path,
            kind=CompositionKind.ONE_OF,
            detail=f"Value matches {len(matched)} 'oneOf' schemas {list(matched)}, expected exactly one",
            matched=matched,
        )]

    def _validate_not(self, schema: NotSchema, value: Any, context: ValidationContext) -> Errors:
        if self._collect(schema.schema, value, context):
            return []
        return [CompositionViolation(
            context.path,
            kind=CompositionKind.NOT,
            detail="Value must not match the 'not' schema",
        )]

    def _validate_if_then_else(self, schema: IfThenElseSchema, value: Any,
                               context: ValidationContext) -> Errors:
        matched = not self._collect(schema.condition, value, context)
        branch = schema.then_schema if matched else schema.else_schema
        logger.debug(f"Condition at {context.path} {'matched' if matched else 'did not match'}")
        if branch is None:
            return []
        return self._collect(branch, value, context)

    def _validate_ref(self, schema: RefSchema, value: Any, context: ValidationContext) -> Errors:
        if context.registry is None:
            raise SchemaError(f"No registry available to resolve '{schema.ref}'")
        if schema.ref in context.refs:
            chain = " -> ".join(context.refs + (schema.ref,))
            raise SchemaError(f"Reference re-entered at '{context.path}' without descending: {chain}")
        target = context.registry.resolve(schema.ref)
        return self._collect(target, value, context.with_ref(schema.ref))
