"""
Validation context: the immutable path accumulator passed through recursion.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Optional, Tuple

from .utils import JsonPointer

if TYPE_CHECKING:
    from .registry import SchemaRegistry


@dataclass(frozen=True)
class ValidationContext:
    """
    Context for validation operations.

    Holds the JSON Pointer of the value being validated and the registry
    used to resolve ``$ref`` schemas. A context is never mutated; descending
    into a property or array index derives a new one.

    Attributes:
        path: JSON Pointer to the current value ("/" is the root)
        registry: Registry used to resolve references, if any
        refs: References entered at the current path, outermost first
    """
    path: str = "/"
    registry: Optional["SchemaRegistry"] = None
    refs: Tuple[str, ...] = ()

    def with_property(self, name: str) -> "ValidationContext":
        """
        Derive a context for an object property.

        Args:
            name: Property name

        Returns:
            New context whose path ends with the property name
        """
        return replace(self, path=JsonPointer.join(self.path, name), refs=())

    def with_index(self, index: int) -> "ValidationContext":
        """
        Derive a context for an array element.

        Args:
            index: Element index

        Returns:
            New context whose path ends with the index
        """
        return replace(self, path=JsonPointer.join(self.path, index), refs=())

    def with_registry(self, registry: "SchemaRegistry") -> "ValidationContext":
        """Derive a context that resolves references through ``registry``."""
        return replace(self, registry=registry)

    def with_ref(self, ref: str) -> "ValidationContext":
        """Derive a context that records ``ref`` as entered at the current path."""
        return replace(self, refs=self.refs + (ref,))

    def __str__(self) -> str:
        return f"ValidationContext(path={self.path})"
