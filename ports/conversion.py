"""
Port: IntegerConversion
Responsibility: two-way bridge between machine integers and domain elements.
Used for exponents and for folding integer literals into the active ring.
"""
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class IntegerConversion(Protocol[T]):
    def can_convert_to_int(self, element: T) -> bool:
        ...

    def to_int(self, element: T) -> int:
        """Raises DomainError when the element has no integer representation."""
        ...

    def from_int(self, value: int) -> T:
        """Total: every integer maps to an element."""
        ...
