"""
Port: LeafParser
Responsibility: turning one symbol (or a short symbol run) into a domain element,
without any operator combination.
"""
from typing import Protocol, Sequence, TypeVar, runtime_checkable

from contracts import ParseResult, Symbol

T = TypeVar("T", covariant=True)


@runtime_checkable
class LeafParser(Protocol[T]):
    def try_parse(self, symbols: Sequence[Symbol]) -> ParseResult[T]:
        """
        Parses the whole run into one element.
        Never raises for malformed text; failures are encoded in the returned result.
        """
        ...
