"""
Adapter: ElementFractionParser
Implements port LeafParser for fraction fields: a leaf is an element of the
underlying domain, lifted to element/1. Proper fractions come from the `over`
operator of the reader, not from the leaf.
"""
from __future__ import annotations

from typing import Generic, Sequence, TypeVar

from contracts import ConfigurationError, ParseResult, Symbol
from ports.algebra import EuclideanDomain
from ports.leaf_parser import LeafParser
from adapters.algebra.fraction import Fraction

T = TypeVar("T")


class ElementFractionParser(Generic[T]):
    def __init__(self, element_parser: LeafParser[T], domain: EuclideanDomain[T]) -> None:
        if element_parser is None:
            raise ConfigurationError("An element parser must be provided.", code="MISSING_LEAF_PARSER")
        if domain is None:
            raise ConfigurationError("A Euclidean domain must be provided.", code="MISSING_DOMAIN")
        self._elements = element_parser
        self._domain = domain

    def try_parse(self, symbols: Sequence[Symbol]) -> ParseResult[Fraction[T]]:
        result = self._elements.try_parse(symbols)
        if not result.success:
            return ParseResult.fail(*result.issues)
        return ParseResult.ok(
            Fraction(result.value, self._domain.multiplicative_identity, self._domain),
            result.issues,
        )
