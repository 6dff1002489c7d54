"""
Adapter: PolynomialCoefficientParser
Implements port LeafParser with a nested UnivariatePolynomialReader, so an outer
polynomial reader can take polynomials in another variable as coefficients.
"""
from __future__ import annotations

from typing import Generic, Optional, Sequence, TypeVar

from contracts import ConfigurationError, ParseResult, Symbol
from ports.conversion import IntegerConversion
from adapters.algebra.polynomial import UnivariatePolynomialNormalForm
from adapters.polynomial_reader.univariate_reader import UnivariatePolynomialReader
from adapters.symbol_sources.array_source import ArraySymbolSource

T = TypeVar("T")


class PolynomialCoefficientParser(Generic[T]):
    def __init__(
        self,
        reader: UnivariatePolynomialReader[T],
        conversion: Optional[IntegerConversion[T]] = None,
    ) -> None:
        if reader is None:
            raise ConfigurationError("A polynomial reader must be provided.", code="MISSING_LEAF_PARSER")
        self._reader = reader
        self._conversion = conversion

    @property
    def reader(self) -> UnivariatePolynomialReader[T]:
        return self._reader

    def try_parse(self, symbols: Sequence[Symbol]) -> ParseResult[UnivariatePolynomialNormalForm[T]]:
        return self._reader.try_parse(ArraySymbolSource(symbols), self._conversion)
