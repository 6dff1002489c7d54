"""
Univariate polynomial reading.

Public import:
    from adapters.polynomial_reader import UnivariatePolynomialReader
"""
from adapters.polynomial_reader.univariate_reader import UnivariatePolynomialReader

__all__ = ["UnivariatePolynomialReader"]
