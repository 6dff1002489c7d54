"""
Leaf parsers: one symbol run in, one domain element out.

Public import:
    from adapters.leaf_parsers import IntegerParser, ElementFractionParser
"""
from adapters.leaf_parsers.element_fraction_parser import ElementFractionParser
from adapters.leaf_parsers.simple_parsers import DoubleParser, IntegerParser

__all__ = [
    "DoubleParser",
    "ElementFractionParser",
    "IntegerParser",
]
