"""
Operator-precedence readers.

Public import:
    from adapters.expression_reader import ExpressionReaderBuilder, RingDrivenExpressionReader
"""
from adapters.expression_reader.expression_reader import ExpressionReader, ExpressionReaderBuilder
from adapters.expression_reader.ring_driven_reader import RingDrivenExpressionReader

__all__ = [
    "ExpressionReader",
    "ExpressionReaderBuilder",
    "RingDrivenExpressionReader",
]
