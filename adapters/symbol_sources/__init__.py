"""
Symbol source adapters.

Public import:
    from adapters.symbol_sources import as_symbol_source, StringSymbolReader
"""
from __future__ import annotations

from typing import Sequence, Union

from contracts import Symbol
from ports.symbol_source import SymbolSource
from adapters.symbol_sources.array_source import ArraySymbolSource
from adapters.symbol_sources.char_reader import CharSymbolReader, default_classifier
from adapters.symbol_sources.string_reader import StringSymbolReader


def as_symbol_source(source: Union[str, Sequence[Symbol], SymbolSource]) -> SymbolSource:
    """Text is tokenized with StringSymbolReader; symbol lists are wrapped as-is."""
    if isinstance(source, str):
        return StringSymbolReader(source)
    if isinstance(source, (list, tuple)):
        return ArraySymbolSource(source)
    return source


__all__ = [
    "ArraySymbolSource",
    "CharSymbolReader",
    "StringSymbolReader",
    "as_symbol_source",
    "default_classifier",
]
