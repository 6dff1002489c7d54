"""
Adapter: ArraySymbolSource
Implements port SymbolSource over a pre-built list of symbols, e.g. a leaf run
handed to a nested reader. An end-of-stream symbol is always appended.
"""
from __future__ import annotations

from typing import Iterable, Optional

from contracts import Symbol
from adapters.symbol_sources.base import BufferedSymbolSource


class ArraySymbolSource(BufferedSymbolSource):
    def __init__(self, symbols: Iterable[Symbol], end_of_stream_tag: Optional[str] = None) -> None:
        super().__init__(end_of_stream_tag)
        self._pending = [s for s in symbols if s.kind != self.end_of_stream_tag]
        self._next = 0

    def _pull(self) -> Optional[Symbol]:
        if self._next >= len(self._pending):
            return None
        symbol = self._pending[self._next]
        self._next += 1
        return symbol
