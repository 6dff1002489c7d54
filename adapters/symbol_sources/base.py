"""
Buffered symbol source shared by the character, string and array readers.

Symbols are pulled lazily into a buffer; the buffer is never discarded, which
gives arbitrary lookahead (peek with offset) and cheap mark/restore.
"""
from __future__ import annotations

from typing import Optional

from config import get_settings
from contracts import Symbol


class BufferedSymbolSource:
    def __init__(self, end_of_stream_tag: Optional[str] = None) -> None:
        self.end_of_stream_tag = end_of_stream_tag or get_settings().end_of_stream_tag
        self._buffer: list[Symbol] = []
        self._pointer = 0
        self._exhausted = False
        self._end_position = 0

    # -- SymbolSource protocol ---------------------------------------------

    def peek(self, offset: int = 0) -> Symbol:
        if offset < 0:
            raise ValueError("Lookahead offset must be non-negative.")
        index = self._pointer + offset
        self._fill(index)
        if index < len(self._buffer):
            return self._buffer[index]
        return Symbol(kind=self.end_of_stream_tag, text="", position=self._end_position)

    def consume(self) -> Symbol:
        symbol = self.peek()
        if self._pointer < len(self._buffer):
            self._pointer += 1
        return symbol

    def is_at_eof(self) -> bool:
        return self.peek().kind == self.end_of_stream_tag

    def mark(self) -> int:
        return self._pointer

    def restore(self, mark: int) -> None:
        if mark < 0 or mark > len(self._buffer):
            raise ValueError(f"Invalid mark: {mark!r}")
        self._pointer = mark

    # -- Subclass hook -------------------------------------------------------

    def _pull(self) -> Optional[Symbol]:
        """Produces the next symbol from the underlying input, or None at its end."""
        raise NotImplementedError

    # -- Private ---------------------------------------------------------------

    def _fill(self, index: int) -> None:
        while not self._exhausted and len(self._buffer) <= index:
            symbol = self._pull()
            if symbol is None:
                self._exhausted = True
            else:
                self._buffer.append(symbol)
                self._end_position = max(self._end_position, symbol.position + len(symbol.text))
