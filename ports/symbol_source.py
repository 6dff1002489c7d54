"""
Port: SymbolSource
Responsibility: uniform peek/consume access to a symbol stream, whether it comes
from a live character tokenizer or from a pre-built symbol array.
"""
from typing import Protocol, runtime_checkable

from contracts import Symbol


@runtime_checkable
class SymbolSource(Protocol):
    end_of_stream_tag: str

    def peek(self, offset: int = 0) -> Symbol:
        """
        Returns the symbol `offset` positions ahead without consuming it.
        Past the end of input, always returns the end-of-stream symbol.
        """
        ...

    def consume(self) -> Symbol:
        """Returns the next symbol and advances. End-of-stream is never consumed past."""
        ...

    def is_at_eof(self) -> bool:
        ...

    def mark(self) -> int:
        """Remembers the current position so an alternate grammar can restart from it."""
        ...

    def restore(self, mark: int) -> None:
        ...
