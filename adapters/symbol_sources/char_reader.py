"""
Adapter: CharSymbolReader
Implements port SymbolSource: one symbol per input character.

Characters with an explicit registration get that tag; everything else is
classified by a pluggable fallback function ("alpha", "digit", "any" by default).
The reader only classifies: multi-character literals are assembled later.
"""
from __future__ import annotations

import string
from typing import Callable, Mapping, Optional, TextIO, Union

from contracts import Symbol
from adapters.symbol_sources.base import BufferedSymbolSource

DEFAULT_CHAR_TAGS: dict[str, str] = {
    "(": "left_parenthesis",
    ")": "right_parenthesis",
    "[": "left_bracket",
    "]": "right_bracket",
    "{": "left_brace",
    "}": "right_brace",
    "+": "plus",
    "-": "minus",
    "*": "times",
    "/": "over",
    "^": "hat",
    "%": "mod",
    ",": "comma",
    ";": "semi_colon",
    ".": "point",
    "=": "equal",
    "|": "bar",
    "_": "underscore",
    " ": "space",
    "\t": "tab",
    "\n": "new_line",
    "\r": "carriage_return",
}


def default_classifier(char: str) -> str:
    if char in string.digits:
        return "digit"
    if char.isalpha():
        return "alpha"
    return "any"


class CharSymbolReader(BufferedSymbolSource):
    def __init__(
        self,
        text: Union[str, TextIO],
        char_tags: Optional[Mapping[str, str]] = None,
        classifier: Optional[Callable[[str], str]] = None,
        end_of_stream_tag: Optional[str] = None,
    ) -> None:
        super().__init__(end_of_stream_tag)
        self._text = text if isinstance(text, str) else None
        self._stream = None if isinstance(text, str) else text
        self._char_tags = dict(DEFAULT_CHAR_TAGS if char_tags is None else char_tags)
        self._classifier = classifier or default_classifier
        self._offset = 0

    def register_char_tag(self, char: str, tag: str) -> None:
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        self._char_tags[char] = tag

    def _next_char(self) -> str:
        if self._text is not None:
            return self._text[self._offset] if self._offset < len(self._text) else ""
        return self._stream.read(1)

    def _pull(self) -> Optional[Symbol]:
        char = self._next_char()
        if not char:
            return None
        kind = self._char_tags.get(char)
        if kind is None:
            kind = self._classifier(char)
        symbol = Symbol(kind=kind, text=char, position=self._offset)
        self._offset += 1
        return symbol
