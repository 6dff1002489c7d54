"""
Adapter: StringSymbolReader
Implements port SymbolSource on top of CharSymbolReader, merging runs of
characters into single symbols:

  integer  : run of digits                      "123"
  double   : digits '.' digits [e[+-]digits]    "1.5", "2e3", "0.5E-2"
  string   : letter/underscore then alnum run   "x", "y_1" (re-tagged via keywords)
  blancks  : run of space/tab/new_line/cr       (only with join_blanks=True)

Any other character keeps its single-character tag ("plus", "left_parenthesis", ...).
"""
from __future__ import annotations

from typing import Callable, Mapping, Optional, TextIO, Union

from contracts import Symbol
from adapters.symbol_sources.base import BufferedSymbolSource
from adapters.symbol_sources.char_reader import CharSymbolReader

_BLANK_TAGS = frozenset({"space", "tab", "new_line", "carriage_return"})
_IDENTIFIER_START = frozenset({"alpha", "underscore"})
_IDENTIFIER_BODY = frozenset({"alpha", "underscore", "digit"})


class StringSymbolReader(BufferedSymbolSource):
    def __init__(
        self,
        text: Union[str, TextIO],
        keywords: Optional[Mapping[str, str]] = None,
        join_blanks: bool = True,
        read_doubles: bool = True,
        char_tags: Optional[Mapping[str, str]] = None,
        classifier: Optional[Callable[[str], str]] = None,
        end_of_stream_tag: Optional[str] = None,
    ) -> None:
        super().__init__(end_of_stream_tag)
        self._chars = CharSymbolReader(
            text,
            char_tags=char_tags,
            classifier=classifier,
            end_of_stream_tag=self.end_of_stream_tag,
        )
        self._keywords: dict[str, str] = dict(keywords or {})
        self._join_blanks = join_blanks
        self._read_doubles = read_doubles

    def register_keyword(self, word: str, tag: str) -> None:
        self._keywords[word] = tag

    # -- Private ---------------------------------------------------------------

    def _pull(self) -> Optional[Symbol]:
        first = self._chars.peek()
        if first.kind == self.end_of_stream_tag:
            return None

        if first.kind in _IDENTIFIER_START:
            text = self._take_while(_IDENTIFIER_BODY)
            return Symbol(kind=self._keywords.get(text, "string"), text=text, position=first.position)

        if first.kind == "digit":
            return self._read_number(first.position)

        if first.kind in _BLANK_TAGS and self._join_blanks:
            text = self._take_while(_BLANK_TAGS)
            return Symbol(kind="blancks", text=text, position=first.position)

        return self._chars.consume()

    def _take_while(self, kinds: frozenset[str]) -> str:
        parts: list[str] = []
        while self._chars.peek().kind in kinds:
            parts.append(self._chars.consume().text)
        return "".join(parts)

    def _read_number(self, position: int) -> Symbol:
        text = self._take_while(frozenset({"digit"}))
        if not self._read_doubles:
            return Symbol(kind="integer", text=text, position=position)

        kind = "integer"
        if self._chars.peek().kind == "point" and self._chars.peek(1).kind == "digit":
            text += self._chars.consume().text
            text += self._take_while(frozenset({"digit"}))
            kind = "double"

        marker = self._chars.peek()
        if marker.text in ("e", "E"):
            sign = self._chars.peek(1)
            if sign.kind == "digit":
                text += self._chars.consume().text
                text += self._take_while(frozenset({"digit"}))
                kind = "double"
            elif sign.kind in ("plus", "minus") and self._chars.peek(2).kind == "digit":
                text += self._chars.consume().text + self._chars.consume().text
                text += self._take_while(frozenset({"digit"}))
                kind = "double"

        return Symbol(kind=kind, text=text, position=position)
