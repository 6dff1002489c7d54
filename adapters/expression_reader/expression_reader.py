"""
Adapter: ExpressionReader / ExpressionReaderBuilder
Generic operator-precedence reader. It knows nothing about arithmetic: every
combination step calls a registered function, and every leaf goes to the
configured LeafParser.

Grammar (precedence climbing, one fresh _Parser per call):
  expr     = operand (BINARY expr)*          binary ops bound by precedence
  operand  = UNARY expr                      parsed at max(precedence+1, current bound)
           | OPEN expr CLOSE                 expression delimiters
           | EXTERNAL_OPEN ... EXTERNAL_CLOSE  whole run handed to the leaf parser
           | LEAF [SEQUENCE_OPEN ... SEQUENCE_CLOSE]
  ignorable symbols are skipped everywhere except inside external/sequence runs

Syntax problems never raise: they come back as ParseIssue entries in a failed
ParseResult. DomainError raised by operator functions or leaf parsers propagates.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Generic, Mapping, Optional, Sequence, TypeVar, Union

from config import MAX_NESTING_DEPTH, get_settings
from contracts import (
    ConfigurationError,
    DelimiterPair,
    OperatorArity,
    OperatorEntry,
    ParseIssue,
    ParseResult,
    Symbol,
)
from ports.leaf_parser import LeafParser
from ports.symbol_source import SymbolSource
from adapters.symbol_sources import as_symbol_source

logger = logging.getLogger("ringreader.expression_reader")

T = TypeVar("T")

SourceLike = Union[str, Sequence[Symbol], SymbolSource]

_LOWEST = float("-inf")


class _SyntaxFailure(Exception):
    """Unwinds the recursive descent; converted to a ParseIssue at the top."""

    def __init__(self, issue: ParseIssue) -> None:
        super().__init__(issue.message)
        self.issue = issue


def _failure(
    code: str,
    message: str,
    symbol: Optional[Symbol] = None,
    expected: Optional[str] = None,
    found: Optional[str] = None,
) -> _SyntaxFailure:
    position = symbol.position if symbol is not None and symbol.position >= 0 else None
    if found is None and symbol is not None:
        found = symbol.text
    return _SyntaxFailure(ParseIssue(
        code=code, message=message, position=position, expected=expected, found=found,
    ))


# ──────────────────────────────────────────────────────────────────────────────
# Builder
# ──────────────────────────────────────────────────────────────────────────────

class ExpressionReaderBuilder(Generic[T]):
    """
    Mutable registration phase. build() freezes the tables into an
    ExpressionReader; later registrations never affect readers already built.
    """

    def __init__(self, leaf_parser: LeafParser[T]) -> None:
        if leaf_parser is None:
            raise ConfigurationError("A leaf parser must be provided.", code="MISSING_LEAF_PARSER")
        self._leaf_parser = leaf_parser
        self._unary: dict[str, OperatorEntry] = {}
        self._binary: dict[str, OperatorEntry] = {}
        self._expression_delimiters: dict[str, dict[str, DelimiterPair]] = {}
        self._sequence_delimiters: dict[str, set[str]] = {}
        self._external_delimiters: dict[str, set[str]] = {}
        self._ignorable: set[str] = set()

    def register_unary_operator(
        self, tag: str, fn: Callable[[T], T], precedence: int
    ) -> "ExpressionReaderBuilder[T]":
        _check_tag(tag)
        _check_operator(tag, fn, precedence)
        self._unary[tag] = OperatorEntry(tag, OperatorArity.UNARY, precedence, fn)
        return self

    def register_binary_operator(
        self,
        tag: str,
        fn: Callable[[T, T], T],
        precedence: int,
        right_associative: bool = False,
    ) -> "ExpressionReaderBuilder[T]":
        _check_tag(tag)
        _check_operator(tag, fn, precedence)
        self._binary[tag] = OperatorEntry(
            tag, OperatorArity.BINARY, precedence, fn, right_associative
        )
        return self

    def register_expression_delimiters(
        self,
        open_tag: str,
        close_tag: str,
        on_close: Optional[Callable[[T], T]] = None,
    ) -> "ExpressionReaderBuilder[T]":
        """`on_close`, when given, is applied to the grouped value (e.g. |x| -> abs)."""
        _check_tag(open_tag)
        _check_tag(close_tag)
        if on_close is not None and not callable(on_close):
            raise ConfigurationError(
                f"Closing operator for {open_tag!r} is not callable.", code="INVALID_OPERATOR"
            )
        if open_tag in self._external_delimiters:
            raise ConfigurationError(
                f"{open_tag!r} is already an external delimiter.", code="DELIMITER_CONFLICT"
            )
        self._expression_delimiters.setdefault(open_tag, {})[close_tag] = DelimiterPair(
            open_tag, close_tag, on_close
        )
        return self

    def register_sequence_delimiters(self, open_tag: str, close_tag: str) -> "ExpressionReaderBuilder[T]":
        _check_tag(open_tag)
        _check_tag(close_tag)
        self._sequence_delimiters.setdefault(open_tag, set()).add(close_tag)
        return self

    def register_external_delimiters(self, open_tag: str, close_tag: str) -> "ExpressionReaderBuilder[T]":
        _check_tag(open_tag)
        _check_tag(close_tag)
        if open_tag in self._expression_delimiters:
            raise ConfigurationError(
                f"{open_tag!r} is already an expression delimiter.", code="DELIMITER_CONFLICT"
            )
        self._external_delimiters.setdefault(open_tag, set()).add(close_tag)
        return self

    def mark_ignorable(self, *tags: str) -> "ExpressionReaderBuilder[T]":
        for tag in tags:
            _check_tag(tag)
            self._ignorable.add(tag)
        return self

    def build(self, max_nesting_depth: Optional[int] = None) -> "ExpressionReader[T]":
        structural = set(self._expression_delimiters) | set(self._external_delimiters)
        for closers in self._expression_delimiters.values():
            structural |= set(closers)
        for closers in self._external_delimiters.values():
            structural |= closers

        clashes = (set(self._unary) | set(self._binary)) & structural
        if clashes:
            raise ConfigurationError(
                f"Tags used both as operators and delimiters: {sorted(clashes)}",
                code="DELIMITER_CONFLICT",
            )
        hidden = self._ignorable & (set(self._unary) | set(self._binary) | structural)
        if hidden:
            raise ConfigurationError(
                f"Operator or delimiter tags marked ignorable: {sorted(hidden)}",
                code="DELIMITER_CONFLICT",
            )

        if max_nesting_depth is None:
            max_nesting_depth = get_settings().max_nesting_depth
        if not 1 <= max_nesting_depth <= MAX_NESTING_DEPTH:
            raise ConfigurationError(
                f"max_nesting_depth must be between 1 and {MAX_NESTING_DEPTH}, got {max_nesting_depth}.",
                code="INVALID_DEPTH",
            )

        return ExpressionReader(
            leaf_parser=self._leaf_parser,
            unary=dict(self._unary),
            binary=dict(self._binary),
            expression_delimiters={
                tag: MappingProxyType(dict(closers))
                for tag, closers in self._expression_delimiters.items()
            },
            sequence_delimiters={tag: frozenset(c) for tag, c in self._sequence_delimiters.items()},
            external_delimiters={tag: frozenset(c) for tag, c in self._external_delimiters.items()},
            ignorable=frozenset(self._ignorable),
            max_nesting_depth=max_nesting_depth,
        )


def _check_tag(tag: str) -> None:
    if not isinstance(tag, str) or not tag.strip():
        raise ConfigurationError(f"Invalid symbol tag {tag!r}.", code="INVALID_TAG")


def _check_operator(tag: str, fn: Any, precedence: Any) -> None:
    if not callable(fn):
        raise ConfigurationError(f"Operator {tag!r} is not callable.", code="INVALID_OPERATOR")
    if isinstance(precedence, bool) or not isinstance(precedence, int):
        raise ConfigurationError(
            f"Precedence of {tag!r} must be an integer, got {precedence!r}.",
            code="INVALID_PRECEDENCE",
        )


# ──────────────────────────────────────────────────────────────────────────────
# Reader
# ──────────────────────────────────────────────────────────────────────────────

class ExpressionReader(Generic[T]):
    """
    Immutable, reentrant reader. Safe to share between threads: all per-parse
    state lives in a _Parser created by each call.
    """

    def __init__(
        self,
        leaf_parser: LeafParser[T],
        unary: Mapping[str, OperatorEntry],
        binary: Mapping[str, OperatorEntry],
        expression_delimiters: Mapping[str, Mapping[str, DelimiterPair]],
        sequence_delimiters: Mapping[str, frozenset[str]],
        external_delimiters: Mapping[str, frozenset[str]],
        ignorable: frozenset[str],
        max_nesting_depth: int,
    ) -> None:
        self.leaf_parser = leaf_parser
        self.unary_operators = MappingProxyType(dict(unary))
        self.binary_operators = MappingProxyType(dict(binary))
        self.expression_delimiters = MappingProxyType(dict(expression_delimiters))
        self.sequence_delimiters = MappingProxyType(dict(sequence_delimiters))
        self.external_delimiters = MappingProxyType(dict(external_delimiters))
        self.ignorable = ignorable
        self.max_nesting_depth = max_nesting_depth

        closers: set[str] = set()
        for table in (self.expression_delimiters, self.sequence_delimiters, self.external_delimiters):
            for close_tags in table.values():
                closers |= set(close_tags)
        self.closing_tags = frozenset(closers)

    # -- ExpressionReader protocol ------------------------------------------

    def try_parse(self, source: SourceLike) -> ParseResult[T]:
        symbols = as_symbol_source(source)
        try:
            value = _Parser(self, symbols).parse()
        except _SyntaxFailure as failure:
            logger.debug("Parse failed [%s]: %s", failure.issue.code, failure.issue.message)
            return ParseResult.fail(failure.issue)
        except RecursionError:
            # nested readers (polynomial coefficients) stack their own depth on top of ours
            logger.debug("Parse failed [NESTING_TOO_DEEP]: interpreter recursion limit reached")
            return ParseResult.fail(ParseIssue(
                code="NESTING_TOO_DEEP",
                message="Expression nesting exceeds the interpreter recursion limit.",
            ))
        return ParseResult.ok(value)

    def parse(self, source: SourceLike, errors: Optional[list[ParseIssue]] = None) -> Optional[T]:
        """Returns the value or None; issues are appended to `errors` when given."""
        result = self.try_parse(source)
        if errors is not None:
            errors.extend(result.issues)
        return result.value if result.success else None


class _Parser(Generic[T]):
    def __init__(self, reader: ExpressionReader[T], source: SymbolSource) -> None:
        self._reader = reader
        self._source = source
        self._eof = source.end_of_stream_tag

    def parse(self) -> T:
        value = self._expr(_LOWEST, 0)
        trailing = self._peek()
        if trailing.kind != self._eof:
            if trailing.kind in self._reader.closing_tags:
                raise _failure(
                    "UNEXPECTED_CLOSE_DELIMITER",
                    f"Closing delimiter {trailing.text!r} has no matching opening delimiter.",
                    trailing,
                )
            raise _failure(
                "UNEXPECTED_SYMBOL",
                f"Expected operator but received {trailing.text!r}.",
                trailing,
                expected="operator",
            )
        return value

    def _peek(self) -> Symbol:
        """Next significant symbol; ignorable symbols are consumed on the way."""
        symbol = self._source.peek()
        while symbol.kind in self._reader.ignorable:
            self._source.consume()
            symbol = self._source.peek()
        return symbol

    def _consume(self) -> Symbol:
        self._peek()
        return self._source.consume()

    def _expr(self, min_precedence: float, depth: int) -> T:
        if depth > self._reader.max_nesting_depth:
            raise _failure(
                "NESTING_TOO_DEEP",
                f"Expression nesting exceeds {self._reader.max_nesting_depth} levels.",
                self._peek(),
            )

        left = self._operand(min_precedence, depth)
        while True:
            symbol = self._peek()
            entry = self._reader.binary_operators.get(symbol.kind)
            if entry is None or entry.precedence < min_precedence:
                return left
            self._consume()
            next_min = entry.precedence if entry.right_associative else entry.precedence + 1
            right = self._expr(next_min, depth + 1)
            left = entry.apply(left, right)

    def _operand(self, min_precedence: float, depth: int) -> T:
        reader = self._reader
        symbol = self._peek()

        if symbol.kind == self._eof:
            raise _failure(
                "UNEXPECTED_END",
                "Unexpected end of expression.",
                symbol,
                expected="operand",
                found="end of stream",
            )

        if symbol.kind in reader.expression_delimiters:
            return self._group(depth)

        if symbol.kind in reader.closing_tags:
            raise _failure(
                "UNEXPECTED_CLOSE_DELIMITER",
                f"Closing delimiter {symbol.text!r} where an operand was expected.",
                symbol,
                expected="operand",
            )

        unary = reader.unary_operators.get(symbol.kind)
        if unary is not None:
            self._consume()
            # never looser than the operator this operand belongs to: 2^-1*3 == (2^-1)*3
            operand = self._expr(max(unary.precedence + 1, min_precedence), depth + 1)
            return unary.apply(operand)

        if symbol.kind in reader.binary_operators:
            raise _failure(
                "MISSING_OPERAND",
                f"Binary operator {symbol.text!r} can't follow another operator or start an expression.",
                symbol,
                expected="operand",
            )

        if symbol.kind in reader.external_delimiters:
            return self._leaf(self._delimited_run(reader.external_delimiters))

        run = [self._source.consume()]
        if reader.sequence_delimiters and self._peek().kind in reader.sequence_delimiters:
            run.extend(self._delimited_run(reader.sequence_delimiters))
        return self._leaf(run)

    def _group(self, depth: int) -> T:
        opening = self._consume()
        closers = self._reader.expression_delimiters[opening.kind]
        value = self._expr(_LOWEST, depth + 1)

        closing = self._peek()
        pair = closers.get(closing.kind)
        if pair is None:
            expected = " or ".join(sorted(closers))
            if closing.kind == self._eof:
                raise _failure(
                    "MISSING_CLOSE_DELIMITER",
                    f"Delimiter {opening.text!r} at {opening.position} is never closed.",
                    closing,
                    expected=expected,
                    found="end of stream",
                )
            if closing.kind in self._reader.closing_tags:
                raise _failure(
                    "MISMATCHED_DELIMITER",
                    f"Delimiter {opening.text!r} at {opening.position} closed by {closing.text!r}.",
                    closing,
                    expected=expected,
                )
            raise _failure(
                "UNEXPECTED_SYMBOL",
                f"Expected operator but received {closing.text!r}.",
                closing,
                expected=f"operator or {expected}",
            )

        self._consume()
        if pair.on_close is not None:
            return pair.on_close(value)
        return value

    def _delimited_run(self, table: Mapping[str, frozenset[str]]) -> list[Symbol]:
        """
        Raw symbols from an opening delimiter to its matching close, inclusive.
        Nested delimiters of the same table are counted; nothing is skipped.
        """
        opening = self._consume()
        run = [opening]
        stack = [opening]
        closing_tags = set().union(*table.values())
        while stack:
            symbol = self._source.peek()
            if symbol.kind == self._eof:
                raise _failure(
                    "MISSING_CLOSE_DELIMITER",
                    f"Delimiter {stack[-1].text!r} at {stack[-1].position} is never closed.",
                    symbol,
                    expected=" or ".join(sorted(table[stack[-1].kind])),
                    found="end of stream",
                )
            self._source.consume()
            run.append(symbol)
            if symbol.kind in table[stack[-1].kind]:
                stack.pop()
            elif symbol.kind in table:
                stack.append(symbol)
            elif symbol.kind in closing_tags:
                raise _failure(
                    "MISMATCHED_DELIMITER",
                    f"Delimiter {stack[-1].text!r} at {stack[-1].position} closed by {symbol.text!r}.",
                    symbol,
                    expected=" or ".join(sorted(table[stack[-1].kind])),
                )
        return run

    def _leaf(self, run: list[Symbol]) -> T:
        result = self._reader.leaf_parser.try_parse(run)
        if result.success:
            return result.value

        text = "".join(symbol.text for symbol in run)
        inner = result.errors[0] if result.errors else None
        raise _failure(
            inner.code if inner is not None else "INVALID_LEAF",
            inner.message if inner is not None else f"Can't parse {text!r}.",
            run[0],
            expected=inner.expected if inner is not None else None,
            found=text,
        )
