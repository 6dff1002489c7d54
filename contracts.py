"""
contracts.py — Single source of truth for the data types shared by ringreader.
Every module imports symbols, diagnostics and exceptions ONLY from here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterator, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

CONTRACTS_VERSION = "1.0.0"

T = TypeVar("T")


# ─────────────────────────── Exceptions ──────────────────────────────────

class RingReaderError(Exception):
    def __init__(self, message: str, code: str = "UNEXPECTED") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class DomainError(RingReaderError, ArithmeticError):
    """The formula is semantically invalid for the chosen algebraic structure."""


class DivisionByZeroError(DomainError, ZeroDivisionError):
    def __init__(self, message: str = "Division by the additive identity.") -> None:
        super().__init__(message, code="DIVISION_BY_ZERO")


class ConfigurationError(RingReaderError, ValueError):
    """Raised at construction or registration time, never during a parse."""


# ─────────────────────────── Symbols ─────────────────────────────────────

class Symbol(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str          # open category tag, e.g. "plus", "integer", "blancks"
    text: str          # literal text covered by the symbol
    position: int = -1 # offset of the first character, -1 when unknown


# ─────────────────────────── Diagnostics ─────────────────────────────────

class ParseIssue(BaseModel):
    severity: Literal["error", "warning", "info"] = "error"
    code: str      # e.g. "UNEXPECTED_SYMBOL", "MISSING_CLOSE_DELIMITER"
    message: str
    position: Optional[int] = None
    expected: Optional[str] = None
    found: Optional[str] = None


@dataclass
class ParseResult(Generic[T]):
    """
    Outcome of a try_parse call. A failed result never carries a value.
    Unpacks as (success, value).
    """
    success: bool
    value: Optional[T] = None
    issues: list[ParseIssue] = field(default_factory=list)

    @classmethod
    def ok(cls, value: T, issues: Optional[list[ParseIssue]] = None) -> "ParseResult[T]":
        return cls(success=True, value=value, issues=list(issues or []))

    @classmethod
    def fail(cls, *issues: ParseIssue) -> "ParseResult[T]":
        return cls(success=False, value=None, issues=list(issues))

    @property
    def errors(self) -> list[ParseIssue]:
        return [i for i in self.issues if i.severity == "error"]

    def __iter__(self) -> Iterator[Any]:
        yield self.success
        yield self.value


# ─────────────────────────── Operator tables ─────────────────────────────

class OperatorArity(str, Enum):
    UNARY = "unary"
    BINARY = "binary"


@dataclass(frozen=True)
class OperatorEntry:
    tag: str
    arity: OperatorArity
    precedence: int
    apply: Callable[..., Any]
    right_associative: bool = False


@dataclass(frozen=True)
class DelimiterPair:
    open_tag: str
    close_tag: str
    on_close: Optional[Callable[[Any], Any]] = None  # unary function applied to the grouped value


class ParseItemKind(str, Enum):
    INTEGER = "integer"          # a plain machine integer not yet committed to the ring
    COEFFICIENT = "coefficient"
    POLYNOMIAL = "polynomial"


@dataclass(frozen=True)
class ParseItem:
    """Intermediate value of the polynomial reader; kind says which of the three carriers `value` holds."""
    kind: ParseItemKind
    value: Any
