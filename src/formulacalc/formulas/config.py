"""Immutable operator/function configuration for the formula engine.

A :class:`FormulaConfig` is passed to every tokenizer, classifier,
evaluator and markup call (or held by a ``FormulaEngine``).  Nothing in
the engine reads ambient global state, so several configurations can be
used side by side.

Function names are matched by the tokenizer in configuration order, the
first name that prefixes the remaining text wins.  Names that share a
prefix must list the longer one first (``log10`` before ``log``,
``sinh`` before ``sin``) or the longer one is never matched whole.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, field_validator

import formulacalc.functions.binary  # noqa: F401  (registers operators)
import formulacalc.functions.unary  # noqa: F401  (registers functions)
from formulacalc.formulas.errors import FormulaConfigError
from formulacalc.functions.registry import get_binary_op, get_unary_fn

_FUNCTION_NAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]*")

STANDARD_FUNCTIONS: tuple[str, ...] = (
    "sin",
    "cos",
    "tan",
    "log10",
    "log",
    "exp",
    "sqrt",
    "abs",
    "asin",
    "acos",
    "atan",
)

STANDARD_OPERATORS: tuple[str, ...] = ("+", "-", "*", "/", "^")

EXTENDED_FUNCTIONS: tuple[str, ...] = (
    "sinh",
    "cosh",
    "tanh",
    "asinh",
    "acosh",
    "atanh",
    *STANDARD_FUNCTIONS,
    "cot",
    "sec",
    "csc",
)

EXTENDED_OPERATORS: tuple[str, ...] = (*STANDARD_OPERATORS, "%")

PRESETS: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "standard": (STANDARD_FUNCTIONS, STANDARD_OPERATORS),
    "extended": (EXTENDED_FUNCTIONS, EXTENDED_OPERATORS),
}


class BinaryOperator(BaseModel):
    """A configured infix operator."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    precedence: int
    apply: Callable[[float, float], float]


class FormulaConfig(BaseModel):
    """Operator set and function table used by one engine configuration.

    Both tables are stored as read-only mappings, so a shared config such
    as ``DEFAULT_CONFIG`` cannot be altered after construction.

    Attributes:
        functions: Function name -> unary callable, in match order.
        operators: Operator symbol -> :class:`BinaryOperator`.
        function_precedence: Synthetic precedence of function application.
        implicit_operator: Operator the tokenizer inserts for juxtaposition.
    """

    model_config = ConfigDict(frozen=True)

    functions: Mapping[str, Callable[[float], float]]
    operators: Mapping[str, BinaryOperator]
    function_precedence: int = 4
    implicit_operator: str = "*"

    @field_validator("functions")
    @classmethod
    def _check_function_names(
        cls, value: Mapping[str, Callable[[float], float]]
    ) -> Mapping[str, Callable[[float], float]]:
        for name in value:
            if not _FUNCTION_NAME_RE.fullmatch(name):
                raise ValueError(f"invalid function name: {name!r}")
        return MappingProxyType(dict(value))

    @field_validator("operators")
    @classmethod
    def _check_operator_symbols(
        cls, value: Mapping[str, BinaryOperator]
    ) -> Mapping[str, BinaryOperator]:
        for symbol, op in value.items():
            if (
                len(symbol) != 1
                or symbol.isalnum()
                or symbol.isspace()
                or symbol in "()"
                or symbol == "."
            ):
                raise ValueError(f"invalid operator symbol: {symbol!r}")
            if op.symbol != symbol:
                raise ValueError(f"operator {op.symbol!r} registered as {symbol!r}")
        return MappingProxyType(dict(value))

    @property
    def function_names(self) -> tuple[str, ...]:
        return tuple(self.functions)

    @property
    def operator_symbols(self) -> tuple[str, ...]:
        return tuple(self.operators)


def build_config(
    functions: Iterable[str] = STANDARD_FUNCTIONS,
    operators: Iterable[str] = STANDARD_OPERATORS,
) -> FormulaConfig:
    """Build a configuration from catalog function names and operator symbols.

    Args:
        functions: Function names, in the order the tokenizer should try them.
        operators: Operator symbols from the built-in operator catalog.

    Returns:
        A frozen :class:`FormulaConfig`.

    Raises:
        FormulaConfigError: If a name or symbol is not in the catalog, or
            the resulting configuration is invalid.
    """
    table: dict[str, Callable[[float], float]] = {}
    for name in functions:
        try:
            table[name] = get_unary_fn(name)
        except KeyError as exc:
            raise FormulaConfigError(f"Unknown function in config: {name!r}") from exc

    ops: dict[str, BinaryOperator] = {}
    for symbol in operators:
        try:
            precedence, fn = get_binary_op(symbol)
        except KeyError as exc:
            raise FormulaConfigError(f"Unknown operator in config: {symbol!r}") from exc
        ops[symbol] = BinaryOperator(symbol=symbol, precedence=precedence, apply=fn)

    try:
        return FormulaConfig(functions=table, operators=ops)
    except ValueError as exc:
        raise FormulaConfigError(str(exc)) from exc


def preset_config(name: str) -> FormulaConfig:
    """Return the configuration for a named preset (``standard``/``extended``)."""
    if name not in PRESETS:
        raise FormulaConfigError(
            f"Unknown preset: {name!r}. Available: {sorted(PRESETS)}"
        )
    functions, operators = PRESETS[name]
    return build_config(functions, operators)


DEFAULT_CONFIG = preset_config("standard")
EXTENDED_CONFIG = preset_config("extended")
