"""Central registry for unary formula functions and binary operators."""

from __future__ import annotations

from typing import Callable

UnaryFn = Callable[[float], float]
BinaryFn = Callable[[float, float], float]

_UNARY_FUNCTIONS: dict[str, UnaryFn] = {}
_BINARY_OPERATORS: dict[str, tuple[int, BinaryFn]] = {}


def register_unary(name: str) -> Callable:
    """Decorator that registers a unary function by name.

    Args:
        name: The name the function is called by inside a formula.

    Returns:
        The original function, unmodified.
    """

    def decorator(fn: UnaryFn) -> UnaryFn:
        _UNARY_FUNCTIONS[name] = fn
        return fn

    return decorator


def register_binary(symbol: str, precedence: int) -> Callable:
    """Decorator that registers a binary operator by symbol.

    Args:
        symbol: The single-character operator symbol.
        precedence: Binding strength; higher binds tighter.

    Returns:
        The original function, unmodified.
    """

    def decorator(fn: BinaryFn) -> BinaryFn:
        _BINARY_OPERATORS[symbol] = (precedence, fn)
        return fn

    return decorator


def get_unary_fn(name: str) -> UnaryFn:
    """Look up a registered unary function.

    Raises:
        KeyError: If no function is registered under *name*.
    """
    if name not in _UNARY_FUNCTIONS:
        raise KeyError(f"Unknown function: {name!r}")
    return _UNARY_FUNCTIONS[name]


def get_binary_op(symbol: str) -> tuple[int, BinaryFn]:
    """Look up a registered binary operator.

    Returns:
        ``(precedence, fn)`` for *symbol*.

    Raises:
        KeyError: If no operator is registered under *symbol*.
    """
    if symbol not in _BINARY_OPERATORS:
        raise KeyError(f"Unknown operator: {symbol!r}")
    return _BINARY_OPERATORS[symbol]


def unary_names() -> list[str]:
    """Registered function names, in registration order."""
    return list(_UNARY_FUNCTIONS)


def binary_symbols() -> list[str]:
    """Registered operator symbols, in registration order."""
    return list(_BINARY_OPERATORS)
