"""Built-in binary operators.

Precedence levels: ``+ -`` 1, ``* / %`` 2, ``^`` 3.  Function application
sits above all of them (see ``FormulaConfig.function_precedence``).
"""

from __future__ import annotations

import math

from formulacalc.functions.registry import register_binary


def _raise_division_by_zero(operator: str) -> None:
    # Local import to avoid circular dependency
    from formulacalc.formulas.errors import DivisionByZeroError

    raise DivisionByZeroError(operator)


@register_binary("+", 1)
def op_add(a: float, b: float) -> float:
    return a + b


@register_binary("-", 1)
def op_subtract(a: float, b: float) -> float:
    return a - b


@register_binary("*", 2)
def op_multiply(a: float, b: float) -> float:
    return a * b


@register_binary("/", 2)
def op_divide(a: float, b: float) -> float:
    """Divide a by b.

    Raises:
        DivisionByZeroError: If b is exactly zero.
    """
    if b == 0:
        _raise_division_by_zero("/")
    return a / b


@register_binary("^", 3)
def op_power(base: float, exponent: float) -> float:
    """IEEE-754 ``pow``: NaN for invalid domains, infinity on overflow."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and float(exponent).is_integer() and exponent % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ** negative is a pole, a negative base with a fractional exponent is undefined
        if base == 0:
            return math.inf
        return math.nan


@register_binary("%", 2)
def op_modulo(a: float, b: float) -> float:
    """Remainder with the sign of the dividend (``math.fmod``).

    Raises:
        DivisionByZeroError: If b is exactly zero.
    """
    if b == 0:
        _raise_division_by_zero("%")
    try:
        return math.fmod(a, b)
    except ValueError:
        return math.nan
