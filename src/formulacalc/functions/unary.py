"""Built-in unary functions callable from formulas.

Every function follows IEEE-754 semantics instead of raising: a domain
error yields NaN, an overflow or a pole yields a signed infinity.  The
``math`` module raises ``ValueError``/``OverflowError`` for those cases,
so each entry is wrapped with :func:`_ieee`.
"""

from __future__ import annotations

import functools
import math
from typing import Callable

from formulacalc.functions.registry import register_unary

_INF = math.inf
_NAN = math.nan


def _ieee(fn: Callable[[float], float]) -> Callable[[float], float]:
    """Map math-module exceptions onto NaN / infinity results."""

    @functools.wraps(fn)
    def wrapper(x: float) -> float:
        if math.isnan(x):
            return _NAN
        try:
            return fn(x)
        except OverflowError:
            return math.copysign(_INF, x)
        except (ValueError, ZeroDivisionError):
            return _NAN

    return wrapper


def _reciprocal(value: float) -> float:
    if value == 0.0:
        return math.copysign(_INF, value)
    return 1.0 / value


def _log_at_zero(fn: Callable[[float], float], x: float) -> float:
    if x == 0.0:
        return -_INF
    if x == _INF:
        return _INF
    return fn(x)


@register_unary("sin")
@_ieee
def fn_sin(x: float) -> float:
    return math.sin(x)


@register_unary("cos")
@_ieee
def fn_cos(x: float) -> float:
    return math.cos(x)


@register_unary("tan")
@_ieee
def fn_tan(x: float) -> float:
    return math.tan(x)


@register_unary("log")
@_ieee
def fn_log(x: float) -> float:
    """Natural logarithm; ``log(0)`` is ``-inf``."""
    return _log_at_zero(math.log, x)


@register_unary("log10")
@_ieee
def fn_log10(x: float) -> float:
    """Base-10 logarithm; ``log10(0)`` is ``-inf``."""
    return _log_at_zero(math.log10, x)


@register_unary("exp")
@_ieee
def fn_exp(x: float) -> float:
    return math.exp(x)


@register_unary("sqrt")
@_ieee
def fn_sqrt(x: float) -> float:
    return math.sqrt(x)


@register_unary("abs")
@_ieee
def fn_abs(x: float) -> float:
    return math.fabs(x)


@register_unary("asin")
@_ieee
def fn_asin(x: float) -> float:
    return math.asin(x)


@register_unary("acos")
@_ieee
def fn_acos(x: float) -> float:
    return math.acos(x)


@register_unary("atan")
@_ieee
def fn_atan(x: float) -> float:
    return math.atan(x)


# Reciprocal trigonometric functions


@register_unary("cot")
@_ieee
def fn_cot(x: float) -> float:
    """cot(x) = 1 / tan(x)."""
    return _reciprocal(math.tan(x))


@register_unary("sec")
@_ieee
def fn_sec(x: float) -> float:
    """sec(x) = 1 / cos(x)."""
    return _reciprocal(math.cos(x))


@register_unary("csc")
@_ieee
def fn_csc(x: float) -> float:
    """csc(x) = 1 / sin(x)."""
    return _reciprocal(math.sin(x))


# Hyperbolic functions


@register_unary("sinh")
@_ieee
def fn_sinh(x: float) -> float:
    return math.sinh(x)


@register_unary("cosh")
@_ieee
def fn_cosh(x: float) -> float:
    try:
        return math.cosh(x)
    except OverflowError:
        return _INF


@register_unary("tanh")
@_ieee
def fn_tanh(x: float) -> float:
    return math.tanh(x)


@register_unary("asinh")
@_ieee
def fn_asinh(x: float) -> float:
    return math.asinh(x)


@register_unary("acosh")
@_ieee
def fn_acosh(x: float) -> float:
    return math.acosh(x)


@register_unary("atanh")
@_ieee
def fn_atanh(x: float) -> float:
    """Inverse hyperbolic tangent; ``atanh(+/-1)`` is ``+/-inf``."""
    if math.fabs(x) == 1.0:
        return math.copysign(_INF, x)
    return math.atanh(x)
