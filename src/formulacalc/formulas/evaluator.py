"""Two-stack (shunting-yard) evaluator for formula token sequences.

Operators of equal precedence are applied left to right, ``^`` included:
``2^3^2`` is ``(2^3)^2 = 64``.

A function argument runs from the ``(`` after the function name to the
FIRST ``)`` later in the sequence, not to the matching one.  Nested
parentheses inside a function argument are therefore cut short:
``sin((1+2)*3)`` evaluates ``sin((1+2)`` and then continues with ``*3)``.

Unmatched parentheses outside function arguments are tolerated, and
identifiers that are neither bound nor functions are skipped.
"""

from __future__ import annotations

import math
from typing import Mapping, Sequence

from formulacalc.formulas.classifier import Classifier
from formulacalc.formulas.config import FormulaConfig
from formulacalc.formulas.errors import (
    FormulaError,
    FunctionArgumentNotParenthesizedError,
    MismatchedParenthesesError,
    UnknownOperatorError,
)
from formulacalc.formulas.tokens import Token, TokenKind


def evaluate(
    tokens: Sequence[Token],
    bindings: Mapping[str, float],
    config: FormulaConfig | None = None,
) -> float | None:
    """Evaluate a token sequence against variable bindings.

    Args:
        tokens: Output of ``tokenize()`` (or an equivalent hand-built list).
        bindings: Variable name -> value.
        config: Operator set and function table; ``DEFAULT_CONFIG`` if omitted.

    Returns:
        The computed value, or ``None`` if *tokens* is empty.  Undefined
        numeric results (``asin(2)``, ``(-8)^0.5``, a missing operand)
        come back as NaN.

    Raises:
        DivisionByZeroError: A divisor is exactly zero.
        FunctionArgumentNotParenthesizedError: A function name is not
            followed by ``(``.
        MismatchedParenthesesError: A function argument has no ``)`` after it.
        UnknownOperatorError: An operator outside the configuration is applied.
    """
    return _evaluate(tokens, bindings, Classifier(config))


def _evaluate(
    tokens: Sequence[Token],
    bindings: Mapping[str, float],
    classifier: Classifier,
) -> float | None:
    values: list[float] = []
    ops: list[Token] = []

    i = 0
    while i < len(tokens):
        token = tokens[i]
        kind = token.kind

        if kind is TokenKind.number:
            values.append(token.number)
        elif kind is TokenKind.identifier:
            i = _eval_identifier(tokens, i, bindings, classifier, values)
        elif kind is TokenKind.operator:
            incoming = classifier.precedence(token)
            while (
                ops
                and ops[-1].kind is not TokenKind.lparen
                and classifier.precedence(ops[-1]) >= incoming
            ):
                _reduce(values, ops, classifier)
            ops.append(token)
        elif kind is TokenKind.lparen:
            ops.append(token)
        elif kind is TokenKind.rparen:
            while ops and ops[-1].kind is not TokenKind.lparen:
                _reduce(values, ops, classifier)
            # An unmatched ")" leaves the stack empty; nothing to discard
            if ops:
                ops.pop()
        else:
            raise FormulaError(f"Unknown token kind: {kind!r}")
        i += 1

    while ops:
        if ops[-1].kind is TokenKind.lparen:
            ops.pop()
            continue
        _reduce(values, ops, classifier)

    return values[0] if values else None


def _eval_identifier(
    tokens: Sequence[Token],
    i: int,
    bindings: Mapping[str, float],
    classifier: Classifier,
    values: list[float],
) -> int:
    """Handle a variable or function call at position *i*.

    Returns:
        Index of the last token consumed.
    """
    name = tokens[i].text
    # Bindings shadow function names
    if name in bindings:
        values.append(float(bindings[name]))
        return i
    if not classifier.is_function(name):
        return i

    if i + 1 >= len(tokens) or tokens[i + 1].kind is not TokenKind.lparen:
        raise FunctionArgumentNotParenthesizedError(name)

    closing = _first_rparen(tokens, i + 2)
    if closing is None:
        raise MismatchedParenthesesError(name)

    arg = _evaluate(tokens[i + 2:closing], bindings, classifier)
    if arg is not None:
        values.append(classifier.function(name)(arg))
    return closing


def _first_rparen(tokens: Sequence[Token], start: int) -> int | None:
    for j in range(start, len(tokens)):
        if tokens[j].kind is TokenKind.rparen:
            return j
    return None


def _pop_operand(values: list[float]) -> float:
    return values.pop() if values else math.nan


def _reduce(values: list[float], ops: list[Token], classifier: Classifier) -> None:
    """Pop one operator and two operands, push the combined value."""
    symbol = ops.pop().text
    b = _pop_operand(values)
    a = _pop_operand(values)
    op = classifier.config.operators.get(symbol)
    if op is None:
        raise UnknownOperatorError(symbol)
    values.append(op.apply(a, b))
