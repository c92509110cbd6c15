"""Token classification against a formula configuration."""

from __future__ import annotations

from typing import Callable

from formulacalc.formulas.config import DEFAULT_CONFIG, FormulaConfig
from formulacalc.formulas.tokens import Token


def _text(token: str | Token) -> str:
    return token.text if isinstance(token, Token) else token


class Classifier:
    """Predicates and lookups over one :class:`FormulaConfig`."""

    def __init__(self, config: FormulaConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def is_operator(self, token: str | Token) -> bool:
        """True if the token text is a configured operator symbol."""
        return _text(token) in self.config.operators

    def is_function(self, token: str | Token) -> bool:
        """True if the token text is a configured function name."""
        return _text(token) in self.config.functions

    def precedence(self, token: str | Token) -> int:
        """Binding strength of an operator or function name; 0 if neither."""
        text = _text(token)
        if text in self.config.functions:
            return self.config.function_precedence
        op = self.config.operators.get(text)
        return op.precedence if op is not None else 0

    def function(self, name: str) -> Callable[[float], float]:
        return self.config.functions[name]


def is_operator(token: str | Token, config: FormulaConfig | None = None) -> bool:
    """Check whether *token* is one of the configured operators.

    Args:
        token: Token text or a :class:`Token`.
        config: Configuration to check against; ``DEFAULT_CONFIG`` if omitted.
    """
    return Classifier(config).is_operator(token)


def is_function(token: str | Token, config: FormulaConfig | None = None) -> bool:
    """Check whether *token* names one of the configured functions.

    Args:
        token: Token text or a :class:`Token`.
        config: Configuration to check against; ``DEFAULT_CONFIG`` if omitted.
    """
    return Classifier(config).is_function(token)
