"""Token model shared by the tokenizer, evaluator and markup renderer."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict

# Decimal literal as the tokenizer accumulates it: ``12``, ``1.5``, ``2.``, ``.5``
NUMBER_RE = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")


class TokenKind(str, Enum):
    number = "number"
    identifier = "identifier"
    operator = "operator"
    lparen = "lparen"
    rparen = "rparen"


class Token(BaseModel):
    """One lexical unit of a formula.

    ``identifier`` covers both one-letter variables and function names;
    which one it is gets decided at evaluation time against the
    function table.
    """

    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    text: str

    @property
    def number(self) -> float:
        """Float value of a ``number`` token."""
        if self.kind is not TokenKind.number:
            raise TypeError(f"{self.kind.value} token has no numeric value: {self.text!r}")
        return float(self.text)

    @classmethod
    def from_text(cls, text: str) -> Token:
        """Classify a single piece of formula text the way the tokenizer would.

        Parentheses map to ``lparen``/``rparen``, decimal literals to
        ``number``, a single symbol character to ``operator`` and anything
        else to ``identifier``.
        """
        if text == "(":
            return cls(kind=TokenKind.lparen, text=text)
        if text == ")":
            return cls(kind=TokenKind.rparen, text=text)
        if NUMBER_RE.fullmatch(text):
            return cls(kind=TokenKind.number, text=text)
        if len(text) == 1 and not text.isalnum() and not text.isspace():
            return cls(kind=TokenKind.operator, text=text)
        return cls(kind=TokenKind.identifier, text=text)

    def __str__(self) -> str:
        return self.text
