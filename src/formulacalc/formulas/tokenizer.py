"""Scanner that turns free-form formula text into a token sequence.

Rules, applied at each position of a single left-to-right pass:

- A configured function name starting here (first match in configuration
  order) is emitted whole as an ``identifier``.
- A configured operator character or a parenthesis is its own token.
- Whitespace separates tokens and is dropped.
- Juxtaposed letters and digits get an implicit ``*`` between them:
  ``2a`` -> ``2 * a``, ``a2`` -> ``a * 2``, ``ab`` -> ``a * b``.
  Consecutive letters are always split, so variables are one letter long.
  A digit directly followed by a letter is emitted on its own, which means
  ``12a`` becomes ``1 2 * a`` (digit by digit).

``tokenize`` never raises; malformed text yields a best-effort sequence
and the evaluator decides what is meaningful.
"""

from __future__ import annotations

import re
from typing import Iterable

from formulacalc.formulas.classifier import Classifier
from formulacalc.formulas.config import DEFAULT_CONFIG, FormulaConfig
from formulacalc.formulas.tokens import NUMBER_RE, Token, TokenKind

_DIGIT_RE = re.compile(r"[0-9]")
_LETTER_RE = re.compile(r"[a-zA-Z]")
_VARIABLE_RE = re.compile(r"[a-zA-Z]+")


def _is_digit(char: str) -> bool:
    return _DIGIT_RE.fullmatch(char) is not None


def _is_letter(char: str) -> bool:
    return _LETTER_RE.fullmatch(char) is not None


def _has_letter(buffer: str) -> bool:
    return _LETTER_RE.search(buffer) is not None


def _buffer_token(buffer: str) -> Token:
    if NUMBER_RE.fullmatch(buffer):
        return Token(kind=TokenKind.number, text=buffer)
    return Token(kind=TokenKind.identifier, text=buffer)


def _flush(tokens: list[Token], buffer: str) -> str:
    """Emit the pending buffer (if any) and return an empty buffer."""
    if buffer:
        tokens.append(_buffer_token(buffer))
    return ""


def _symbol_token(char: str) -> Token:
    if char == "(":
        return Token(kind=TokenKind.lparen, text=char)
    if char == ")":
        return Token(kind=TokenKind.rparen, text=char)
    return Token(kind=TokenKind.operator, text=char)


def _match_function(formula: str, pos: int, names: tuple[str, ...]) -> str | None:
    for name in names:
        if formula.startswith(name, pos):
            return name
    return None


def tokenize(formula: str, config: FormulaConfig | None = None) -> list[Token]:
    """Split *formula* into tokens.

    Args:
        formula: Raw formula text, e.g. ``"a + sin(b) * c"``.
        config: Operator set and function table; ``DEFAULT_CONFIG`` if omitted.

    Returns:
        A new list of tokens.  Empty for empty or all-whitespace input.
    """
    cfg = config or DEFAULT_CONFIG
    text = formula or ""
    names = cfg.function_names
    symbols = set(cfg.operator_symbols) | {"(", ")"}
    implicit = Token(kind=TokenKind.operator, text=cfg.implicit_operator)

    tokens: list[Token] = []
    buffer = ""
    i = 0
    while i < len(text):
        char = text[i]

        name = _match_function(text, i, names)
        if name is not None:
            buffer = _flush(tokens, buffer)
            tokens.append(Token(kind=TokenKind.identifier, text=name))
            i += len(name)
            continue

        if char in symbols:
            buffer = _flush(tokens, buffer)
            tokens.append(_symbol_token(char))
        elif char.isspace():
            buffer = _flush(tokens, buffer)
        elif _is_digit(char) and _has_letter(buffer):
            # a2 -> a * 2
            buffer = _flush(tokens, buffer)
            tokens.append(implicit)
            buffer = char
        elif _is_digit(char) and i + 1 < len(text) and _is_letter(text[i + 1]):
            # 2a -> 2 * a
            buffer = _flush(tokens, buffer)
            tokens.append(Token(kind=TokenKind.number, text=char))
            tokens.append(implicit)
        elif _is_letter(char) and _has_letter(buffer):
            # ab -> a * b
            buffer = _flush(tokens, buffer)
            tokens.append(implicit)
            buffer = char
        else:
            buffer += char
        i += 1

    _flush(tokens, buffer)
    return tokens


def join_tokens(tokens: Iterable[Token]) -> str:
    """Reassemble tokens into formula text, separated by single spaces.

    Tokenizing the result again yields an equivalent sequence, except
    where the first pass left a digit and a letter in one identifier:
    ``a2b`` scans as ``a * 2b``, and ``2b`` is split into ``2 * b`` when
    the joined text is scanned again.
    """
    return " ".join(token.text for token in tokens)


def extract_variables(formula: str, config: FormulaConfig | None = None) -> list[str]:
    """Return the variable names a formula needs bindings for.

    Variables are letter-only identifiers that are neither operators nor
    configured functions.  Each name is listed once, in order of first
    appearance.

    Args:
        formula: Raw formula text.
        config: Configuration used for tokenizing and classification.
    """
    classifier = Classifier(config)
    names: list[str] = []
    for token in tokenize(formula, classifier.config):
        if token.kind is not TokenKind.identifier:
            continue
        if not _VARIABLE_RE.fullmatch(token.text):
            continue
        if classifier.is_operator(token) or classifier.is_function(token):
            continue
        if token.text not in names:
            names.append(token.text)
    return names
