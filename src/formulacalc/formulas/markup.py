"""Render formula text as TeX-like display markup.

``a+sin(x)`` renders as ``a + \\sin(x)``: operators are padded with
spaces, function names get a backslash, and everything else (numbers,
variables, parentheses) is copied verbatim.  Function arguments keep
their own parentheses and are not wrapped in braces.
"""

from __future__ import annotations

import logging
import re

from formulacalc.formulas.classifier import Classifier
from formulacalc.formulas.config import FormulaConfig
from formulacalc.formulas.tokenizer import tokenize

logger = logging.getLogger(__name__)

# A "*" right after a letter or digit, with at most one space between
_IMPLICIT_TIMES_RE = re.compile(r"([a-zA-Z0-9])\s?\*")

# A backslash that is not followed by another backslash
_SINGLE_BACKSLASH_RE = re.compile(r"\\(?!\\)")


def to_markup(formula: str, config: FormulaConfig | None = None) -> str:
    """Convert formula text to display markup.

    Never raises: if rendering fails for any reason an empty string is
    returned.

    Args:
        formula: Raw formula text.
        config: Configuration used for tokenizing and classification.
    """
    try:
        classifier = Classifier(config)
        parts: list[str] = []
        for token in tokenize(formula, classifier.config):
            if classifier.is_operator(token):
                parts.append(f" {token.text} ")
            elif classifier.is_function(token):
                parts.append(f"\\{token.text}")
            else:
                parts.append(token.text)
        return "".join(parts)
    except Exception:
        logger.debug("Markup rendering failed (non-fatal)", exc_info=True)
        return ""


def to_display_markup(formula: str, config: FormulaConfig | None = None) -> str:
    """Markup with the multiplication sign dropped after letters and digits.

    ``2*a*b`` renders as ``2 a b`` instead of ``2 * a * b``.
    """
    return _IMPLICIT_TIMES_RE.sub(r"\1", to_markup(formula, config))


def clean_markup(markup: str) -> str:
    """Strip backslashes; a doubled backslash collapses to a single one.

    ``\\sin(x)`` becomes ``sin(x)``; used when copying markup as plain text.
    """
    return _SINGLE_BACKSLASH_RE.sub("", markup or "")
