"""Free-form formula tokenizing, evaluation and markup rendering.

Public API::

    from formulacalc.formulas import tokenize, evaluate, to_markup

    tokens = tokenize("a + sin(b) * c")
    evaluate(tokens, {"a": 1.0, "b": 0.0, "c": 2.0})   # 1.0
    to_markup("a + sin(b) * c")                          # "a + \\sin(b) * c"
"""

from formulacalc.formulas.errors import (
    ENGINE_ERRORS,
    DivisionByZeroError,
    FormulaConfigError,
    FormulaError,
    FormulaEvalError,
    FunctionArgumentNotParenthesizedError,
    MismatchedParenthesesError,
    UnboundVariableError,
    UnknownOperatorError,
)
from formulacalc.formulas.tokens import Token, TokenKind
from formulacalc.formulas.config import (
    DEFAULT_CONFIG,
    EXTENDED_CONFIG,
    BinaryOperator,
    FormulaConfig,
    build_config,
    preset_config,
)
from formulacalc.formulas.classifier import Classifier, is_function, is_operator
from formulacalc.formulas.tokenizer import extract_variables, join_tokens, tokenize
from formulacalc.formulas.evaluator import evaluate
from formulacalc.formulas.markup import clean_markup, to_display_markup, to_markup
from formulacalc.formulas.engine import CalcResult, FormulaEngine

__all__ = [
    "BinaryOperator",
    "CalcResult",
    "Classifier",
    "DEFAULT_CONFIG",
    "DivisionByZeroError",
    "ENGINE_ERRORS",
    "EXTENDED_CONFIG",
    "FormulaConfig",
    "FormulaConfigError",
    "FormulaEngine",
    "FormulaError",
    "FormulaEvalError",
    "FunctionArgumentNotParenthesizedError",
    "MismatchedParenthesesError",
    "Token",
    "TokenKind",
    "UnboundVariableError",
    "UnknownOperatorError",
    "build_config",
    "clean_markup",
    "evaluate",
    "extract_variables",
    "is_function",
    "is_operator",
    "join_tokens",
    "preset_config",
    "to_display_markup",
    "to_markup",
    "tokenize",
]
