"""Formula engine bound to one configuration.

``FormulaEngine`` is what a presentation layer talks to: it holds an
immutable :class:`FormulaConfig`, exposes the tokenizer, classifier,
evaluator and markup operations under that configuration, and runs the
full calculation flow (variable check, evaluation, error capture and
event logging) in :meth:`FormulaEngine.calculate`.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from pydantic import BaseModel, Field

from formulacalc.formulas.classifier import Classifier
from formulacalc.formulas.config import DEFAULT_CONFIG, FormulaConfig
from formulacalc.formulas.errors import ENGINE_ERRORS, UnboundVariableError
from formulacalc.formulas.evaluator import evaluate
from formulacalc.formulas.markup import clean_markup, to_display_markup, to_markup
from formulacalc.formulas.tokenizer import extract_variables, tokenize
from formulacalc.formulas.tokens import Token
from formulacalc.logging.events import EventLevel, EventType, FormulaEvent, emit


class CalcResult(BaseModel):
    """Outcome of :meth:`FormulaEngine.calculate`.

    Exactly one of ``value``/``error`` is meaningful: ``error`` is set when
    the calculation failed, otherwise ``value`` holds the result (``None``
    for a formula without tokens).
    """

    formula: str
    value: float | None = None
    error: str | None = None
    error_code: str | None = None
    markup: str = ""
    variables: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


class FormulaEngine:
    """Tokenize, evaluate and render formulas under one configuration."""

    def __init__(self, config: FormulaConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self.classifier = Classifier(self.config)

    def is_operator(self, token: str | Token) -> bool:
        return self.classifier.is_operator(token)

    def is_function(self, token: str | Token) -> bool:
        return self.classifier.is_function(token)

    def tokenize(self, formula: str) -> list[Token]:
        return tokenize(formula, self.config)

    def evaluate(self, tokens: Sequence[Token], bindings: Mapping[str, float]) -> float | None:
        return evaluate(tokens, bindings, self.config)

    def to_markup(self, formula: str) -> str:
        return to_markup(formula, self.config)

    def to_display_markup(self, formula: str) -> str:
        return to_display_markup(formula, self.config)

    def clean_markup(self, markup: str) -> str:
        return clean_markup(markup)

    def extract_variables(self, formula: str) -> list[str]:
        return extract_variables(formula, self.config)

    def check_bindings(self, formula: str, bindings: Mapping[str, float]) -> list[str]:
        """Return the formula's variables, raising if any is unbound.

        Raises:
            UnboundVariableError: Listing every variable without a binding.
        """
        variables = self.extract_variables(formula)
        missing = [name for name in variables if name not in bindings]
        if missing:
            raise UnboundVariableError(missing)
        return variables

    def calculate(self, formula: str, bindings: Mapping[str, float] | None = None) -> CalcResult:
        """Run the full calculation flow for *formula*.

        All variables must be bound before anything is evaluated.  Failures
        listed in ``ENGINE_ERRORS`` are captured in the result instead of
        being raised; each outcome is emitted as a structured event.

        Args:
            formula: Raw formula text.
            bindings: Variable name -> value.

        Returns:
            A :class:`CalcResult`.
        """
        bindings = dict(bindings or {})
        markup = self.to_display_markup(formula)
        variables = self.extract_variables(formula)

        try:
            self.check_bindings(formula, bindings)
            value = self.evaluate(self.tokenize(formula), bindings)
        except ENGINE_ERRORS as exc:
            code = exc.code
            if isinstance(exc, UnboundVariableError):
                emit(
                    FormulaEvent.for_formula(
                        EventType.variables_missing,
                        EventLevel.warning,
                        str(exc),
                        formula=formula,
                        error_code=code,
                        extra={"missing": exc.names},
                    )
                )
            else:
                emit(
                    FormulaEvent.for_formula(
                        EventType.formula_failed,
                        EventLevel.error,
                        str(exc),
                        formula=formula,
                        error_code=code,
                        extra={"bindings": bindings},
                    )
                )
            return CalcResult(
                formula=formula,
                error=str(exc),
                error_code=code,
                markup=markup,
                variables=variables,
            )

        emit(
            FormulaEvent.for_formula(
                EventType.formula_evaluated,
                EventLevel.info,
                "Formula evaluated",
                formula=formula,
                extra={"bindings": bindings, "value": value},
            )
        )
        return CalcResult(formula=formula, value=value, markup=markup, variables=variables)
