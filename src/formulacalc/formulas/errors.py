"""Error types for formula configuration and evaluation."""

from __future__ import annotations


class FormulaError(Exception):
    """Base class for all formula-related errors.

    Attributes:
        code: Stable machine-readable error kind, used as the event
            ``error_code`` and in CLI/JSON output.
    """

    code = "formula_error"


class FormulaConfigError(FormulaError):
    """Invalid operator set, function table or project configuration."""

    code = "invalid_config"


class FormulaEvalError(FormulaError):
    """Base class for failures raised while evaluating a token sequence."""


class DivisionByZeroError(FormulaEvalError, ZeroDivisionError):
    """Divisor operand of ``/`` (or ``%``) is exactly zero."""

    code = "division_by_zero"

    def __init__(self, operator: str = "/") -> None:
        self.operator = operator
        super().__init__("Division by zero")


class FunctionArgumentNotParenthesizedError(FormulaEvalError):
    """A function name is not immediately followed by ``(``.

    Attributes:
        func_name: The function that was called without parentheses.
    """

    code = "function_argument_not_parenthesized"

    def __init__(self, func_name: str) -> None:
        self.func_name = func_name
        super().__init__(
            f"Function argument must be enclosed in parentheses: {func_name!r}"
        )


class MismatchedParenthesesError(FormulaEvalError):
    """A function argument list has no closing ``)`` anywhere after it."""

    code = "mismatched_parentheses"

    def __init__(self, func_name: str) -> None:
        self.func_name = func_name
        super().__init__(f"Mismatched parentheses in call to {func_name!r}")


class UnknownOperatorError(FormulaEvalError):
    """An operator outside the configured set reached the combine step.

    Attributes:
        operator: The offending operator symbol.
    """

    code = "unknown_operator"

    def __init__(self, operator: str) -> None:
        self.operator = operator
        super().__init__(f"Invalid operator: {operator!r}")


class UnboundVariableError(FormulaError):
    """One or more formula variables have no binding.

    Attributes:
        names: The unbound variable names, in formula order.
    """

    code = "unbound_variables"

    def __init__(self, names: list[str]) -> None:
        self.names = list(names)
        super().__init__(f"Please define all variables: {', '.join(self.names)}")


# Errors a caller should expect from a calculation (and report to the user).
ENGINE_ERRORS: tuple[type[Exception], ...] = (FormulaEvalError, UnboundVariableError)
