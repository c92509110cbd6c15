"""Catalog of the unary functions and binary operators formulas can use.

Importing this package registers every built-in entry.
"""

from formulacalc.functions import binary, unary  # noqa: F401
from formulacalc.functions.registry import (
    get_binary_op,
    get_unary_fn,
    register_binary,
    register_unary,
)

__all__ = [
    "get_binary_op",
    "get_unary_fn",
    "register_binary",
    "register_unary",
]
