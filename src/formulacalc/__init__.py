"""formulacalc -- free-form formula tokenizing, evaluation and markup rendering."""

__version__ = "0.1.0"
