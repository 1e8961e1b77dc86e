"""
Exceptions raised by combolib.

ConfigurationError subclasses ValueError and DataError subclasses KeyError so
callers that already catch the builtin types keep working.
"""
from __future__ import annotations


class ComboLibError(Exception):
    """Base class for all combolib errors."""


class ConfigurationError(ComboLibError, ValueError):
    """Invalid or contradictory library configuration."""


class DataError(ComboLibError, KeyError):
    """Design table is missing columns or holds null join keys."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep messages readable.
        return str(self.args[0]) if self.args else ""
