"""
Data module for stockta.

Provides the Bar/BarSeries input contract and the integrity validation applied
when a series is built.
"""

from .bars import Bar, BarSeries
from .validation import BarValidator, MalformedBarError

__all__ = [
    "Bar",
    "BarSeries",
    "BarValidator",
    "MalformedBarError",
]
