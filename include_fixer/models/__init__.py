"""Data models for include-fixer."""

from .symbol import SymbolInfo, SymbolContext, SYMBOL_KINDS, CONTEXT_KINDS
from .query import Range, SymbolQuery
from .results import ResolutionContext, Replacement

__all__ = [
    "SymbolInfo",
    "SymbolContext",
    "SYMBOL_KINDS",
    "CONTEXT_KINDS",
    "Range",
    "SymbolQuery",
    "ResolutionContext",
    "Replacement",
]
