"""include-fixer - suggest and insert missing C++ #include directives."""

from .engine import (
    ScopeResolver,
    QueryCoordinator,
    PathMinimizer,
    HeaderSearch,
    EditBuilder,
    IncludeFormatter,
    IncludeFixerSession,
)
from .fixer import IncludeFixer
from .index import SymbolIndex, InMemorySymbolIndex, SymbolIndexManager
from .models import SymbolInfo, SymbolContext, SymbolQuery, Range, ResolutionContext, Replacement

__version__ = "0.1.0"

__all__ = [
    "ScopeResolver",
    "QueryCoordinator",
    "PathMinimizer",
    "HeaderSearch",
    "EditBuilder",
    "IncludeFormatter",
    "IncludeFixerSession",
    "IncludeFixer",
    "SymbolIndex",
    "InMemorySymbolIndex",
    "SymbolIndexManager",
    "SymbolInfo",
    "SymbolContext",
    "SymbolQuery",
    "Range",
    "ResolutionContext",
    "Replacement",
]
