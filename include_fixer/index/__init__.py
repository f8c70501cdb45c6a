"""Symbol index module for loading and searching symbol databases."""

from .symbol_index import SymbolIndex, InMemorySymbolIndex
from .manager import SymbolIndexManager, rank_by_popularity
from .loader import load_symbols, decode_symbols, parse_fixed_database

__all__ = [
    "SymbolIndex",
    "InMemorySymbolIndex",
    "SymbolIndexManager",
    "rank_by_popularity",
    "load_symbols",
    "decode_symbols",
    "parse_fixed_database",
]
