"""Symbol database backends."""

from abc import ABC, abstractmethod
from collections import defaultdict
from pathlib import Path

from ..models import SymbolInfo
from .loader import load_symbols, parse_fixed_database


class SymbolIndex(ABC):
    """A database that can be searched by unqualified symbol name."""

    @abstractmethod
    def search(self, name: str) -> list[SymbolInfo]:
        """Return all symbols whose unqualified name is ``name``."""
        pass


class InMemorySymbolIndex(SymbolIndex):
    """Symbol database held in memory, keyed by unqualified name."""

    def __init__(self, symbols: list[SymbolInfo], source: str = "<memory>"):
        self.source = source
        self.by_name: dict[str, list[SymbolInfo]] = defaultdict(list)
        for symbol in symbols:
            self.by_name[symbol.name].append(symbol)

    def __len__(self) -> int:
        return sum(len(v) for v in self.by_name.values())

    def search(self, name: str) -> list[SymbolInfo]:
        return list(self.by_name.get(name, []))

    @classmethod
    def from_file(cls, path: str | Path) -> "InMemorySymbolIndex":
        """Load a YAML or JSON find-all-symbols database."""
        return cls(load_symbols(path), source=str(path))

    @classmethod
    def from_fixed(cls, spec: str) -> "InMemorySymbolIndex":
        """Build a database from ``name=header,...;...`` pairs."""
        return cls(parse_fixed_database(spec), source="fixed")
