"""Engine result types."""

from dataclasses import dataclass, field

from .query import Range
from .symbol import SymbolInfo


@dataclass(frozen=True)
class ResolutionContext:
    """Outcome of resolving one compilation unit.

    Candidates carry minimized include spellings and are ranked by
    occurrence count, most used first.
    """

    query: str = ""
    scope_qualifier: str = ""
    candidates: tuple[SymbolInfo, ...] = field(default_factory=tuple)
    range: Range = Range()

    @property
    def found(self) -> bool:
        return len(self.candidates) > 0

    @property
    def headers(self) -> list[str]:
        """Distinct header spellings in candidate order."""
        headers: list[str] = []
        for symbol in self.candidates:
            if symbol.file_path not in headers:
                headers.append(symbol.file_path)
        return headers

    @property
    def unique(self) -> bool:
        return len(self.headers) == 1


@dataclass(frozen=True)
class Replacement:
    """Textual edit of ``length`` bytes at ``offset`` in ``file_path``."""

    file_path: str
    offset: int
    length: int
    text: str
