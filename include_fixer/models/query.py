"""Query data model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Range:
    """Byte span in the original source text."""

    offset: int = 0
    length: int = 0

    def __post_init__(self):
        if self.offset < 0 or self.length < 0:
            raise ValueError(f"Invalid range: offset={self.offset}, length={self.length}")

    @property
    def end(self) -> int:
        return self.offset + self.length

    def contains(self, offset: int) -> bool:
        return self.offset <= offset < self.end


@dataclass(frozen=True)
class SymbolQuery:
    """Canonical lookup built from one unresolved-symbol event."""

    name: str
    scope_qualifier: str = ""  # e.g. "a::b::", empty for global lookups
    range: Range = Range()

    @property
    def qualified(self) -> str:
        return self.scope_qualifier + self.name
