"""Symbol data model."""

from dataclasses import dataclass, field, replace

# Kinds of indexed symbols
SYMBOL_KINDS = (
    "Function",
    "Class",
    "Variable",
    "TypedefName",
    "EnumDecl",
    "EnumConstantDecl",
    "Macro",
    "Unknown",
)

# Kinds of enclosing contexts
CONTEXT_KINDS = ("Namespace", "Record", "EnumDecl")


@dataclass(frozen=True)
class SymbolContext:
    """One enclosing scope of a symbol (e.g. namespace ``a``)."""

    kind: str
    name: str


@dataclass(frozen=True)
class SymbolInfo:
    """Symbol entry from a symbol database."""

    name: str
    kind: str
    file_path: str
    line: int
    contexts: tuple[SymbolContext, ...] = field(default_factory=tuple)  # innermost first
    occurrences: int = 0

    @property
    def qualified_name(self) -> str:
        """Return the ``::``-joined name, outermost scope first."""
        parts = [c.name for c in reversed(self.contexts) if c.name]
        parts.append(self.name)
        return "::".join(parts)

    @property
    def identity(self) -> tuple:
        """Key used to detect the same declaration reported twice."""
        return (self.name, self.kind, self.file_path, self.line, self.contexts)

    def with_path(self, file_path: str) -> "SymbolInfo":
        """Return a copy pointing at another header spelling."""
        return replace(self, file_path=file_path)
