"""Include path minimization."""

import logging

from ..models import SymbolInfo
from .header_search import HeaderSearch

logger = logging.getLogger(__name__)


def wrap_include(path: str) -> str:
    """Quote a header path unless it is already quoted or bracketed."""
    if path[:1] in ('"', "<"):
        return path
    return f'"{path}"'


class PathMinimizer:
    """Rewrites header paths to the shortest spelling for the search path."""

    def __init__(self, header_search: HeaderSearch, enabled: bool = True):
        self.header_search = header_search
        self.enabled = enabled

    def minimize(self, include: str) -> str:
        """Get the minimal include for a wrapped header path.

        Falls back to ``include`` unchanged when minimization is off or the
        file can't be found.
        """
        if not self.enabled:
            return include

        stripped = include.strip('"<>')
        entry = self.header_search.resolve_to_file(stripped)
        if entry is None:
            logger.debug("Header '%s' not found, keeping database path", stripped)
            return include

        suggestion, is_system = self.header_search.shortest_spelling(entry)
        return f"<{suggestion}>" if is_system else f'"{suggestion}"'

    def minimize_symbol(self, symbol: SymbolInfo) -> SymbolInfo:
        """Return a copy of ``symbol`` with its minimized include spelling."""
        return symbol.with_path(self.minimize(wrap_include(symbol.file_path)))
