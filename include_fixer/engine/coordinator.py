"""Query coordination: first successful resolution wins."""

import logging
from typing import Optional, Protocol

from ..errors import MalformedQueryError, SymbolIndexError
from ..index.manager import rank_by_popularity
from ..models import SymbolInfo, SymbolQuery

logger = logging.getLogger(__name__)


class SymbolSearcher(Protocol):
    def search(self, identifier: str) -> list[SymbolInfo]: ...


class QueryCoordinator:
    """Drives the symbol index for one compilation unit.

    Only the first query that finds anything is kept. Once a symbol is
    missing, error recovery in the parser reports many follow-up symbols
    that would only hide the include actually needed.
    """

    def __init__(self, index: SymbolSearcher):
        self.index = index
        self.query: Optional[SymbolQuery] = None
        self.matched: list[SymbolInfo] = []

    @property
    def resolved(self) -> bool:
        return len(self.matched) > 0

    def try_resolve(self, query: SymbolQuery) -> bool:
        """Look up a query, unless an earlier one already matched.

        Lookup follows C++ name lookup: first the name qualified with the
        enclosing namespaces, then the name on its own. For

            namespace a {
            b::foo f;
            }

        ``a::b::foo`` is searched first, then ``b::foo``.

        Returns:
            True if this query produced the unit's resolution.

        Raises:
            MalformedQueryError: If the query has no name.
        """
        if not query.name:
            raise MalformedQueryError(query.scope_qualifier)

        if self.resolved:
            return False

        logger.debug("Looking up '%s' at offset %d ...", query.name, query.range.offset)
        matches = self._search(query.qualified)
        if not matches and query.scope_qualifier:
            matches = self._search(query.name)
        logger.debug("Having found %d symbols", len(matches))

        if not matches:
            return False

        self.query = query
        self.matched = rank_by_popularity(matches)
        return True

    def _search(self, identifier: str) -> list[SymbolInfo]:
        try:
            return list(self.index.search(identifier))
        except SymbolIndexError as e:
            logger.warning("Symbol search for '%s' failed: %s", identifier, e)
            return []
