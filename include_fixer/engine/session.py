"""Per-unit engine session."""

import logging
from typing import Iterable, Optional

from ..frontend.events import Event, IncompleteTypeEvent, UnresolvedIdentifierEvent
from ..models import ResolutionContext
from .coordinator import QueryCoordinator, SymbolSearcher
from .header_search import HeaderSearch
from .minimizer import PathMinimizer
from .scope import ScopeResolver

logger = logging.getLogger(__name__)


class IncludeFixerSession:
    """Gathers include suggestions for one compilation unit.

    A front-end adapter forwards its unresolved-symbol callbacks here while
    parsing, then calls ``get_context()`` once the unit is done. Sessions are
    not reused across units.
    """

    def __init__(
        self,
        index: SymbolSearcher,
        source: str,
        file_path: str = "",
        minimizer: Optional[PathMinimizer] = None,
    ):
        self.file_path = file_path
        self.resolver = ScopeResolver(source)
        self.coordinator = QueryCoordinator(index)
        self.minimizer = minimizer or PathMinimizer(HeaderSearch(), enabled=False)
        self._context: Optional[ResolutionContext] = None

    def on_unresolved_identifier(self, event: UnresolvedIdentifierEvent) -> bool:
        """Callback for unknown identifiers."""
        if self._context is not None or self.coordinator.resolved:
            return False
        query = self.resolver.from_identifier(event)
        if query is None:
            return False
        return self.coordinator.try_resolve(query)

    def on_incomplete_type(self, event: IncompleteTypeEvent) -> bool:
        """Callback for types used where a definition is required."""
        if self._context is not None or self.coordinator.resolved:
            return False
        query = self.resolver.from_incomplete_type(event)
        if query is None:
            return False
        return self.coordinator.try_resolve(query)

    def handle(self, event: Event) -> bool:
        if isinstance(event, IncompleteTypeEvent):
            return self.on_incomplete_type(event)
        return self.on_unresolved_identifier(event)

    def run(self, events: Iterable[Event]) -> ResolutionContext:
        """Replay a unit's events and return its resolution context."""
        for event in events:
            self.handle(event)
        return self.get_context()

    def get_context(self) -> ResolutionContext:
        """Get the include fixer context for the queried symbol.

        Built on first call; later calls return the same context.
        """
        if self._context is None:
            query = self.coordinator.query
            if query is None:
                logger.debug("No symbol resolved in %s", self.file_path or "<input>")
                self._context = ResolutionContext()
            else:
                self._context = ResolutionContext(
                    query=query.name,
                    scope_qualifier=query.scope_qualifier,
                    candidates=tuple(
                        self.minimizer.minimize_symbol(s) for s in self.coordinator.matched
                    ),
                    range=query.range,
                )
        return self._context
