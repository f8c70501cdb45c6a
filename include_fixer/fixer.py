"""High-level include fixer built from configuration."""

import logging
from pathlib import Path
from typing import Iterable

from .config import FixerConfig
from .engine import (
    EditBuilder,
    HeaderSearch,
    IncludeFixerSession,
    PathMinimizer,
    get_style,
)
from .frontend.events import Event
from .index import InMemorySymbolIndex, SymbolIndexManager
from .models import Range, Replacement, ResolutionContext, SymbolQuery

logger = logging.getLogger(__name__)


class IncludeFixer:
    """Shared collaborators for many compilation units.

    Each unit runs in its own ``IncludeFixerSession``; this object only holds
    the symbol databases, header search and formatting style.
    """

    def __init__(
        self,
        index: SymbolIndexManager,
        header_search: HeaderSearch,
        minimize_include_paths: bool = True,
        style: str = "llvm",
        edit_builder: EditBuilder | None = None,
    ):
        self.index = index
        self.header_search = header_search
        self.minimize_include_paths = minimize_include_paths
        self.style = get_style(style)
        self.edit_builder = edit_builder or EditBuilder()

    @classmethod
    def from_config(cls, config: FixerConfig) -> "IncludeFixer":
        """Load databases and search paths described by ``config``.

        Raises:
            SymbolIndexError: If a database can't be loaded.
            ValueError: If the style is unknown.
        """
        base_dir = Path(config.base_dir) if config.base_dir else Path.cwd()
        index = SymbolIndexManager()
        for db in config.databases:
            path = Path(db) if Path(db).is_absolute() else base_dir / db
            db_index = InMemorySymbolIndex.from_file(path)
            logger.debug("Loaded %d symbols from %s", len(db_index), path)
            index.add_index(db_index)
        if config.fixed_database:
            index.add_index(InMemorySymbolIndex.from_fixed(config.fixed_database))

        header_search = HeaderSearch(
            include_dirs=config.include_dirs,
            system_include_dirs=config.system_include_dirs,
            base_dir=base_dir,
        )
        return cls(
            index,
            header_search,
            minimize_include_paths=config.minimize_include_paths,
            style=config.style,
        )

    def new_session(self, source: str, file_path: str = "") -> IncludeFixerSession:
        minimizer = PathMinimizer(self.header_search, enabled=self.minimize_include_paths)
        return IncludeFixerSession(self.index, source, file_path=file_path, minimizer=minimizer)

    def fix(self, source: str, file_path: str, events: Iterable[Event]) -> ResolutionContext:
        """Run one unit's front-end events through a fresh session."""
        return self.new_session(source, file_path).run(events)

    def query_symbol(self, symbol: str, scope: str = "") -> ResolutionContext:
        """Resolve a symbol name directly, without source text."""
        session = self.new_session("")
        if scope and not scope.endswith("::"):
            scope += "::"
        session.coordinator.try_resolve(SymbolQuery(name=symbol, scope_qualifier=scope, range=Range()))
        return session.get_context()

    def insertion(self, source: str, file_path: str, header: str) -> list[Replacement]:
        """Replacements adding ``header`` to ``source``."""
        return self.edit_builder.build_insertion(source, file_path, header, self.style)

    def insert_header(self, source: str, file_path: str, header: str) -> str:
        return self.edit_builder.insert_header(source, file_path, header, self.style)
