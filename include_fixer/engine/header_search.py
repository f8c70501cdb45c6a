"""Header search: file resolution and shortest include spelling."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchDirectory:
    """One include search directory."""

    path: Path
    is_system: bool = False


class HeaderSearch:
    """Include search path configuration for one compilation.

    User directories (``-I``) are searched before system directories
    (``-isystem``), each in the order given.
    """

    def __init__(
        self,
        include_dirs: list[str | Path] | None = None,
        system_include_dirs: list[str | Path] | None = None,
        base_dir: str | Path | None = None,
    ):
        self.base_dir = Path(base_dir).resolve() if base_dir else Path.cwd().resolve()
        self.search_dirs: list[SearchDirectory] = [
            SearchDirectory(self._absolute(d), is_system=False) for d in include_dirs or []
        ] + [
            SearchDirectory(self._absolute(d), is_system=True) for d in system_include_dirs or []
        ]

    def _absolute(self, path: str | Path) -> Path:
        path = Path(path)
        if not path.is_absolute():
            path = self.base_dir / path
        return path.resolve()

    def resolve_to_file(self, path: str) -> Optional[Path]:
        """Find the file a header path refers to.

        Tries the path as given (relative paths against ``base_dir``), then
        relative to each search directory.

        Returns:
            Resolved file path, or None if no such file exists.
        """
        if not path:
            return None
        candidates = [self._absolute(path)]
        if not Path(path).is_absolute():
            candidates.extend(d.path / path for d in self.search_dirs)
        for candidate in candidates:
            try:
                if candidate.is_file():
                    return candidate.resolve()
            except OSError as e:
                logger.debug("Cannot stat %s: %s", candidate, e)
        return None

    def shortest_spelling(self, file: Path) -> tuple[str, bool]:
        """Compute the shortest ``#include`` spelling for a resolved file.

        Every search directory containing the file is a candidate; the one
        leaving the fewest path components wins, ties go to the directory
        searched first.

        Returns:
            (spelling, is_system) where spelling has no quotes or brackets.
        """
        best: Optional[tuple[tuple[int, int], str, bool]] = None
        for rank, directory in enumerate(self.search_dirs):
            try:
                relative = file.relative_to(directory.path)
            except ValueError:
                continue
            key = (len(relative.parts), rank)
            if best is None or key < best[0]:
                best = (key, relative.as_posix(), directory.is_system)

        if best is not None:
            return best[1], best[2]

        # Not reachable through the search path
        try:
            return file.relative_to(self.base_dir).as_posix(), False
        except ValueError:
            return file.as_posix(), False
