"""Header insertion edits."""

import logging
from typing import Protocol

from ..models import Replacement
from .formatter import END_OF_INCLUDES, FormatStyle, IncludeFormatter, apply_replacements
from .minimizer import wrap_include

logger = logging.getLogger(__name__)


class Formatter(Protocol):
    def apply_and_cleanup(
        self,
        source: str,
        replacements: list[Replacement],
        style: "str | FormatStyle",
    ) -> list[Replacement]: ...


class EditBuilder:
    """Turns a chosen header into replacements for the source file."""

    def __init__(self, formatter: Formatter | None = None):
        self.formatter = formatter or IncludeFormatter()

    def build_insertion(
        self,
        source: str,
        file_path: str,
        header: str,
        style: "str | FormatStyle" = "llvm",
    ) -> list[Replacement]:
        """Create replacements inserting ``#include header``.

        The insertion point and deduplication against existing includes are
        left to the formatter.

        Raises:
            FormattingError: If the formatter rejects the source.
        """
        if not header:
            return []
        include_line = f"#include {wrap_include(header)}\n"
        insertions = [Replacement(file_path, END_OF_INCLUDES, 0, include_line)]
        replacements = self.formatter.apply_and_cleanup(source, insertions, style)
        logger.debug("Inserting %s into %s: %d replacements", header, file_path, len(replacements))
        return replacements

    def insert_header(
        self,
        source: str,
        file_path: str,
        header: str,
        style: "str | FormatStyle" = "llvm",
    ) -> str:
        """Return ``source`` with ``header`` included."""
        return apply_replacements(source, self.build_insertion(source, file_path, header, style))
