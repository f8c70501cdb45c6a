"""Scope resolution: turn unresolved-symbol events into queries."""

import logging
import string
from typing import Optional

from ..frontend.events import IncompleteTypeEvent, ScopeSpec, UnresolvedIdentifierEvent
from ..models import Range, SymbolQuery

logger = logging.getLogger(__name__)

_IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "_$")

_TYPE_KEYWORDS = frozenset(("const", "volatile", "class", "struct", "union", "enum", "typename"))
_CV_QUALIFIERS = frozenset(("const", "volatile"))


def extend_nested_name(source: str, end: int) -> int:
    """Scan forward from ``end`` over identifier characters and colons.

    A long nested name like ``llvm::sys::path::parent_path`` only produces a
    callback for the first unknown part, so the rest of the name has to be
    recovered from the source text.

    Returns:
        Offset of the first character that is neither, bounded by ``len(source)``.
    """
    end = min(max(end, 0), len(source))
    while end < len(source) and (source[end] in _IDENTIFIER_CHARS or source[end] == ":"):
        end += 1
    return end


def scope_qualifier(scopes: list[ScopeSpec]) -> str:
    """Join named namespace scopes (innermost first) into ``outer::inner::``."""
    qualifier = ""
    for scope in scopes:
        if scope.kind == "namespace" and scope.name:
            qualifier = scope.name + "::" + qualifier
    return qualifier


def normalize_type_name(type_name: str) -> str:
    """Drop cv-qualifiers and elaborated keywords from a type spelling."""
    words = type_name.split()
    while words and words[0] in _TYPE_KEYWORDS:
        words.pop(0)
    while words and words[-1] in _CV_QUALIFIERS:
        words.pop()
    return " ".join(words)


class ScopeResolver:
    """Builds scope-aware queries for one compilation unit.

    Holds the primary file's source text and remembers which spans have
    already been coalesced, so adjacent fragments of one nested name yield
    a single query.
    """

    def __init__(self, source: str):
        self.source = source
        self._spans: list[Range] = []

    def _covered(self, offset: int) -> bool:
        return any(span.contains(offset) for span in self._spans)

    def from_identifier(self, event: UnresolvedIdentifierEvent) -> Optional[SymbolQuery]:
        """Build a query for an unknown identifier, or None if the event is dropped."""
        if event.sfinae:
            return None

        # A symbol missing because of a library header is not fixable here
        if not event.in_main_file:
            logger.debug("Dropping '%s': not in the main file", event.name)
            return None

        if self._covered(event.offset):
            logger.debug("Dropping '%s' at %d: part of an earlier name", event.name, event.offset)
            return None

        identifier_end = event.offset + event.token_length
        if identifier_end > len(self.source):
            logger.debug("Dropping '%s': span outside the source buffer", event.name)
            return None

        qualifier = event.qualifier
        if qualifier is not None and qualifier.length > 0 and qualifier.offset <= event.offset:
            start = qualifier.offset
        elif event.is_identifier and not event.from_macro:
            start = event.offset
        else:
            name = event.name
            # Macro spellings may be longer than the text left in the buffer
            length = min(len(name), len(self.source) - event.offset)
            return SymbolQuery(
                name=name,
                scope_qualifier=scope_qualifier(event.scopes),
                range=Range(event.offset, length),
            )

        end = extend_nested_name(self.source, identifier_end)
        text = self.source[start:end]
        if not text:
            return None

        span = Range(start, end - start)
        self._spans.append(span)
        qualifiers = scope_qualifier(event.scopes)
        logger.debug("TypoScopeQualifiers: %s", qualifiers)
        return SymbolQuery(name=text, scope_qualifier=qualifiers, range=span)

    def from_incomplete_type(self, event: IncompleteTypeEvent) -> Optional[SymbolQuery]:
        """Build a query for a type that needs its definition.

        A forward declaration already carries the fully qualified name, so no
        scope qualifier or source span is needed.
        """
        if event.sfinae:
            return None
        name = normalize_type_name(event.type_name)
        if not name:
            return None
        logger.debug("Query missing complete type '%s'", name)
        return SymbolQuery(name=name, scope_qualifier="", range=Range())
