"""Qualified-name search across several symbol databases."""

import logging

from ..models import SymbolInfo
from .symbol_index import SymbolIndex

logger = logging.getLogger(__name__)

# Symbol kinds that cannot have members, so never match a dropped prefix
_LEAF_KINDS = ("Function", "Variable", "EnumConstantDecl", "Macro")


def rank_by_popularity(symbols: list[SymbolInfo]) -> list[SymbolInfo]:
    """Deduplicate symbols and order them by occurrence count.

    The first report of a declaration wins; ties keep first-seen order.
    """
    unique: list[SymbolInfo] = []
    seen: set[tuple] = set()
    for symbol in symbols:
        if symbol.identity not in seen:
            seen.add(symbol.identity)
            unique.append(symbol)
    return sorted(unique, key=lambda s: -s.occurrences)


def _contexts_match(symbol: SymbolInfo, qualifiers: list[str], fully_qualified: bool) -> bool:
    """Match the query's qualifiers (innermost first) against a symbol's contexts."""
    contexts = symbol.contexts
    ci = 0
    qi = 0
    while qi < len(qualifiers) and ci < len(contexts):
        if contexts[ci].name == qualifiers[qi]:
            qi += 1
            ci += 1
        elif contexts[ci].kind == "EnumDecl":
            # Unscoped enum constants are visible in the enclosing scope
            ci += 1
        else:
            return False
    if qi != len(qualifiers):
        return False
    if fully_qualified:
        return ci == len(contexts)
    return True


class SymbolIndexManager:
    """Symbol Index Client: resolves qualified names against all databases."""

    def __init__(self, indices: list[SymbolIndex] | None = None):
        self.indices: list[SymbolIndex] = list(indices or [])

    def add_index(self, index: SymbolIndex):
        self.indices.append(index)

    def search(self, identifier: str) -> list[SymbolInfo]:
        """Search for symbols matching a possibly qualified name.

        Supports formats:
        - ``X`` (any symbol named X)
        - ``a::b::X`` (X whose contexts end with ``b`` inside ``a``)
        - ``::a::X`` (X declared exactly in namespace ``a``)

        While nothing matches, the last name part is dropped and the search
        retried, so ``a::B::method`` can fall back to class ``a::B``. A
        shortened name only matches symbols that can enclose others.

        Returns:
            Matching symbols ranked by occurrence count, most used first.
        """
        names = identifier.strip().split("::")
        fully_qualified = False
        if len(names) > 1 and names[0] == "":
            names = names[1:]
            fully_qualified = True
        if any(not n for n in names):
            logger.debug("Ignoring malformed identifier %r", identifier)
            return []

        matches: list[SymbolInfo] = []
        took_prefix = False
        while names and not matches:
            name = names[-1]
            qualifiers = list(reversed(names[:-1]))
            for index in self.indices:
                for symbol in index.search(name):
                    if symbol.name != name:
                        continue
                    if took_prefix and symbol.kind in _LEAF_KINDS:
                        continue
                    if _contexts_match(symbol, qualifiers, fully_qualified):
                        matches.append(symbol)
            names.pop()
            took_prefix = True

        logger.debug("Index search for '%s' matched %d symbols", identifier, len(matches))
        return rank_by_popularity(matches)
