"""JSON output formatter."""

import json
from typing import Any

from ..models import Replacement, ResolutionContext, SymbolInfo


def print_json(data: Any):
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, ensure_ascii=False))


def symbol_to_dict(symbol: SymbolInfo) -> dict:
    return {
        "name": symbol.name,
        "qualified_name": symbol.qualified_name,
        "kind": symbol.kind,
        "file_path": symbol.file_path,
        "line": symbol.line,
        "contexts": [{"kind": c.kind, "name": c.name} for c in symbol.contexts],
        "occurrences": symbol.occurrences,
    }


def context_to_dict(context: ResolutionContext) -> dict:
    """Convert a resolution context to a JSON-serializable dict."""
    return {
        "query": context.query,
        "scope_qualifier": context.scope_qualifier,
        "range": {"offset": context.range.offset, "length": context.range.length},
        "headers": context.headers,
        "candidates": [symbol_to_dict(s) for s in context.candidates],
    }


def replacements_to_dict(replacements: list[Replacement]) -> list[dict]:
    return [
        {
            "file_path": r.file_path,
            "offset": r.offset,
            "length": r.length,
            "text": r.text,
        }
        for r in replacements
    ]
