"""Output formatting module."""

from .json_formatter import print_json, context_to_dict, replacements_to_dict, symbol_to_dict
from .console import print_context, print_candidates

__all__ = [
    "print_json",
    "context_to_dict",
    "replacements_to_dict",
    "symbol_to_dict",
    "print_context",
    "print_candidates",
]
