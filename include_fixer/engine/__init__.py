"""Missing-symbol resolution engine."""

from .scope import ScopeResolver, extend_nested_name, scope_qualifier, normalize_type_name
from .coordinator import QueryCoordinator
from .header_search import HeaderSearch, SearchDirectory
from .minimizer import PathMinimizer, wrap_include
from .formatter import (
    END_OF_INCLUDES,
    FormatStyle,
    IncludeFormatter,
    STYLES,
    apply_replacements,
    get_style,
)
from .edits import EditBuilder
from .session import IncludeFixerSession

__all__ = [
    "ScopeResolver",
    "extend_nested_name",
    "scope_qualifier",
    "normalize_type_name",
    "QueryCoordinator",
    "HeaderSearch",
    "SearchDirectory",
    "PathMinimizer",
    "wrap_include",
    "END_OF_INCLUDES",
    "FormatStyle",
    "IncludeFormatter",
    "STYLES",
    "apply_replacements",
    "get_style",
    "EditBuilder",
    "IncludeFixerSession",
]
