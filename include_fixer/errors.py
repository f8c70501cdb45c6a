"""Error types for include-fixer."""


class IncludeFixerError(Exception):
    """Base error for include-fixer operations."""

    pass


class MalformedQueryError(IncludeFixerError, ValueError):
    """A query reached the coordinator without an identifier."""

    def __init__(self, query: str = "") -> None:
        super().__init__(f"Empty query name (scope qualifier: {query!r})")
        self.query = query


class FormattingError(IncludeFixerError):
    """The formatter rejected the source or the replacements."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(f"Cannot format {file_path}: {reason}")
        self.file_path = file_path
        self.reason = reason


class SymbolIndexError(IncludeFixerError):
    """A symbol database could not be loaded or searched."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Symbol index {source}: {reason}")
        self.source = source
        self.reason = reason


class ConfigError(IncludeFixerError):
    """Configuration file is missing or invalid."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid config {path}: {reason}")
        self.path = path
        self.reason = reason
