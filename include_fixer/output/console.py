"""Console output formatters using Rich."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .json_formatter import print_json, context_to_dict
from ..models import ResolutionContext

console = Console()


def print_context(context: ResolutionContext, as_json: bool = False, out: Optional[Console] = None):
    """Print the outcome of a resolution."""
    if as_json:
        print_json(context_to_dict(context))
        return

    out = out or console
    if not context.found:
        out.print("[dim]No symbol resolved[/dim]")
        return

    qualifier = f" (scope {escape(context.scope_qualifier)})" if context.scope_qualifier else ""
    out.print(f"[bold]{escape(context.query)}[/bold]{qualifier}")
    if context.range.length:
        out.print(f"  Range: {context.range.offset}+{context.range.length}")
    print_candidates(context, out)


def print_candidates(context: ResolutionContext, out: Optional[Console] = None):
    """Print ranked candidates as a table."""
    out = out or console
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Header")
    table.add_column("Symbol")
    table.add_column("Kind")
    table.add_column("Uses", justify="right")
    for i, symbol in enumerate(context.candidates, 1):
        table.add_row(
            str(i),
            escape(symbol.file_path),
            escape(symbol.qualified_name),
            symbol.kind,
            str(symbol.occurrences),
        )
    out.print(table)
    if not context.unique:
        out.print(f"[yellow]Found {len(context.headers)} candidate headers[/yellow]")
