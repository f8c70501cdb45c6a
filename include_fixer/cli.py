"""Main CLI application."""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import load_config
from .engine import EditBuilder, apply_replacements
from .errors import IncludeFixerError
from .fixer import IncludeFixer
from .frontend import load_events
from .output import print_json, print_context, context_to_dict, replacements_to_dict

app = typer.Typer(
    name="include-fixer",
    help="Suggest and insert missing #include directives",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


def _fail(message: str, as_json: bool = False, **details):
    if as_json:
        print_json({"error": message, **details})
    else:
        err_console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def get_fixer(
    config: Optional[Path],
    db: Optional[list[str]],
    fixed: Optional[str],
    include: Optional[list[str]],
    isystem: Optional[list[str]],
    minimize: Optional[bool],
    style: Optional[str],
) -> IncludeFixer:
    """Build an include fixer from the config file and CLI overrides."""
    try:
        settings = load_config(config).merged(
            databases=db,
            fixed_database=fixed,
            include_dirs=include,
            system_include_dirs=isystem,
            minimize_include_paths=minimize,
            style=style,
        )
        if not settings.databases and not settings.fixed_database:
            _fail("No symbol database given (use --db or --fixed)")
        return IncludeFixer.from_config(settings)
    except (IncludeFixerError, ValueError) as e:
        _fail(str(e))


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}: {e}")


# Shared options
ConfigOpt = typer.Option(None, "--config", "-c", help="Path to config JSON")
DbOpt = typer.Option(None, "--db", help="Symbol database (YAML or JSON), repeatable")
FixedOpt = typer.Option(None, "--fixed", help="Fixed database: 'name=header,...;...'")
IncludeOpt = typer.Option(None, "-I", "--include-dir", help="User include directory, repeatable")
SystemOpt = typer.Option(None, "--isystem", help="System include directory, repeatable")
MinimizeOpt = typer.Option(None, "--minimize/--no-minimize", help="Use the shortest include path")
StyleOpt = typer.Option(None, "--style", help="Formatting style (llvm, google, chromium, mozilla, webkit, none)")
JsonOpt = typer.Option(False, "--json", "-j", help="Output as JSON")
VerboseOpt = typer.Option(False, "--verbose", "-v", help="Log lookups to stderr")


@app.command()
def query(
    symbol: str = typer.Argument(..., help="Symbol to look up, e.g. 'std::string'"),
    scope: str = typer.Option("", "--scope", help="Enclosing namespaces to try first, e.g. 'a::b::'"),
    config: Optional[Path] = ConfigOpt,
    db: Optional[list[str]] = DbOpt,
    fixed: Optional[str] = FixedOpt,
    include: Optional[list[str]] = IncludeOpt,
    isystem: Optional[list[str]] = SystemOpt,
    minimize: Optional[bool] = MinimizeOpt,
    json_output: bool = JsonOpt,
    verbose: bool = VerboseOpt,
):
    """Find the headers declaring a symbol."""
    _setup_logging(verbose)
    fixer = get_fixer(config, db, fixed, include, isystem, minimize, None)
    try:
        context = fixer.query_symbol(symbol, scope=scope)
    except IncludeFixerError as e:
        _fail(str(e), json_output, query=symbol)

    if not context.found:
        _fail("Symbol not found", json_output, query=symbol)
    print_context(context, as_json=json_output, out=console)


@app.command()
def fix(
    source: Path = typer.Argument(..., help="Source file to fix"),
    events: Path = typer.Option(..., "--events", "-e", help="Front-end event stream (JSON)"),
    first: bool = typer.Option(False, "--first", help="Insert the top-ranked header even if ambiguous"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Rewrite the source file"),
    config: Optional[Path] = ConfigOpt,
    db: Optional[list[str]] = DbOpt,
    fixed: Optional[str] = FixedOpt,
    include: Optional[list[str]] = IncludeOpt,
    isystem: Optional[list[str]] = SystemOpt,
    minimize: Optional[bool] = MinimizeOpt,
    style: Optional[str] = StyleOpt,
    json_output: bool = JsonOpt,
    verbose: bool = VerboseOpt,
):
    """Resolve the first unknown symbol of a unit and insert its header.

    Prints the fixed source to stdout unless --in-place is given. With
    several candidate headers nothing is inserted unless --first is given.
    """
    _setup_logging(verbose)
    fixer = get_fixer(config, db, fixed, include, isystem, minimize, style)
    text = _read_source(source)
    try:
        stream = load_events(events)
        context = fixer.fix(text, str(source), stream.events)
    except IncludeFixerError as e:
        _fail(str(e), json_output)

    if not context.found:
        _fail("No missing symbol could be resolved", json_output, file=str(source))

    if not context.unique and not first:
        if json_output:
            print_json({"context": context_to_dict(context), "replacements": []})
        else:
            print_context(context, out=err_console)
        raise typer.Exit(1)

    header = context.headers[0]
    try:
        replacements = fixer.insertion(text, str(source), header)
        fixed_text = apply_replacements(text, replacements)
    except IncludeFixerError as e:
        _fail(str(e), json_output, header=header)

    if json_output:
        print_json({
            "context": context_to_dict(context),
            "header": header,
            "replacements": replacements_to_dict(replacements),
        })
    else:
        print_context(context, out=err_console)
        err_console.print(f"Added #include {header}" if replacements else f"{header} already included")

    if in_place:
        if replacements:
            source.write_text(fixed_text, encoding="utf-8")
    elif not json_output:
        sys.stdout.write(fixed_text)


@app.command()
def insert(
    source: Path = typer.Argument(..., help="Source file to edit"),
    header: str = typer.Option(..., "--header", "-H", help="Header to insert, e.g. '\"foo.h\"' or '<vector>'"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Rewrite the source file"),
    style: str = typer.Option("llvm", "--style", help="Formatting style"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Print replacements as JSON"),
):
    """Insert a chosen header into a source file."""
    text = _read_source(source)
    try:
        replacements = EditBuilder().build_insertion(text, str(source), header, style)
        fixed_text = apply_replacements(text, replacements)
    except (IncludeFixerError, ValueError) as e:
        _fail(str(e), json_output)

    if json_output:
        print_json(replacements_to_dict(replacements))
    elif in_place:
        if replacements:
            source.write_text(fixed_text, encoding="utf-8")
    else:
        sys.stdout.write(fixed_text)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
