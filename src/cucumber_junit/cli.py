"""Typer CLI: convert command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cucumber_junit import __version__

app = typer.Typer(
    name="cucumber-junit",
    help="Convert Cucumber JSON reports into JUnit XML.",
    no_args_is_help=True,
)
console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"cucumber-junit v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version.", callback=_version_callback, is_eager=True
    ),
) -> None:
    """cucumber-junit - Cucumber JSON to JUnit XML."""


def _print_summary(suites) -> None:
    table = Table(title="Test Suites", show_lines=False)
    table.add_column("Suite", width=40)
    table.add_column("Tests", justify="right")
    table.add_column("Failures", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Time (s)", justify="right")

    for suite in suites:
        if suite.placeholder:
            continue
        fail_style = "red" if suite.failures else "green"
        table.add_row(
            suite.name,
            str(suite.tests),
            f"[{fail_style}]{suite.failures}[/{fail_style}]",
            f"[yellow]{suite.skipped}[/yellow]" if suite.skipped else "0",
            f"{suite.time:.3f}",
        )
    console.print(table)


@app.command()
def convert(
    input_file: str = typer.Argument("-", help="Cucumber JSON report ('-' for stdin)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write XML here instead of stdout"),
    prefix: str = typer.Option(None, "--prefix", "-p", help="Prefix for suite and case names"),
    strict: bool = typer.Option(None, "--strict/--no-strict", help="Report pending/undefined steps as failures"),
    indent: int = typer.Option(None, "--indent", help="Spaces per indent level (0 disables)"),
    no_declaration: bool = typer.Option(False, "--no-declaration", help="Omit the XML declaration"),
    duration_unit: str = typer.Option(None, "--duration-unit", help="Unit of step durations: ns, us, ms or s"),
    config_file: Path = typer.Option(None, "--config", "-c", help="JSON or YAML options file"),
    summary: bool = typer.Option(False, "--summary", help="Print a per-suite summary table"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Convert a Cucumber JSON report to JUnit XML."""
    from cucumber_junit.assembler import ParseError, build, render_report
    from cucumber_junit.config import ConversionOptions, load_options, validate_options

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    raw_options = load_options(config_file)
    overrides = {
        "prefix": prefix,
        "strict": strict,
        "duration_unit": duration_unit,
        "indent": None if indent is None else " " * indent,
    }
    raw_options.update({k: v for k, v in overrides.items() if v is not None})
    if no_declaration:
        raw_options["declaration"] = False

    errors = validate_options(raw_options)
    if errors:
        for e in errors:
            console.print(f"[red]Config error: {e}[/red]")
        raise typer.Exit(1)
    options = ConversionOptions.from_dict(raw_options)

    try:
        if input_file == "-":
            raw = sys.stdin.read()
        else:
            raw = Path(input_file).read_text(encoding="utf-8")
        suites = build(raw, options)
    except (ParseError, OSError, UnicodeDecodeError) as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)

    xml = render_report(suites, options)
    chunks = [xml] if isinstance(xml, str) else xml

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as fh:
            for chunk in chunks:
                fh.write(chunk)
            fh.write("\n")
        console.print(f"[green]JUnit report saved to:[/green] {output}")
    else:
        for chunk in chunks:
            typer.echo(chunk, nl=False)
        typer.echo()

    if summary:
        _print_summary(suites)
