"""jsreq CLI - Main entry point."""

import json
import logging
import shutil
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from jsreq_cli.config.loader import load_config
from jsreq_cli.core.dependency_query import format_dependency_query, parse_dependency_query
from jsreq_cli.core.scanner import ProjectScanner, ScanReport
from jsreq_cli.static_analysis import ExtractionResult, FatalParseError, RequiresAnalyzer

TEMPLATE_ROOT = Path(__file__).resolve().parents[1] / "template" / "defaults"
DEFAULT_CONFIG_PATH = TEMPLATE_ROOT / "jsreq.toml"


def _load_default_config() -> str:
    try:
        return DEFAULT_CONFIG_PATH.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Unable to read default config at {DEFAULT_CONFIG_PATH}") from exc


app = typer.Typer(
    name="jsreq",
    help="List the modules a JavaScript file imports or requires",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """jsreq - static module specifier extraction."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _print_result(label: str, result: ExtractionResult, unique: bool) -> None:
    kind = "module" if result.is_module else "script"
    specifiers = result.unique() if unique else list(result.specifiers)
    console.print(f"[bold]{escape(label)}[/bold] [dim]({kind})[/dim]")
    if not specifiers:
        console.print("  [dim]no specifiers[/dim]")
    for specifier in specifiers:
        console.print(f"  {escape(specifier)}")


@app.command()
def init(
    repo: str = typer.Option(".", help="Repository path"),
    overwrite: bool = typer.Option(
        False, "--overwrite", "-f", help="Force re-initialization and overwrite existing config"
    ),
) -> None:
    """Create a default .jsreq/jsreq.toml for a repository."""
    repo_path = Path(repo).resolve()
    jsreq_dir = repo_path / ".jsreq"

    if jsreq_dir.exists():
        if overwrite:
            console.print(f"[yellow]Overwriting existing jsreq configuration in {repo_path}...[/yellow]")
            shutil.rmtree(jsreq_dir)
        else:
            console.print(f"[yellow]jsreq is already initialized in {repo_path}[/yellow]")
            console.print("[dim]Use --overwrite to re-initialize.[/dim]")
            return

    try:
        jsreq_dir.mkdir(parents=True, exist_ok=True)
        config_path = jsreq_dir / "jsreq.toml"
        config_path.write_text(_load_default_config(), encoding="utf-8")
    except (OSError, RuntimeError) as e:
        console.print(f"[bold red]Failed to initialize:[/bold red] {e}")
        raise typer.Exit(code=1)

    console.print(f"[green]Initialized jsreq in {jsreq_dir}[/green]")
    console.print(f"Configuration created at: {config_path}")


@app.command()
def extract(
    file: Path = typer.Argument(..., help="JavaScript file to analyze"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    unique: bool = typer.Option(False, "--unique", "-u", help="Collapse repeated specifiers"),
    encoding: str = typer.Option("utf-8", help="Source file encoding"),
) -> None:
    """Extract module specifiers from a single file."""
    analyzer = RequiresAnalyzer(encoding=encoding)
    try:
        result = analyzer.analyze_file(file)
    except FileNotFoundError:
        console.print(f"[bold red]File not found:[/bold red] {escape(str(file))}")
        raise typer.Exit(code=1)
    except FatalParseError as e:
        console.print(f"[bold red]Parse error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except (OSError, LookupError) as e:
        console.print(f"[bold red]Cannot read {escape(str(file))}:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if as_json:
        payload = result.to_dict()
        if unique:
            payload["specifiers"] = result.unique()
        typer.echo(json.dumps(payload, indent=2))
        return

    _print_result(str(file), result, unique)


def _print_report(report: ScanReport, unique: bool) -> None:
    for rel_path, result in report.results.items():
        _print_result(rel_path, result, unique)

    if report.failures:
        console.print(f"\n[bold red]{len(report.failures)} file(s) could not be parsed:[/bold red]")
        for rel_path, message in report.failures.items():
            console.print(f"  [red]{escape(rel_path)}[/red]: {escape(message)}")

    module_count = sum(1 for result in report.results.values() if result.is_module)
    console.print(
        f"\n[green]Scanned {len(report.results)} file(s)[/green] "
        f"[dim]({module_count} module, {len(report.results) - module_count} script)[/dim]"
    )


@app.command()
def scan(
    repo: str = typer.Option(".", help="Repository path"),
    ext: list[str] | None = typer.Option(
        None, "--ext", help="Source suffix to scan (repeatable, overrides config)"
    ),
    fail_fast: bool | None = typer.Option(
        None, "--fail-fast/--keep-going", help="Stop at the first unparsable file"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    unique: bool = typer.Option(False, "--unique", "-u", help="Collapse repeated specifiers"),
) -> None:
    """Extract module specifiers from every JavaScript file in a repository."""
    repo_path = Path(repo).resolve()
    if not repo_path.is_dir():
        console.print(f"[bold red]Not a directory:[/bold red] {escape(str(repo_path))}")
        raise typer.Exit(code=1)

    config = load_config(repo_path, extensions=ext, fail_fast=fail_fast)
    scanner = ProjectScanner(repo_path, config)

    try:
        if as_json:
            report = scanner.scan()
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                TimeElapsedColumn(),
                console=console,
                transient=True,
            ) as progress:
                progress.add_task("Extracting specifiers...", total=None)
                report = scanner.scan()
    except FatalParseError as e:
        console.print(f"[bold red]Parse error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except (OSError, LookupError) as e:
        console.print(f"[bold red]Cannot read:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(report, unique)

    if not report.ok:
        raise typer.Exit(code=1)


@app.command()
def deps(
    query: str = typer.Argument(..., help="Dependency query, e.g. react@16.8.0+lodash@4.17.21"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Parse a packager dependency query into names and versions."""
    try:
        dependencies = parse_dependency_query(query)
    except ValueError as e:
        console.print(f"[bold red]Invalid query:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=2)

    if as_json:
        typer.echo(json.dumps(dependencies, indent=2))
        return

    for name, version_spec in dependencies.items():
        console.print(f"{escape(name)} [dim]@[/dim] [bold]{escape(version_spec)}[/bold]")
    console.print(f"\n[dim]Query:[/dim] {escape(format_dependency_query(dependencies))}")


@app.command()
def version() -> None:
    """Show version information."""
    from jsreq_cli import __version__

    console.print(f"jsreq version: [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
