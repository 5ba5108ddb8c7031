"""
Codegraph Sorter CLI

Commands:
- check: Report files whose imports/exports are not sorted (exit 1 if any)
- fix: Sort imports/exports in place

Examples:
    codegraph-sort check src/
    codegraph-sort fix src/ --sort-by name
    codegraph-sort check src/index.ts --diff --config sorter.yaml
"""

import difflib
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax

from codegraph_sorter.common.exceptions import SorterError
from codegraph_sorter.common.observability import get_logger, setup_logging
from codegraph_sorter.config import SorterSettings
from codegraph_sorter.fixer import SortResult, sort_file
from codegraph_sorter.models import SortBy

app = typer.Typer(name="codegraph-sort", help="Sort JavaScript/TypeScript imports and exports", add_completion=False)
console = Console()
logger = get_logger(__name__)

ConfigOption = typer.Option(None, "--config", "-c", help="YAML settings file")
SortByOption = typer.Option(None, "--sort-by", help="Comparator inside a group: name or path")
DiffOption = typer.Option(False, "--diff", help="Print a unified diff for every changed file")
LogLevelOption = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR")
LogFormatOption = typer.Option(None, "--log-format", help="console or json")


def _load_settings(
    config: Path | None,
    sort_by: SortBy | None,
    log_level: str | None,
    log_format: str | None,
) -> SorterSettings:
    overrides = {"sort_by": sort_by, "log_level": log_level, "log_format": log_format}
    try:
        if config is not None:
            settings = SorterSettings.from_yaml(config, **overrides)
        else:
            settings = SorterSettings.create(**{key: value for key, value in overrides.items() if value is not None})
    except SorterError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(2) from e

    setup_logging(level=settings.log_level, format=settings.log_format)
    return settings


def iter_source_files(paths: list[Path], settings: SorterSettings) -> list[Path]:
    """
    Expand directories into supported source files.

    Dot-directories and `exclude_dirs` are skipped. Files given explicitly are
    always kept.
    """
    extensions = {extension.lower() for extension in settings.extensions}
    excluded = set(settings.exclude_dirs)
    files = []

    for path in paths:
        if path.is_file():
            files.append(path)
            continue

        for candidate in sorted(path.rglob("*")):
            relative_parts = candidate.relative_to(path).parts[:-1]
            if any(part.startswith(".") or part in excluded for part in relative_parts):
                continue
            if candidate.is_file() and candidate.suffix.lower() in extensions:
                files.append(candidate)

    return files


def _print_diff(result: SortResult) -> None:
    diff = "".join(
        difflib.unified_diff(
            result.original.splitlines(keepends=True),
            result.text.splitlines(keepends=True),
            fromfile=result.file_path,
            tofile=result.file_path,
        )
    )
    console.print(Syntax(diff, "diff", theme="ansi_dark", background_color="default"))


def _run(paths: list[Path], settings: SorterSettings, write: bool, diff: bool) -> tuple[int, int, int]:
    """Sort every file, returns (checked, changed, failed)"""
    checked = changed = failed = 0

    for path in iter_source_files(paths, settings):
        checked += 1
        try:
            result = sort_file(path, settings, write=write)
        except (SorterError, ValueError, OSError, UnicodeDecodeError) as e:
            failed += 1
            logger.warning("file_skipped", file=str(path), error=str(e))
            console.print(f"[yellow]⚠️  {path}: {e}[/yellow]")
            continue

        if result.changed:
            changed += 1
            label = "fixed" if write else "unsorted"
            console.print(f"[cyan]{label}[/cyan] {path}")
            if diff:
                _print_diff(result)

    return checked, changed, failed


@app.command()
def check(
    paths: List[Path] = typer.Argument(..., exists=True, help="Files or directories"),
    config: Optional[Path] = ConfigOption,
    sort_by: Optional[SortBy] = SortByOption,
    diff: bool = DiffOption,
    log_level: Optional[str] = LogLevelOption,
    log_format: Optional[str] = LogFormatOption,
):
    """
    Report files with unsorted imports/exports.

    Exit codes: 0 all sorted, 1 some file would change, 2 bad configuration.
    """
    settings = _load_settings(config, sort_by, log_level, log_format)
    checked, changed, failed = _run(paths, settings, write=False, diff=diff)

    console.print(f"\nChecked {checked} file(s): {changed} unsorted, {failed} skipped")
    if changed:
        raise typer.Exit(1)


@app.command()
def fix(
    paths: List[Path] = typer.Argument(..., exists=True, help="Files or directories"),
    config: Optional[Path] = ConfigOption,
    sort_by: Optional[SortBy] = SortByOption,
    diff: bool = DiffOption,
    log_level: Optional[str] = LogLevelOption,
    log_format: Optional[str] = LogFormatOption,
):
    """Sort imports/exports in place."""
    settings = _load_settings(config, sort_by, log_level, log_format)
    checked, changed, failed = _run(paths, settings, write=True, diff=diff)

    console.print(f"\n[green]✅ Fixed {changed} of {checked} file(s)[/green], {failed} skipped")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
