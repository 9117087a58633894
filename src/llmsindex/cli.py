"""Command line interface for llmsindex."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from llmsindex.config import AppConfig
from llmsindex.synthesis.budget import BudgetReport
from llmsindex.synthesis.generator import IndexGenerator, copy_root_index
from llmsindex.synthesis.validator import iter_index_files, validate_file

console = Console()
app = typer.Typer(help="llmsindex - budgeted llms.txt indices for documentation trees")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _ensure_directory(path: Path) -> Path:
    if not path.is_dir():
        raise typer.BadParameter(f"Directory does not exist: {path}")
    return path


def _budget_table(title: str, reports: list[BudgetReport]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Directory")
    table.add_column("Lines", justify="right")
    table.add_column("Topics", justify="right")
    for report in sorted(reports, key=lambda item: (-item.lines, item.directory)):
        table.add_row(report.directory or ".", str(report.lines), str(report.topics))
    return table


@app.command()
def generate(
    target: Path = typer.Argument(..., help="Documentation tree root.", resolve_path=True),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be generated"),
    soft_budget: int = typer.Option(
        AppConfig().soft_budget, "--soft-budget", help="Line count that triggers a warning"
    ),
    hard_budget: int = typer.Option(
        AppConfig().hard_budget, "--hard-budget", help="Line count that triggers overflow"
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Prefix turning repository paths into absolute links"
    ),
    toc: bool = typer.Option(False, "--toc", help="Also read legacy toc.yml files"),
    copy_root: Optional[Path] = typer.Option(
        None, "--copy-root", help="Copy the root llms.txt into this directory"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Generate llms.txt indices for every directory of a documentation tree."""
    _setup_logging(verbose)
    _ensure_directory(target)
    try:
        config = AppConfig(
            soft_budget=soft_budget,
            hard_budget=hard_budget,
            base_url=base_url,
            use_toc=toc,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    console.print(f"Generating indices under [bold]{target}[/bold]...")
    stats = IndexGenerator(config).generate(target, dry_run=dry_run)

    verb = "Would write" if dry_run else "Wrote"
    for document in stats.documents:
        relative = document.path.relative_to(target)
        console.print(f"  {verb} {relative} ({document.estimated_lines} lines, {document.kind})")

    console.print(
        f"Primary: {stats.primary}, extended: {stats.extended}, "
        f"navigation: {stats.navigation}, failed: {stats.failed}"
    )
    if stats.over_soft:
        console.print(f"[yellow]{len(stats.over_soft)} over soft budget ({soft_budget})[/yellow]")
        console.print(_budget_table("Over soft budget", stats.over_soft))
    if stats.over_hard:
        console.print(f"[red]{len(stats.over_hard)} over hard budget ({hard_budget})[/red]")
        console.print(_budget_table("Over hard budget", stats.over_hard))

    if copy_root is not None and not dry_run:
        copied = copy_root_index(target, copy_root, config)
        if copied is not None:
            console.print(f"Copied root index to [bold]{copied}[/bold]")

    if stats.failed:
        for directory in stats.failed_directories:
            console.print(f"[red]Failed: {directory or '.'}[/red]")
        raise typer.Exit(code=1)


@app.command()
def validate(
    target: Path = typer.Argument(..., help="Directory to scan", resolve_path=True),
    max_lines: int = typer.Option(AppConfig().hard_budget, help="Maximum lines per file"),
) -> None:
    """Check existing llms*.txt files for size and link syntax."""
    _ensure_directory(target)
    files = list(iter_index_files(target))
    if not files:
        console.print("[yellow]No llms*.txt files found.[/yellow]")
        return

    all_valid = True
    for path in files:
        result = validate_file(path, max_lines=max_lines)
        relative = path.relative_to(target)
        if result.valid:
            console.print(f"[green]OK[/green] {relative} ({result.line_count} lines)")
            continue
        all_valid = False
        console.print(f"[red]FAIL[/red] {relative}")
        for issue in result.issues:
            console.print(f"  {issue}")

    if not all_valid:
        raise typer.Exit(code=1)


@app.command()
def tree(
    target: Path = typer.Argument(..., help="Directory to scan", resolve_path=True),
) -> None:
    """Show every llms*.txt file grouped by directory."""
    _ensure_directory(target)
    files = list(iter_index_files(target))
    if not files:
        console.print("[yellow]No llms*.txt files found.[/yellow]")
        return

    root = Tree(f"[bold]{target.name or target}/[/bold]")
    branches = {target: root}
    for path in files:
        parent = path.parent
        if parent not in branches:
            anchor = root
            current = target
            for part in parent.relative_to(target).parts:
                current = current / part
                if current not in branches:
                    branches[current] = anchor.add(f"{part}/")
                anchor = branches[current]
        content = path.read_text(encoding="utf-8")
        line_count = len(content.splitlines())
        size = path.stat().st_size
        branches[parent].add(f"{path.name} ({line_count} lines, {size} bytes)")

    console.print(root)
    directories = len({path.parent for path in files})
    console.print(f"Total: {len(files)} files in {directories} directories")


if __name__ == "__main__":  # pragma: no cover
    app()
