"""Rich-based terminal report renderer with JSON/CSV support."""

from __future__ import annotations

import csv
import io
import json
from dataclasses import asdict

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import AccountSummary

UNAVAILABLE = "-"


def _format_number(n: int | None) -> str:
    return UNAVAILABLE if n is None else f"{n:,}"


def _write_to_file(content: str, output_file: str) -> None:
    """Write content to a file and print confirmation."""
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(content)
    Console(stderr=True).print(f"Saved to {output_file}")


def render_report(summary: AccountSummary, output_file: str | None = None) -> None:
    """Render an AccountSummary to the terminal using rich."""
    if output_file:
        string_io = io.StringIO()
        console = Console(file=string_io, force_terminal=False, width=120)
    else:
        console = Console()

    info = summary.account
    header = f"{info.language} Development Activity: {info.username}"
    if info.org:
        header += f"\nOrg: {info.org}"
    header += f"\nPeriod: {info.start} ~ {info.end}"
    console.print(Panel(Text(header, justify="center"), style="bold cyan"))
    console.print()

    if summary.failed_repos:
        console.print(
            f"[bold yellow]Warning:[/bold yellow] Failed to collect stats for "
            f"{len(summary.failed_repos)} repo(s): {', '.join(summary.failed_repos)}"
        )
        console.print()

    overall = summary.overall
    console.print("[bold]Overall Statistics[/bold]")
    stats = Table(show_header=False, box=None, padding=(0, 2))
    stats.add_column("label", style="dim")
    stats.add_column("value", style="bold")
    stats.add_row(f"{info.language} Repositories", _format_number(overall.total_repositories))
    stats.add_row("Total Commits", _format_number(overall.total_commits))
    stats.add_row("Unique Contributors", _format_number(overall.unique_authors))
    stats.add_row("Lines Added", _format_number(overall.total_additions))
    stats.add_row("Lines Deleted", _format_number(overall.total_deletions))
    stats.add_row("Files Changed", _format_number(overall.total_files_changed))
    console.print(stats)
    console.print()

    shares = {repo.full_name: repo.percentage for repo in summary.repositories}
    console.print("[bold]Repository Summary[/bold]")
    repo_table = Table(show_header=True, header_style="bold")
    repo_table.add_column("Repository")
    repo_table.add_column(f"{info.language} %", justify="right")
    repo_table.add_column("Commits", justify="right")
    repo_table.add_column("Authors", justify="right")
    repo_table.add_column("Additions", justify="right")
    repo_table.add_column("Deletions", justify="right")
    repo_table.add_column("Files", justify="right")
    for s in sorted(summary.repository_stats, key=lambda s: s.total_commits, reverse=True):
        share = shares.get(s.repository)
        repo_table.add_row(
            s.repository,
            UNAVAILABLE if share is None else f"{share}%",
            _format_number(s.total_commits),
            _format_number(s.unique_authors),
            _format_number(s.total_additions),
            _format_number(s.total_deletions),
            _format_number(s.total_files_changed),
        )
    console.print(repo_table)
    console.print()

    if output_file:
        _write_to_file(string_io.getvalue(), output_file)


def render_json(summary: AccountSummary, output_file: str | None = None) -> None:
    """Render an AccountSummary as JSON; unavailable values become null."""
    content = json.dumps(asdict(summary), indent=2, ensure_ascii=False)
    if output_file:
        _write_to_file(content, output_file)
    else:
        print(content)


def render_csv(summary: AccountSummary, output_file: str | None = None) -> None:
    """Render the per-commit table as CSV; unavailable values are left empty."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["repository", "author", "date", "additions", "deletions", "files_changed"])
    for row in summary.commits:
        writer.writerow([
            row.repository,
            row.author,
            row.date,
            "" if row.additions is None else row.additions,
            "" if row.deletions is None else row.deletions,
            "" if row.files_changed is None else row.files_changed,
        ])
    content = output.getvalue()
    if output_file:
        _write_to_file(content, output_file)
    else:
        print(content, end="")
