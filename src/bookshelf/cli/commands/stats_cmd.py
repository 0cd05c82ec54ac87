# ABOUTME: The `bookshelf stats` command for aggregate reading statistics.
# ABOUTME: Summarizes status counts, pages, reading days, categories, and yearly trends.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bookshelf import BookshelfError
from bookshelf.cli.options import open_writer, settings_option, vault_option
from bookshelf.core.statistics import compute_statistics

console = Console()

_TOP_CATEGORIES = 10


@click.command("stats")
@vault_option
@settings_option
def stats(vault_path: Path | None, settings_path: Path | None) -> None:
    """Show reading statistics for the whole bookshelf."""
    writer, _ = open_writer(vault_path, settings_path)

    try:
        result = compute_statistics(writer.list_notes())
    except BookshelfError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    summary = Table(show_header=False, box=None, pad_edge=False)
    summary.add_column("Stat", style="bold", width=20)
    summary.add_column("Value", justify="right")
    summary.add_row("Books", str(result.total_books))
    summary.add_row("Unread", str(result.unread))
    summary.add_row("Reading", str(result.reading))
    summary.add_row("Finished", str(result.finished))
    summary.add_row("Pages read", f"{result.read_pages}/{result.total_pages}")
    summary.add_row("Reading days", str(result.reading_days))
    summary.add_row("Avg days to finish", str(result.average_days_to_finish))
    console.print(summary)

    if result.yearly:
        yearly = Table(title="Finished by year")
        yearly.add_column("Year")
        yearly.add_column("Books", justify="right")
        yearly.add_column("Pages", justify="right")
        yearly.add_column("Change", justify="right", style="dim")
        for year in sorted(result.yearly, reverse=True):
            period = result.yearly[year]
            change = ""
            if period.change is not None:
                change = f"{period.change:+d} ({period.change_percent}%)"
            yearly.add_row(year, str(period.count), str(period.pages), change)
        console.print(yearly)

    if result.category_counts:
        categories = Table(title="Top categories (finished)")
        categories.add_column("Category")
        categories.add_column("Books", justify="right")
        ranked = sorted(result.category_counts.items(), key=lambda item: (-item[1], item[0]))
        for name, count in ranked[:_TOP_CATEGORIES]:
            categories.add_row(name, str(count))
        console.print(categories)
