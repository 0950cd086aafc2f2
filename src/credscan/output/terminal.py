"""Rich terminal reporter: findings table and run summary."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from credscan.findings.models import ScanResult


def _pairs(matches):
    return [(matches[i], matches[i + 1]) for i in range(0, len(matches) - 1, 2)]


def render(result: ScanResult, *, show_summary: bool = True, console: Optional[Console] = None) -> None:
    """Print scan results using Rich."""
    console = console or Console(stderr=True)

    if not result.findings:
        console.print()
        console.print("[bold green]✅ No credentials detected.[/bold green]")
        if show_summary:
            print_summary(console, result)
        return

    console.print()
    table = Table(
        title="credscan findings",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("File", style="magenta")
    table.add_column("Lines", justify="right", style="green")
    table.add_column("Label", style="cyan")
    table.add_column("Value", min_width=8)

    for finding in result.iter_findings():
        pairs = _pairs(finding.matches)
        label, value = pairs[0] if pairs else ("", "")
        # Scanned text is never Rich markup
        table.add_row(
            Text(finding.file),
            ",".join(str(n + 1) for n in finding.line_numbers),
            Text(label),
            Text(value),
        )

    console.print(table)

    if show_summary:
        print_summary(console, result)

    console.print()
    console.print(
        f"[bold red]❌ {result.total_findings} credential(s) found "
        f"in {len(result.findings)} file(s).[/bold red]"
    )


def print_summary(console: Console, result: ScanResult) -> None:
    console.print()
    console.print(f"[dim]Files scanned:[/dim]    {result.files_scanned}")
    console.print(f"[dim]Files processed:[/dim]  {result.files_processed}")
    console.print(f"[dim]Findings:[/dim]         {result.total_findings}")
    console.print(f"[dim]Duration:[/dim]         {result.scan_duration_ms:.0f}ms")
