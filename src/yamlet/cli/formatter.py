# src/yamlet/cli/formatter.py
from typing import Any, Dict, List

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

# Initialize the Rich console for high-quality terminal output
console = Console()


class YamletFormatter:
    """
    YamletFormatter: the visual side of the CLI.
    Responsible for rendering parsed documents, errors and scan reports.
    """

    def display_value(self, rendered: str, fmt: str, file_name: str):
        """Shows a rendered document with syntax highlighting."""
        syntax = Syntax(rendered.rstrip(), fmt, theme="monokai", line_numbers=True)
        console.print(Panel(
            syntax,
            title=f"Parsed: {file_name}",
            subtitle=fmt.upper(),
            border_style="green"
        ))

    def show_error(self, report: Dict[str, Any]):
        location = f" (line {report['line']})" if report.get("line") else ""
        console.print(
            f"[bold red]{report.get('status', 'FAILED')}[/bold red] "
            f"{report.get('file_path')}{location}: {report.get('error')}"
        )

    def show_cross_check(self, report: Dict[str, Any]):
        message = report.get("cross_check")
        if not message:
            return
        style = "green" if report.get("success") else "yellow"
        console.print(f"[bold {style}]Cross-check:[/bold {style}] {message}")

    def print_final_table(self, reports: List[Dict[str, Any]]):
        """
        Builds the summary table shown at the very end of a check run.
        """
        table = Table(title="Yamlet Check Report", show_header=True, header_style="bold magenta")
        table.add_column("File Path", style="cyan")
        table.add_column("Type")
        table.add_column("Status")
        table.add_column("Detail", style="dim")
        table.add_column("Result", justify="center")

        for r in reports:
            success = r.get("success", False)
            color = "green" if success else "red"
            detail = r.get("error") or r.get("cross_check") or ""
            if r.get("line"):
                detail = f"L{r['line']}: {detail}"
            table.add_row(
                str(r.get("file_path")),
                str(r.get("doc_type") or "-"),
                f"[{color}]{r.get('status', 'FAILED')}[/{color}]",
                detail,
                "✅" if success else "❌"
            )

        console.print(table)

    def print_summary(self, summary: Dict[str, Any]):
        console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Total Files:       {summary['total_files']}\n"
            f"Parsed:           [green]{summary['successful']}[/green]\n"
            f"Structure Errors: [red]{summary['structure_errors']}[/red]\n"
            f"Mismatches:       [yellow]{summary['mismatches']}[/yellow]\n"
            f"System Errors:    [red]{summary['system_errors']}[/red]",
            border_style="dim"
        ))
