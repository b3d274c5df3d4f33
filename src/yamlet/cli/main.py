#!/usr/bin/env python3
"""
YAMLET CLI
----------
Command-line front end for the parser.

    yamlet parse FILE [--format json|yaml] [--cross-check]
    yamlet check PATH [--ext .yaml] [--max-depth N] [--cross-check]

Author: Yamlet Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from rich.panel import Panel
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    BarColumn,
    TaskProgressColumn
)

from yamlet import __version__
from yamlet.cli.formatter import YamletFormatter, console
from yamlet.core.config import ParserOptions
from yamlet.core.engine import ParseEngine
from yamlet.parsing.exporter import EXPORT_FORMATS, YamlExporter


class YamletCLI:
    """
    CLI wrapper that translates user commands into engine actions.
    """

    def __init__(self):
        """Initializes the CLI and sets up the argument parser."""
        self.parser = argparse.ArgumentParser(
            prog="yamlet",
            description="Yamlet - indentation-driven YAML subset parser",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = YamletFormatter()
        self.exporter = YamlExporter()
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-v", "--version", action="version", version=f"yamlet v{__version__}")
        self.parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
        self.parser.add_argument("--naive-comments", action="store_true",
                                 help="Treat every '#' as a comment start, even inside quotes")
        self.parser.add_argument("--no-flow-blocks", action="store_true",
                                 help="Do not collect [...] / {...} blocks spanning several lines")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        # 'parse' subcommand - render one document
        parse_parser = subparsers.add_parser("parse", help="Parse a YAML file and print the result")
        parse_parser.add_argument("path", help="Path to a YAML file")
        parse_parser.add_argument("--format", choices=EXPORT_FORMATS, default="json",
                                  help="Output format (default: json)")
        parse_parser.add_argument("--cross-check", action="store_true",
                                  help="Compare the result with ruamel.yaml")

        # 'check' subcommand - validate files in bulk
        check_parser = subparsers.add_parser("check", help="Check that files parse")
        check_parser.add_argument("path", help="Path to a YAML file or directory")
        check_parser.add_argument("--ext", default=".yaml", help="File extension filter (default: .yaml)")
        check_parser.add_argument("--max-depth", type=int, default=10, help="Directory recursion limit")
        check_parser.add_argument("--cross-check", action="store_true",
                                  help="Compare each result with ruamel.yaml")

    def print_header(self, subtitle: str):
        """Renders the splash header."""
        console.print(Panel.fit(
            f"[bold cyan]Yamlet v{__version__}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _options(self, args: argparse.Namespace) -> ParserOptions:
        return ParserOptions(
            comment_mode="naive" if args.naive_comments else "quoted",
            flow_blocks=not args.no_flow_blocks,
        )

    def _run_parse(self, args: argparse.Namespace) -> int:
        input_path = Path(args.path).resolve()
        if not input_path.is_file():
            console.print(f"[bold red]Error:[/bold red] File '{args.path}' not found.")
            return 2

        engine = ParseEngine(str(input_path.parent), self._options(args))
        report = engine.parse_file(input_path.name, cross_check=args.cross_check)

        if report["status"] not in ("PARSED", "MISMATCH"):
            self.formatter.show_error(report)
            return 1

        rendered = self.exporter.export(report["value"], args.format)
        self.formatter.display_value(rendered, args.format, args.path)
        self.formatter.show_cross_check(report)
        return 0 if report["success"] else 1

    def _run_check(self, args: argparse.Namespace) -> int:
        input_path = Path(args.path).resolve()
        if not input_path.exists():
            console.print(f"[bold red]Error:[/bold red] Path '{args.path}' not found.")
            return 2

        options = self._options(args)
        if input_path.is_file():
            engine = ParseEngine(str(input_path.parent), options)
            reports = [engine.parse_file(input_path.name, cross_check=args.cross_check)]
        else:
            engine = ParseEngine(str(input_path), options)
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(bar_width=40),
                TaskProgressColumn(),
                TimeElapsedColumn(),
                console=console,
                transient=True
            ) as progress:
                task_id = progress.add_task("Parsing files...", total=None)

                def advance(done: int, total: int):
                    progress.update(task_id, completed=done, total=total)

                reports = engine.scan_directory(
                    extension=args.ext,
                    max_depth=args.max_depth,
                    cross_check=args.cross_check,
                    progress_callback=advance
                )

        if not reports:
            console.print("\n[bold yellow]⚠️  No matching YAML files found.[/bold yellow]")
            return 0

        self.formatter.print_final_table(reports)
        self.formatter.print_summary(engine.generate_summary(reports))
        return 0 if all(r.get("success") for r in reports) else 1

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

        if args.command == "parse":
            return self._run_parse(args)
        if args.command == "check":
            self.print_header("Parse Check")
            return self._run_check(args)

        self.print_header("YAML Subset Parser")
        self.parser.print_help()
        return 0


def main(argv: Optional[List[str]] = None):
    """Application entry point with interrupt handling."""
    try:
        sys.exit(YamletCLI().run(argv))
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
