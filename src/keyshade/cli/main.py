#!/usr/bin/env python3
"""
KEYSHADE CLI
------------
Terminal front end for the key-file scanners:
1. show  - render an authorized_keys / known_hosts file with colours and
           folded key blobs
2. scan  - report entries, key types and unrecognized lines for a file or
           a whole directory tree

Author: KeyShade Team
Date: 2026-10-19
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    BarColumn,
    TaskProgressColumn
)

from keyshade.core.engine import InspectionEngine
from keyshade.core.models import FileKind
from keyshade.core.vocabulary import Vocabulary, available_presets, load_preset, load_vocabulary
from keyshade.cli.formatter import KeyFormatter

__version__ = "0.1.0"

# Global console for consistent styling across the application
console = Console()


class KeyShadeCLI:
    """
    CLI wrapper that translates user commands into Engine actions.
    """

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console
        self.formatter = KeyFormatter(self.console)
        self.parser = argparse.ArgumentParser(
            prog="keyshade",
            description="KeyShade - readable views of SSH authorized_keys and known_hosts files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _add_common(self, sub: argparse.ArgumentParser):
        sub.add_argument("path", help="Path to a key file (or directory for scan)")
        sub.add_argument("--kind", choices=[k.value for k in FileKind],
                         help="File format (default: guessed from the file name)")
        sub.add_argument("--vocabulary", metavar="FILE", help="YAML file with extra key types / options")
        sub.add_argument("--preset", choices=available_presets(), help="Bundled vocabulary preset")

    def _setup_args(self):
        self.parser.add_argument("-v", "--version", action="version", version=f"keyshade v{__version__}")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        show_parser = subparsers.add_parser("show", help="Render a key file with highlighting")
        self._add_common(show_parser)
        show_parser.add_argument("--full", action="store_true", help="Do not fold key material")

        scan_parser = subparsers.add_parser("scan", help="Report on key files")
        self._add_common(scan_parser)
        scan_parser.add_argument("--max-depth", type=int, default=10, help="Directory recursion limit")

    def _build_engine(self, args: argparse.Namespace, abbreviate: bool = True) -> InspectionEngine:
        vocabulary = load_preset(args.preset) if args.preset else Vocabulary()
        if args.vocabulary:
            vocabulary = load_vocabulary(args.vocabulary, base=vocabulary)
        return InspectionEngine(vocabulary=vocabulary, abbreviate=abbreviate)

    def _show(self, args: argparse.Namespace) -> int:
        path = Path(args.path)
        engine = self._build_engine(args, abbreviate=not args.full)
        report = engine.inspect_file(path, kind=args.kind)

        if not report["success"]:
            self.formatter.print_errors([report])
            return 1

        self.formatter.display_document(report["context"], title=str(path), abbreviate=not args.full)
        return 0

    def _scan(self, args: argparse.Namespace) -> int:
        path = Path(args.path)
        if not path.exists():
            self.console.print(f"[bold red]Error:[/bold red] Path '{escape(args.path)}' not found.")
            return 1

        engine = self._build_engine(args)

        if path.is_file():
            reports = [engine.inspect_file(path, kind=args.kind)]
        else:
            targets = engine.discover_files(path, max_depth=args.max_depth)
            if not targets:
                self.console.print("\n[bold yellow]No authorized_keys or known_hosts files found.[/bold yellow]")
                return 0
            reports = self._scan_with_progress(engine, targets)

        self.formatter.print_errors(reports)
        self.formatter.print_final_table(reports)
        self.formatter.print_summary(engine.generate_summary(reports))
        return 0 if all(r.get("success") for r in reports) else 1

    def _scan_with_progress(self, engine: InspectionEngine, targets: List[Path]) -> List[dict]:
        reports = []
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=self.console
        ) as progress:
            task_id = progress.add_task("Reading key files...", total=len(targets))
            for file_path in targets:
                reports.append(engine.inspect_file(file_path))
                progress.update(task_id, advance=1, description=f"Checked: {escape(file_path.name)}")
        return reports

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        try:
            if args.command == "show":
                return self._show(args)
            if args.command == "scan":
                return self._scan(args)
        except RuntimeError as e:
            self.console.print(f"[bold red]CRITICAL ERROR:[/bold red] {escape(str(e))}")
            return 2

        self.console.print(Panel.fit(f"[bold cyan]KeyShade v{__version__}[/bold cyan]", border_style="cyan"))
        self.parser.print_help()
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KeyShadeCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
