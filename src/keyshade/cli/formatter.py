# src/keyshade/cli/formatter.py
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from keyshade.core.models import Category, Span
from keyshade.scanning.context import LineResult, ScanContext

# Initialize the Rich console for high-quality terminal output
console = Console()

ELLIPSIS = "…"

STYLES: Dict[Category, str] = {
    Category.KEYWORD: "bold cyan",
    Category.KEY_TYPE: "bold green",
    Category.KEY_MATERIAL: "yellow",
    Category.COMMENT: "italic bright_black",
    Category.MARKER: "bold magenta",
    Category.HOSTNAME: "blue",
    Category.HASHED_HOSTNAME: "dim blue",
    Category.NEGATION: "bold red",
}

MARKER_STYLES = {
    "cert-authority": "bold magenta",
    "revoked": "bold white on red",
}

COMMENT_LINE_STYLE = "italic bright_black"


class KeyFormatter:
    """
    KeyFormatter: the visual side of the CLI.
    Turns classified lines into styled rich Text, and reports into tables.
    """

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def style_for(self, span: Span) -> str:
        if span.category is Category.MARKER and span.detail in MARKER_STYLES:
            return MARKER_STYLES[span.detail]
        return STYLES[span.category]

    def render_line(self, result: LineResult, abbreviate: bool = True) -> Text:
        """
        Builds the display text for one line. The collapsible part of the
        key blob is replaced by an ellipsis unless abbreviate is off.
        """
        line = result.text
        if result.is_comment_or_blank:
            return Text(line, style=COMMENT_LINE_STYLE if line.strip() else "")

        hidden = result.abbreviation if abbreviate else None
        text = Text()
        cursor = 0

        for span in result.spans:
            text.append(line[cursor:span.start])
            style = self.style_for(span)
            if hidden and span.start <= hidden.start and hidden.end <= span.end:
                text.append(line[span.start:hidden.start], style=style)
                text.append(ELLIPSIS, style=f"{style} dim")
                text.append(line[hidden.end:span.end], style=style)
            else:
                text.append(line[span.start:span.end], style=style)
            cursor = span.end

        text.append(line[cursor:])
        return text

    def display_document(self, context: ScanContext, title: str, abbreviate: bool = True):
        table = Table.grid(padding=(0, 1))
        table.add_column(justify="right", style="dim")
        table.add_column()
        for result in context.lines:
            table.add_row(str(result.line_no), self.render_line(result, abbreviate=abbreviate))

        self.console.print(Panel(table, title=f"[bold]{escape(title)}[/bold]",
                                 subtitle=context.kind.value, border_style="cyan"))

    def print_final_table(self, reports: List[dict]):
        """Builds the summary table shown at the end of a scan."""
        table = Table(title="KeyShade Scan Report", show_lines=True, header_style="bold magenta")
        table.add_column("File Path", style="cyan")
        table.add_column("Kind")
        table.add_column("Status", style="bold")
        table.add_column("Entries", justify="right")
        table.add_column("Key Types")
        table.add_column("Unrecognized Lines")

        for r in reports:
            ok = r.get("success", False)
            status_color = "green" if ok and r.get("status") == "OK" else "yellow" if ok else "red"
            key_types = ", ".join(f"{name} ×{count}" for name, count in sorted(r.get("key_types", {}).items()))
            unrecognized = ", ".join(str(n) for n in r.get("unrecognized", [])) or "-"
            table.add_row(
                escape(str(r.get("file_path"))),
                escape(str(r.get("kind", "unknown"))),
                f"[{status_color}]{r.get('status')}[/{status_color}]",
                str(r.get("entries", 0)),
                escape(key_types) or "-",
                unrecognized,
            )

        self.console.print(table)

    def print_summary(self, summary: dict):
        self.console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Total Files:         {summary['total_files']}\n"
            f"Key Entries:         [green]{summary['entries']}[/green]\n"
            f"Unrecognized Lines:  [yellow]{summary['unrecognized_lines']}[/yellow]\n"
            f"Errors:              [red]{summary['system_errors']}[/red]",
            border_style="dim"
        ))

    def print_errors(self, reports: List[dict]):
        for r in reports:
            if not r.get("success", False):
                self.console.print(f"[bold red]Error in {escape(str(r['file_path']))}:[/bold red] "
                                   f"{escape(str(r.get('error')))}")
