"""Rich consoles and output helpers for the coverage commands."""

import json as json_mod
from typing import Any, Dict

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from partner_coverage.coverage.schemas import CheckStatus, CoverageReport, ServeVerdict

# Logs, warnings and human-readable output go to stderr
console = Console(stderr=True)

# JSON output goes to stdout so it can be piped
stdout_console = Console()

_STATUS_STYLES = {
    ServeVerdict.SERVES.value: "green",
    ServeVerdict.DOES_NOT_SERVE.value: "red",
    ServeVerdict.UNCLEAR.value: "yellow",
    CheckStatus.MATCH.value: "green",
    CheckStatus.PARTIAL.value: "yellow",
    CheckStatus.MISMATCH.value: "red",
    CheckStatus.UNKNOWN.value: "dim",
}


def print_err(msg: str) -> None:
    """Print an error message to stderr."""
    console.print(f"[red]✗[/red] {msg}")


def print_warn(msg: str) -> None:
    """Print a warning message to stderr."""
    console.print(f"[yellow]![/yellow] {msg}")


def output_result(data: Dict[str, Any], *, ctx: typer.Context, title: str = "") -> None:
    """Print a result as JSON (stdout) or as a panel (stderr)."""
    if ctx.obj.get("json"):
        stdout_console.print_json(data=data)
        return
    formatted = json_mod.dumps(data, indent=2, ensure_ascii=False)
    console.print(Panel(formatted, title=title or None, border_style="blue"))


def _styled(status: str) -> str:
    style = _STATUS_STYLES.get(status)
    return f"[{style}]{status}[/{style}]" if style else status


def print_report(report: CoverageReport, *, title: str) -> None:
    """Render the verdict and the detailed checks of a report as a table."""
    table = Table(title=title)
    table.add_column("check")
    table.add_column("status")
    table.add_column("detail")
    table.add_row("verdict", _styled(report.verdict.verdict.value), report.verdict.reason)
    table.add_row("coverage", _styled(report.coverage.status.value), report.coverage.message)
    table.add_row("language", _styled(report.language.status.value), report.language.message)
    console.print(table)

    if report.location_inference and report.location_inference.region:
        console.print(f"  [blue]{report.location_title}[/blue]: {report.location_inference.notes}")
    console.print(f"  Confidence: {report.verdict.confidence.value}")
