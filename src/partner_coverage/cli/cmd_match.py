"""Match command: evaluate a partner against a project."""

from pathlib import Path

import typer

from partner_coverage import service
from partner_coverage.cli._app import app
from partner_coverage.cli._common import prepare, read_json_record
from partner_coverage.cli._console import output_result, print_report
from partner_coverage.coverage.matcher import MatchMode


@app.command("match", help="Check whether a partner can service a project.")
def match_cmd(
    ctx: typer.Context,
    partner_file: Path = typer.Argument(..., help="Partner record (JSON)"),
    project_file: Path = typer.Argument(..., help="Project record (JSON)"),
    mode: MatchMode = typer.Option(MatchMode.FAST, "--mode", help="Explicit requirement check"),
):
    """Print the coverage report for a partner/project pair."""
    prepare(ctx)
    partner = read_json_record(partner_file, "Partner")
    project = read_json_record(project_file, "Project")

    report = service.build_coverage_report(partner, project, mode=mode)

    data = report.model_dump(mode="json")
    data["mode"] = mode.value
    data["can_serve"] = report.verdict.can_serve

    if ctx.obj["json"]:
        output_result(data, ctx=ctx)
        return

    print_report(report, title=f"Coverage match ({mode.value})")
