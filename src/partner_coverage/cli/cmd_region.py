"""Region commands: resolve a postal code and infer service requirements."""

from typing import Optional

import typer

from partner_coverage import service
from partner_coverage.cli._app import app
from partner_coverage.cli._common import prepare
from partner_coverage.cli._console import output_result, print_warn
from partner_coverage.coverage.regions import language_label, region_label


@app.command("region", help="Resolve a Belgian postal code to its region.")
def region_cmd(
    ctx: typer.Context,
    postal_code: str = typer.Argument(..., help="Postal code, e.g. 1050"),
):
    """Print the region for a postal code (null when it cannot be resolved)."""
    prepare(ctx)
    region = service.resolve_region(postal_code)
    if region is None and not ctx.obj["json"]:
        print_warn(f"Postal code {postal_code!r} does not map to a known region")
    output_result(
        {
            "postal_code": postal_code,
            "region": region.value if region else None,
            "label": region_label(region),
        },
        ctx=ctx,
        title="Region",
    )


@app.command("infer", help="Infer service coverage and language for a location.")
def infer_cmd(
    ctx: typer.Context,
    postal_code: str = typer.Option(..., "--postal-code", help="Project postal code"),
    country: str = typer.Option("Belgium", "--country", help="Project country"),
    city: Optional[str] = typer.Option(None, "--city", help="Project city"),
):
    """Print the location inference for a project address."""
    prepare(ctx)
    inference = service.infer_service_requirements(
        {"postal_code": postal_code, "country": country, "city": city}
    )
    data = inference.model_dump(mode="json")
    data["region_label"] = region_label(inference.region)
    data["language_label"] = language_label(inference.primary_language)
    output_result(data, ctx=ctx, title="Location inference")
