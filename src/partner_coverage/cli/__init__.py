"""CLI package: Typer-based command-line interface.

Usage:
    python -m partner_coverage.cli --help
    python -m partner_coverage.cli match partner.json project.json
"""

from partner_coverage.cli._app import app

# Register command modules (side-effect imports)
import partner_coverage.cli.cmd_region  # noqa: F401
import partner_coverage.cli.cmd_match  # noqa: F401

__all__ = ["app"]
