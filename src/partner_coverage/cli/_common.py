"""Shared CLI setup: logging, config loading and JSON input files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.logging import RichHandler

from partner_coverage import service
from partner_coverage.cli._console import console, print_err
from partner_coverage.config.coverage_config import (
    CoverageConfigError,
    get_coverage_config,
    load_coverage_config,
)

logger = logging.getLogger(__name__)


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging with Rich handler."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def prepare(ctx: typer.Context) -> None:
    """Set up logging and the shared matcher for a command.

    Exits with code 1 if the coverage config cannot be loaded.
    """
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    config_path: Optional[Path] = ctx.obj.get("config_path")
    try:
        if config_path is not None:
            config = load_coverage_config(config_path)
        else:
            config = get_coverage_config(force_reload=True)
    except CoverageConfigError as e:
        print_err(str(e))
        raise SystemExit(1)

    service.configure(config)


def read_json_record(path: Path, kind: str) -> Dict[str, Any]:
    """Read a partner or project snapshot from a JSON file.

    Exits with code 1 if the file cannot be read or is not a JSON object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        print_err(f"{kind} file not found: {path}")
        raise SystemExit(1)
    except OSError as e:
        print_err(f"Cannot read {kind} file {path}: {e.strerror or e}")
        raise SystemExit(1)
    except UnicodeDecodeError:
        print_err(f"{kind} file is not UTF-8 text: {path}")
        raise SystemExit(1)
    except json.JSONDecodeError as e:
        print_err(f"Invalid JSON in {kind} file {path}: {e}")
        raise SystemExit(1)

    if not isinstance(data, dict):
        print_err(f"{kind} file {path} must contain a JSON object")
        raise SystemExit(1)
    return data
