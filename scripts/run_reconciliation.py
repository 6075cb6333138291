#!/usr/bin/env python3
"""CLI script to compare a local OJ list with an external system's list."""

from __future__ import annotations

from pathlib import Path

import structlog
import typer

from ojmatch.entity_resolution.reconciliation import compare_lists_of_names

logger = structlog.get_logger(__name__)
app = typer.Typer()


@app.command()
def main(
    local: Path = typer.Option(..., "--local", help="Local list, one OJ per line"),
    external: Path = typer.Option(..., "--external", help="External list, one OJ per line"),
) -> None:
    """Report common, missing and extra units and the sync percentage."""
    local_names = local.read_text(encoding="utf-8").splitlines()
    external_names = external.read_text(encoding="utf-8").splitlines()

    result = compare_lists_of_names(local_names, external_names)

    typer.echo(f"Sync: {result.sync_percentage}%")
    for title, names in (
        ("Common", result.common),
        ("Missing from external", result.missing_from_external),
        ("Extra in external", result.extra_in_external),
    ):
        typer.echo(f"\n{title} ({len(names)}):")
        for name in names:
            typer.echo(f"  {name}")

    logger.info(
        "reconciliation_complete",
        common=len(result.common),
        missing=len(result.missing_from_external),
        extra=len(result.extra_in_external),
        sync_percentage=result.sync_percentage,
    )


if __name__ == "__main__":
    app()
