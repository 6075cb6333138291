#!/usr/bin/env python3
"""CLI script to resolve OJ names against the reference dataset."""

from __future__ import annotations

from pathlib import Path

import structlog
import typer

from ojmatch.config import get_settings
from ojmatch.entity_resolution.index import build_index
from ojmatch.entity_resolution.resolver import resolve_name
from ojmatch.pipelines.bulk_normalization import normalize_name_list
from ojmatch.pipelines.reference_dataset import load_reference_index, load_reference_names

logger = structlog.get_logger(__name__)
app = typer.Typer()


@app.command()
def main(
    names: list[str] = typer.Argument(None, help="Names to resolve interactively"),
    dataset: Path | None = typer.Option(
        None, "--dataset", help="Reference dataset (overrides OJ_REFERENCE_DATASET_PATH)"
    ),
    bulk_file: Path | None = typer.Option(
        None, "--bulk-file", help="Newline-separated list to normalize (roles preserved)"
    ),
) -> None:
    """Resolve names given as arguments, or normalize a whole list file."""
    settings = get_settings()
    if dataset is not None:
        index = build_index(load_reference_names(dataset, settings.reference_name_field))
    else:
        index = load_reference_index(settings)

    if bulk_file is not None:
        result = normalize_name_list(bulk_file.read_text(encoding="utf-8"), index, settings)
        for line in result.normalized:
            typer.echo(line)
        logger.info(
            "bulk_file_normalized",
            path=str(bulk_file),
            total=len(result.lines),
            unresolved=len(result.unresolved),
        )
        for name in result.unresolved:
            logger.warning("oj_name_unresolved", name=name)
        return

    for name in names or []:
        resolution = resolve_name(name, index, settings)
        method = resolution.method or "unresolved"
        typer.echo(
            f"{resolution.original}\t{resolution.resolved}\t{method}\t{resolution.confidence:.2f}"
        )


if __name__ == "__main__":
    app()
