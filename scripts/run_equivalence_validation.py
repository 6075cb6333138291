#!/usr/bin/env python3
"""CLI script to score the equivalence comparator against labelled pairs."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import structlog
import typer

from ojmatch.entity_resolution.validation import (
    compute_equivalence_metrics,
    generate_validation_report,
)

logger = structlog.get_logger(__name__)
app = typer.Typer()

REQUIRED_COLUMNS = ["name_a", "name_b", "same_unit"]


@app.command()
def main(
    ground_truth: Path = typer.Argument(..., help="CSV with name_a, name_b, same_unit columns"),
) -> None:
    """Print a precision/recall report for the labelled pairs."""
    df = pd.read_csv(ground_truth, dtype=str).fillna("")

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        logger.error("ground_truth_missing_columns", missing=missing, path=str(ground_truth))
        raise typer.Exit(code=1)

    pairs = [
        {
            "name_a": row["name_a"],
            "name_b": row["name_b"],
            "same_unit": row["same_unit"].strip().lower() in ("true", "yes", "1"),
        }
        for row in df.to_dict(orient="records")
    ]

    metrics = compute_equivalence_metrics(pairs)
    logger.info("equivalence_validation_complete", **metrics)
    typer.echo(generate_validation_report(metrics))


if __name__ == "__main__":
    app()
