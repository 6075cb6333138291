"""Host-side pipelines: reference dataset loading and bulk list normalization."""

from __future__ import annotations

from ojmatch.pipelines.bulk_normalization import (
    BulkNormalizationResult,
    NormalizedLine,
    normalize_name_list,
    run_bulk_normalization,
    split_role_suffix,
)
from ojmatch.pipelines.reference_dataset import (
    load_reference_index,
    load_reference_names,
)

__all__ = [
    # Bulk normalization
    "BulkNormalizationResult",
    "NormalizedLine",
    "normalize_name_list",
    "run_bulk_normalization",
    "split_role_suffix",
    # Reference dataset
    "load_reference_index",
    "load_reference_names",
]
