"""Entity resolution for judicial organizational-unit (OJ) names."""

from __future__ import annotations

from ojmatch.entity_resolution.canonicalization import (
    canonicalize_locality,
    contract_abbreviation,
    convert_spelled_ordinal,
    expand_abbreviation,
    normalize,
    reformat_unit_name,
    standardize_prepositions,
)
from ojmatch.entity_resolution.equivalence import (
    UnitNameComponents,
    decompose,
    equivalent,
)
from ojmatch.entity_resolution.index import ReferenceIndex, build_index
from ojmatch.entity_resolution.reconciliation import (
    ComparisonResult,
    compare_lists_of_names,
)
from ojmatch.entity_resolution.resolver import Resolution, resolve, resolve_name
from ojmatch.entity_resolution.validation import (
    compute_equivalence_metrics,
    generate_validation_report,
)
from ojmatch.entity_resolution.variants import generate_variants

__all__ = [
    # canonicalization
    "canonicalize_locality",
    "contract_abbreviation",
    "convert_spelled_ordinal",
    "expand_abbreviation",
    "normalize",
    "reformat_unit_name",
    "standardize_prepositions",
    # variants / index
    "generate_variants",
    "ReferenceIndex",
    "build_index",
    # resolver
    "Resolution",
    "resolve",
    "resolve_name",
    # equivalence / reconciliation
    "UnitNameComponents",
    "decompose",
    "equivalent",
    "ComparisonResult",
    "compare_lists_of_names",
    # validation
    "compute_equivalence_metrics",
    "generate_validation_report",
]
