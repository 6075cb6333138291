"""Reconciliation of a local OJ list against an external system's list.

Pairwise structural equivalence (O(local × external) comparisons) splits the
two lists into common, missing and extra names and yields a sync percentage.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from ojmatch.entity_resolution.equivalence import equivalent


@dataclass(frozen=True)
class ComparisonResult:
    common: list[str] = field(default_factory=list)
    missing_from_external: list[str] = field(default_factory=list)
    extra_in_external: list[str] = field(default_factory=list)
    sync_percentage: int = 0


def _clean(names: Iterable[str | None] | None) -> list[str]:
    """Trim, drop blanks and collapse exact duplicates (first occurrence kept)."""
    cleaned: dict[str, None] = {}
    for name in names or ():
        name = (name or "").strip()
        if name:
            cleaned.setdefault(name, None)
    return list(cleaned)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compare_lists_of_names(
    local_list: Iterable[str | None] | None,
    external_list: Iterable[str | None] | None,
) -> ComparisonResult:
    """Compare *local_list* against *external_list*.

    Returns
    -------
    ComparisonResult
        ``common``: local names with at least one equivalent externally.
        ``missing_from_external``: local names with no external equivalent.
        ``extra_in_external``: external names with no local equivalent.
        ``sync_percentage``: ``round(100 * |common| / |distinct union|)``,
        0 when both lists are empty.
    """
    local = _clean(local_list)
    external = _clean(external_list)

    common: list[str] = []
    missing: list[str] = []
    for name in local:
        if any(equivalent(name, other) for other in external):
            common.append(name)
        else:
            missing.append(name)

    extra = [name for name in external if not any(equivalent(name, other) for other in local)]

    union = set(local) | set(external)
    sync = _round_half_up(100 * len(common) / len(union)) if union else 0

    return ComparisonResult(
        common=common,
        missing_from_external=missing,
        extra_in_external=extra,
        sync_percentage=sync,
    )
