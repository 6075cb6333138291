"""Reference index over the canonical OJ dataset.

The index is an immutable value produced by :func:`build_index`.  A dataset
change means building a new index and swapping the reference held by the
caller; an existing index is never patched, so no stale variant can survive a
rebuild.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ojmatch.entity_resolution.canonicalization import normalize
from ojmatch.entity_resolution.variants import generate_variants


@dataclass(frozen=True)
class ReferenceIndex:
    """Lookup tables from normalised spellings to canonical names.

    Attributes
    ----------
    canonical_names:
        Distinct canonical names in dataset-declaration order (first
        occurrence wins the position).
    identity:
        ``normalize(canonical name)`` → canonical name.
    variants:
        ``normalize(variant)`` → canonical name, for every generated variant.

    On key collisions the name declared last wins.  ``identity`` iterates in
    declaration order, which is the order partial matching scans it.
    """

    canonical_names: tuple[str, ...] = ()
    identity: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    variants: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __len__(self) -> int:
        return len(self.canonical_names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize(name) in self.identity


def build_index(canonical_names: Iterable[str] | None) -> ReferenceIndex:
    """Build a fresh :class:`ReferenceIndex` from *canonical_names*.

    Blank entries are skipped and duplicates tolerated.  Cost is
    O(total number of variants) in time and space.
    """
    names: dict[str, None] = {}
    identity: dict[str, str] = {}
    variants: dict[str, str] = {}

    for raw in canonical_names or ():
        name = (raw or "").strip()
        key = normalize(name)
        if not key:
            continue
        names.setdefault(name, None)
        identity[key] = name
        for variant in generate_variants(name):
            key = normalize(variant)
            if key:
                variants[key] = name

    return ReferenceIndex(
        canonical_names=tuple(names),
        identity=MappingProxyType(identity),
        variants=MappingProxyType(variants),
    )
