"""Bulk normalization of newline-separated OJ lists.

Operators paste one unit per line, optionally followed by an opaque
``" - <role>"`` suffix (``"Vara do Trabalho de Limeira - Assessor"``).  The
role is never interpreted: it is split off, the name is resolved, and the
role is reattached verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from ojmatch.config import Settings, get_settings
from ojmatch.entity_resolution.equivalence import components_of, localities_match
from ojmatch.entity_resolution.index import ReferenceIndex
from ojmatch.entity_resolution.resolver import Resolution, resolve_name

logger = structlog.get_logger(__name__)

ROLE_SEPARATOR = " - "

# Lookups precise enough to trust a whole line containing " - " as a name
_EXACT_METHODS = frozenset({"identity", "variant"})

# Lookups precise enough to trust a head once its role is split off
_HEAD_METHODS = frozenset({"identity", "variant", "reformatted"})


@dataclass(frozen=True)
class NormalizedLine:
    original: str
    name: str
    role: str | None
    resolution: Resolution

    @property
    def output(self) -> str:
        if self.role is None:
            return self.resolution.resolved
        return f"{self.resolution.resolved}{ROLE_SEPARATOR}{self.role}"


@dataclass(frozen=True)
class BulkNormalizationResult:
    lines: list[NormalizedLine] = field(default_factory=list)

    @property
    def normalized(self) -> list[str]:
        return [line.output for line in self.lines]

    @property
    def unresolved(self) -> list[str]:
        return [line.name for line in self.lines if not line.resolution.is_resolved]


def split_role_suffix(line: str) -> tuple[str, str | None]:
    """Split ``"<name> - <role>"`` at the last separator.

    Returns ``(line, None)`` when there is no separator or either side is
    blank.
    """
    line = line.strip()
    head, sep, tail = line.rpartition(ROLE_SEPARATOR)
    if not sep or not head.strip() or not tail.strip():
        return line, None
    return head.strip(), tail.strip()


def normalize_line(line: str, index: ReferenceIndex, settings: Settings) -> NormalizedLine:
    """Resolve one pasted line, preserving any role suffix.

    Unit names themselves may contain ``" - "`` (``"EXE1 - Campinas"``,
    ``"1ª Vara do Trabalho - Campinas"``), so a line that resolves whole
    through an exact lookup is kept whole.  The tail after the last
    separator is taken as a role only when the head resolves through a
    precise lookup and the tail is not the resolved unit's own locality.
    Anything else goes through the full resolver as one name.
    """
    line = line.strip()
    whole = resolve_name(line, index, settings)
    if whole.method in _EXACT_METHODS:
        return NormalizedLine(original=line, name=line, role=None, resolution=whole)

    head, role = split_role_suffix(line)
    if role is not None:
        head_resolution = resolve_name(head, index, settings)
        if head_resolution.method in _HEAD_METHODS and not _is_locality_of(
            role, head_resolution.resolved
        ):
            return NormalizedLine(
                original=line, name=head, role=role, resolution=head_resolution
            )

    return NormalizedLine(original=line, name=line, role=None, resolution=whole)


def _is_locality_of(tail: str, canonical: str) -> bool:
    return localities_match(components_of(tail).locality, components_of(canonical).locality)


def normalize_name_list(
    text: str | None,
    index: ReferenceIndex,
    settings: Settings | None = None,
) -> BulkNormalizationResult:
    """Normalize every non-blank line of *text* against *index*."""
    if settings is None:
        settings = get_settings()

    lines = [
        normalize_line(line, index, settings)
        for line in (text or "").splitlines()
        if line.strip()
    ]
    return BulkNormalizationResult(lines=lines)


def run_bulk_normalization(
    text: str | None,
    index: ReferenceIndex,
    settings: Settings | None = None,
) -> dict[str, int]:
    """Normalize a pasted list and log the outcome.

    Returns
    -------
    dict
        ``{"total": int, "resolved": int, "unresolved": int}``
    """
    result = normalize_name_list(text, index, settings)
    unresolved = result.unresolved

    for name in unresolved:
        logger.warning("oj_name_unresolved", name=name)

    stats = {
        "total": len(result.lines),
        "resolved": len(result.lines) - len(unresolved),
        "unresolved": len(unresolved),
    }
    logger.info("bulk_normalization_complete", **stats)
    return stats
