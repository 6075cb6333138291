"""Variant generation for canonical OJ names.

Each canonical name fans out into the alternate spellings operators are known
to type: accent-free, without the generic "Vara do Trabalho de" prefix, CEJUSC
short forms, and abbreviated/expanded unit types.  The reference index maps
every variant back to its canonical name.
"""

from __future__ import annotations

import re

from unidecode import unidecode

from ojmatch.entity_resolution.canonicalization import (
    canonicalize_locality,
    contract_abbreviation,
    expand_abbreviation,
)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_GENERIC_PREFIX = re.compile(
    r"^(?:vara do trabalho de|vt de|vara de|cejusc)\s+",
    re.IGNORECASE,
)

_PUNCTUATION = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")

_CEJUSC_MARKER = re.compile(r"\bcejusc\b|\bcentro judici[aá]rio\b", re.IGNORECASE)

# Locality-capturing patterns, tried in order
_CEJUSC_LOCALITY = [
    # "CEJUSC SOROCABA - JT Centro Judiciário ...", "CEJUSC - Sorocaba"
    re.compile(r"^cejusc\s*(?:-\s*)?(?P<city>[^-]+?)\s*(?:-.*)?$", re.IGNORECASE),
    # "Centro Judiciário de Solução de Conflitos - Sorocaba"
    re.compile(r"^centro judici[aá]rio\b.*?-\s*(?P<city>[^-]+?)\s*$", re.IGNORECASE),
]

_LEADING_PREPOSITION = re.compile(r"^d[eoa]s?\s+", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Individual transforms
# ---------------------------------------------------------------------------

def strip_accents_and_punctuation(name: str) -> str:
    """Transliterate to ASCII and drop punctuation other than hyphens (case kept)."""
    text = _PUNCTUATION.sub("", unidecode(name))
    return _WHITESPACE.sub(" ", text).strip()


def remove_generic_prefix(name: str) -> str:
    """Drop a leading generic unit prefix, leaving the locality part."""
    return _GENERIC_PREFIX.sub("", name, count=1).strip()


def cejusc_short_forms(name: str) -> list[str]:
    """Return the ``CEJUSC``/``CEJUS`` short forms for a mediation-centre name.

    Names that are not CEJUSC units, or whose locality cannot be captured,
    yield an empty list.
    """
    if not _CEJUSC_MARKER.search(name):
        return []

    for pattern in _CEJUSC_LOCALITY:
        match = pattern.match(name.strip())
        if match is None:
            continue
        city = canonicalize_locality(_LEADING_PREPOSITION.sub("", match.group("city").strip()))
        if not city:
            continue
        return [
            f"CEJUSC - {city}",
            f"CEJUSC {city}",
            f"CEJUS - {city}",
            f"CEJUS {city}",
        ]
    return []


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

def generate_variants(name: str) -> list[str]:
    """Produce the candidate spellings of one canonical name.

    The original name always comes first; the remaining forms are unioned
    and de-duplicated in generation order.  Blank input yields ``[]``.
    """
    name = (name or "").strip()
    if not name:
        return []

    stripped = strip_accents_and_punctuation(name)
    candidates = [
        name,
        stripped,
        remove_generic_prefix(name),
        remove_generic_prefix(stripped),
        *cejusc_short_forms(name),
        expand_abbreviation(name),
        contract_abbreviation(name),
    ]

    variants: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        if candidate and candidate not in seen:
            seen.add(candidate)
            variants.append(candidate)
    return variants
