"""Structural equivalence between two known OJ names.

Decides whether two differently spelled names denote the same unit by
decomposing each into type, sequence number, specialty and locality, then
applying type-specific rules.  The reference index is not consulted and the
answer is a plain boolean.

The relation is symmetric but not transitive: locality matching accepts
substring containment, so "Santos" may match both "Santos" and a longer
locality that does not match the first one's partner.  Callers must not
cluster names by chaining equivalences.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from ojmatch.entity_resolution.canonicalization import (
    convert_spelled_ordinal,
    normalize,
    standardize_prepositions,
)

# ---------------------------------------------------------------------------
# Decomposition
# ---------------------------------------------------------------------------

CODE_TYPES = frozenset({"con", "liq", "exe", "dam"})

# Codes that are always numbered; DAM units carry no number
NUMBERED_CODE_TYPES = frozenset({"con", "liq", "exe"})

SPECIALTIES = ("trabalho", "infancia", "execucao", "civel", "criminal")

_CODE = re.compile(r"\b(con|liq|exe|dam)\s?(\d*)\b")
_CEJUSC = re.compile(r"\bcejusc?\b|\bccp\b|\bcentro judiciario\b")
_UNIT_TYPES = (
    ("vara", re.compile(r"\bvaras?\b")),
    ("juizado", re.compile(r"\bjuizado\b")),
    ("divisao", re.compile(r"\b(?:divisao|divex)\b")),
    ("tribunal", re.compile(r"\btribunal\b")),
    ("foro", re.compile(r"\bforo\b")),
)
_NUMBER = re.compile(r"\b(\d+)\b")
_SPECIALTY_PATTERNS = tuple((s, re.compile(rf"\b{s}\b")) for s in SPECIALTIES)

_MARKERS = re.compile(
    r"\b(?:(?:con|liq|exe|dam)\s?\d*|cejusc?|ccp|centro judiciario"
    r"|varas?|juizado|divisao|divex|tribunal|foro|\d+)\b"
)
_CONNECTOR = " de "


@dataclass(frozen=True)
class UnitNameComponents:
    unit_type: str = ""
    sequence_number: str | None = None
    specialty: str = ""
    locality: str = ""


def prepare(text: str | None) -> str:
    """Normalise *text* and convert spelled ordinals to numerals."""
    return convert_spelled_ordinal(normalize(text))


def _strip_connectors(text: str) -> str:
    return " ".join(word for word in text.split() if word != "de")


def _extract_locality(text: str, specialty_end: int | None) -> str:
    if specialty_end is not None:
        remainder = text[specialty_end:]
        position = remainder.find(_CONNECTOR)
        if position != -1:
            return _strip_connectors(remainder[position + len(_CONNECTOR):])
    else:
        position = text.rfind(_CONNECTOR)
        if position != -1:
            return _strip_connectors(text[position + len(_CONNECTOR):])

    # No usable connector: the locality is what is left after removing markers
    return _strip_connectors(_MARKERS.sub(" ", text))


def decompose(standardized: str) -> UnitNameComponents:
    """Split a standardised name into its structural components."""
    unit_type = ""
    sequence_number: str | None = None

    code = _CODE.search(standardized)
    if code is not None:
        unit_type = code.group(1)
        sequence_number = code.group(2) or None
    elif _CEJUSC.search(standardized):
        unit_type = "cejusc"
    else:
        for name, pattern in _UNIT_TYPES:
            if pattern.search(standardized):
                unit_type = name
                break

    if unit_type not in CODE_TYPES:
        number = _NUMBER.search(standardized)
        if number is not None:
            sequence_number = number.group(1)

    specialty = ""
    specialty_end: int | None = None
    for name, pattern in _SPECIALTY_PATTERNS:
        match = pattern.search(standardized)
        if match is not None:
            specialty = name
            specialty_end = match.end()
            break

    return UnitNameComponents(
        unit_type=unit_type,
        sequence_number=sequence_number,
        specialty=specialty,
        locality=_extract_locality(standardized, specialty_end),
    )


def components_of(name: str | None) -> UnitNameComponents:
    """Decompose a raw name: prepare, standardise prepositions, then split."""
    return decompose(standardize_prepositions(prepare(name)))


# ---------------------------------------------------------------------------
# Component matching
# ---------------------------------------------------------------------------

def localities_match(a: str, b: str) -> bool:
    """Equal, or one contains the other.  Empty localities never match."""
    if not a or not b:
        return False
    return a == b or a in b or b in a


def specialties_compatible(a: str, b: str) -> bool:
    return not a or not b or a == b


def numbers_compatible(a: str | None, b: str | None) -> bool:
    """Equal numbers, both absent, or an unnumbered unit against its "1" form."""
    if a and b:
        return a == b
    if not a and not b:
        return True
    return (a or b) == "1"


# ---------------------------------------------------------------------------
# Rules, evaluated in order; the first one returning a bool decides
# ---------------------------------------------------------------------------

Rule = Callable[[UnitNameComponents, UnitNameComponents], "bool | None"]


def vara_rule(a: UnitNameComponents, b: UnitNameComponents) -> bool | None:
    if not (a.unit_type == b.unit_type == "vara"):
        return None
    return (
        numbers_compatible(a.sequence_number, b.sequence_number)
        and specialties_compatible(a.specialty, b.specialty)
        and localities_match(a.locality, b.locality)
    )


def code_rule(a: UnitNameComponents, b: UnitNameComponents) -> bool | None:
    """CON/LIQ/EXE/DAM: exact numbering, never the unnumbered-equals-1 rule.

    A bare code ("EXE1", "EXE 1") has no locality; two bare codes are decided
    by their numbers alone.  A bare code never matches a code with a city.
    """
    if a.unit_type != b.unit_type or a.unit_type not in CODE_TYPES:
        return None
    if a.unit_type in NUMBERED_CODE_TYPES:
        numbers_match = bool(a.sequence_number) and a.sequence_number == b.sequence_number
    else:
        numbers_match = a.sequence_number == b.sequence_number
    if not a.locality and not b.locality:
        return numbers_match
    return numbers_match and localities_match(a.locality, b.locality)


def cejusc_rule(a: UnitNameComponents, b: UnitNameComponents) -> bool | None:
    if not (a.unit_type == b.unit_type == "cejusc"):
        return None
    return localities_match(a.locality, b.locality)


def general_rule(a: UnitNameComponents, b: UnitNameComponents) -> bool | None:
    return (
        a.unit_type == b.unit_type
        and localities_match(a.locality, b.locality)
        and specialties_compatible(a.specialty, b.specialty)
        and numbers_compatible(a.sequence_number, b.sequence_number)
    )


EQUIVALENCE_RULES: tuple[Rule, ...] = (vara_rule, code_rule, cejusc_rule, general_rule)


def equivalent(name_a: str | None, name_b: str | None) -> bool:
    """Return True when *name_a* and *name_b* denote the same unit.

    Blank names are never equivalent to anything.
    """
    prepared_a = prepare(name_a)
    prepared_b = prepare(name_b)
    if not prepared_a or not prepared_b:
        return False
    if prepared_a == prepared_b:
        return True

    standard_a = standardize_prepositions(prepared_a)
    standard_b = standardize_prepositions(prepared_b)
    if standard_a == standard_b:
        return True

    components_a = decompose(standard_a)
    components_b = decompose(standard_b)
    for rule in EQUIVALENCE_RULES:
        decision = rule(components_a, components_b)
        if decision is not None:
            return decision
    return False
