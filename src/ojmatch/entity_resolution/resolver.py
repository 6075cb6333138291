"""OJ name resolver.

Maps one free-text name to a canonical name from the reference index.  The
strategies below are tried in order and the first hit wins:

  1. Identity lookup of the normalised input.
  2. Variant lookup of the normalised input.
  3. Identity/variant lookup of the input rewritten into the official
     "Vara do Trabalho" pattern.
  4. City and number: the canonical names of the input's city and unit type,
     preferring the one with the input's sequence number.
  5. Partial match: first canonical name (declaration order) where either
     normalised string contains the other.
  6. Keyword overlap: first canonical name sharing enough input keywords.
  7. Similarity: the canonical name closest by normalised Levenshtein
     similarity, above ``settings.similarity_threshold``.

Keyword and similarity matching never cross sequence numbers: when the input
carries numbers, a candidate must carry the same ones.

"No match" is a normal outcome: the trimmed input is echoed back and the
:class:`Resolution` carries no method and zero confidence.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from rapidfuzz.distance import Levenshtein

from ojmatch.config import Settings, get_settings
from ojmatch.entity_resolution.canonicalization import normalize, reformat_unit_name
from ojmatch.entity_resolution.equivalence import components_of, equivalent
from ojmatch.entity_resolution.index import ReferenceIndex, build_index


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one name."""

    original: str
    resolved: str
    method: str | None = None  # identity, variant, reformatted, city_number, ...
    confidence: float = 0.0

    @property
    def is_resolved(self) -> bool:
        return self.method is not None


# (canonical name, confidence)
Match = tuple[str, float]

# (trimmed input, normalised input, index, settings) -> Match or None
Strategy = Callable[[str, str, ReferenceIndex, Settings], "Match | None"]

_TOKEN = re.compile(r"[a-z0-9]+")
_DIGITS = re.compile(r"\d+")


def _numbers(normalized: str) -> list[str]:
    return [str(int(n)) for n in _DIGITS.findall(normalized)]


def _same_numbers(normalized: str, candidate: str) -> bool:
    """True unless the input carries numbers the candidate does not repeat."""
    wanted = _numbers(normalized)
    return not wanted or wanted == _numbers(candidate)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def match_identity(
    raw: str, normalized: str, index: ReferenceIndex, settings: Settings
) -> Match | None:
    name = index.identity.get(normalized)
    return (name, 1.0) if name is not None else None


def match_variant(
    raw: str, normalized: str, index: ReferenceIndex, settings: Settings
) -> Match | None:
    name = index.variants.get(normalized)
    return (name, 1.0) if name is not None else None


def match_reformatted(
    raw: str, normalized: str, index: ReferenceIndex, settings: Settings
) -> Match | None:
    reformatted = normalize(reformat_unit_name(raw))
    if reformatted == normalized:
        return None
    name = index.identity.get(reformatted) or index.variants.get(reformatted)
    return (name, 0.95) if name is not None else None


def match_city_number(
    raw: str, normalized: str, index: ReferenceIndex, settings: Settings
) -> Match | None:
    """Pick among the structurally equivalent units of the input's city.

    Only inputs naming both a unit type and a locality take part.  A
    candidate carrying the input's own sequence number wins (0.95); a lone
    candidate is accepted as is (0.9); otherwise the first declared
    candidate is returned (0.7).
    """
    if not settings.city_number_match_enabled:
        return None
    wanted = components_of(raw)
    if not wanted.unit_type or not wanted.locality:
        return None

    candidates = [name for name in index.canonical_names if equivalent(raw, name)]
    if not candidates:
        return None

    for name in candidates:
        if components_of(name).sequence_number == wanted.sequence_number:
            return name, 0.95
    if len(candidates) == 1:
        return candidates[0], 0.9
    return candidates[0], 0.7


def match_partial(
    raw: str, normalized: str, index: ReferenceIndex, settings: Settings
) -> Match | None:
    """First identity key, in declaration order, that contains or is contained in the input."""
    if not settings.partial_match_enabled:
        return None
    for key, name in index.identity.items():
        if normalized in key or key in normalized:
            return name, 0.8
    return None


def keyword_tokens(normalized: str, min_length: int) -> list[str]:
    """Alphanumeric tokens of at least *min_length* characters."""
    return [t for t in _TOKEN.findall(normalized) if len(t) >= min_length]


def match_keywords(
    raw: str, normalized: str, index: ReferenceIndex, settings: Settings
) -> Match | None:
    """First canonical name covering enough of the input's keywords.

    An input token counts when it and some candidate token are substrings
    of one another.  The candidate is accepted when the counted share of
    input tokens reaches ``settings.keyword_overlap_threshold``; that share
    is the confidence.
    """
    min_length = settings.keyword_min_token_length
    tokens = keyword_tokens(normalized, min_length)
    if not tokens:
        return None

    for name in index.canonical_names:
        key = normalize(name)
        candidate = keyword_tokens(key, min_length)
        if not candidate or not _same_numbers(normalized, key):
            continue
        overlap = sum(1 for t in tokens if any(t in c or c in t for c in candidate))
        share = overlap / len(tokens)
        if share >= settings.keyword_overlap_threshold:
            return name, share
    return None


def match_similarity(
    raw: str, normalized: str, index: ReferenceIndex, settings: Settings
) -> Match | None:
    """Closest identity key by ``1 - distance / max(len)``; ties keep declaration order."""
    best: Match | None = None
    for key, name in index.identity.items():
        if not _same_numbers(normalized, key):
            continue
        score = Levenshtein.normalized_similarity(
            normalized, key, score_cutoff=settings.similarity_threshold
        )
        if score and (best is None or score > best[1]):
            best = (name, score)
    return best


STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("identity", match_identity),
    ("variant", match_variant),
    ("reformatted", match_reformatted),
    ("city_number", match_city_number),
    ("partial", match_partial),
    ("keyword", match_keywords),
    ("similarity", match_similarity),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def resolve_name(
    raw_input: str | None,
    index: ReferenceIndex | None,
    settings: Settings | None = None,
) -> Resolution:
    """Resolve *raw_input* against *index*, reporting which strategy matched.

    Never raises.  Blank input resolves to ``""``; an empty or missing index
    echoes the trimmed input unresolved.
    """
    original = (raw_input or "").strip()
    normalized = normalize(original)
    if not normalized:
        return Resolution(original=original, resolved=original)

    if index is None:
        index = build_index(())
    if settings is None:
        settings = get_settings()

    for method, strategy in STRATEGIES:
        match = strategy(original, normalized, index, settings)
        if match is not None:
            canonical, confidence = match
            return Resolution(
                original=original,
                resolved=canonical,
                method=method,
                confidence=confidence,
            )

    return Resolution(original=original, resolved=original)


def resolve(
    raw_input: str | None,
    index: ReferenceIndex | None,
    settings: Settings | None = None,
) -> str:
    """Return the canonical name for *raw_input*, or the trimmed input if unresolved."""
    return resolve_name(raw_input, index, settings).resolved
