"""Stateless canonicalization rules for OJ names.

Provides accent/punctuation folding, spelled-ordinal conversion, unit-type
abbreviation expansion and contraction, locality spelling correction and the
loose "Vara" reformatter.  Every function is a pure string transform.
"""

from __future__ import annotations

import re

from unidecode import unidecode

# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

_ORDINAL_MARKER = re.compile(r"(\d+)\s*[ªº°]")
_TYPED_ORDINAL = re.compile(r"\b(\d+)[ao]\b")
_DROPPED_PUNCTUATION = re.compile(r"['`.]")
_OTHER_PUNCTUATION = re.compile(r"[^a-z0-9\s/-]")
_HYPHEN_RUN = re.compile(r"(?:\s*-\s*)+")
_SLASH = re.compile(r"\s*/\s*")
_WHITESPACE = re.compile(r"\s+")

# Codes written as "DAM Jundiai" are stored as "DAM - Jundiai"
_CODE_WITHOUT_HYPHEN = re.compile(r"^(con\d+|exe\d+|liq\d+|dam|divex|ccp) (?!- )(.+)$")


def normalize(text: str | None) -> str:
    """Normalise an OJ name for lookup and comparison.

    Steps:
      1. Fold numeric ordinal markers (``1ª``, ``2º``, ``3°``) to bare numerals.
      2. Transliterate Unicode to ASCII (e.g. ã → a) and lowercase.
      3. Fold typed ordinals (``1a``, ``2o``) to bare numerals.
      4. Drop apostrophes and dots; other punctuation except ``-`` and ``/``
         becomes a space.
      5. Space hyphens as `` - ``, collapse whitespace.
      6. Insert the hyphen between a leading unit code and its city.

    The result is stable under a second application.
    """
    if not text:
        return ""

    text = _ORDINAL_MARKER.sub(r"\1 ", text)
    text = unidecode(text).lower()
    text = _TYPED_ORDINAL.sub(r"\1", text)

    text = _DROPPED_PUNCTUATION.sub("", text)
    text = _OTHER_PUNCTUATION.sub(" ", text)

    text = _HYPHEN_RUN.sub(" - ", text)
    text = _SLASH.sub("/", text)
    text = _WHITESPACE.sub(" ", text).strip(" -")

    return _CODE_WITHOUT_HYPHEN.sub(r"\1 - \2", text)


# ---------------------------------------------------------------------------
# Spelled ordinals
# ---------------------------------------------------------------------------

_SPELLED_ORDINALS: dict[str, str] = {
    "primeira": "1", "primeiro": "1",
    "segunda": "2", "segundo": "2",
    "terceira": "3", "terceiro": "3",
    "quarta": "4", "quarto": "4",
    "quinta": "5", "quinto": "5",
    "sexta": "6", "sexto": "6",
    "setima": "7", "setimo": "7",
    "oitava": "8", "oitavo": "8",
    "nona": "9", "nono": "9",
    "decima": "10", "decimo": "10",
}

_WORD = re.compile(r"\w+")


def convert_spelled_ordinal(text: str | None) -> str:
    """Rewrite Portuguese spelled ordinals ("Primeira", "décima") as numerals."""
    if not text:
        return ""
    return _WORD.sub(
        lambda m: _SPELLED_ORDINALS.get(unidecode(m.group(0)).lower(), m.group(0)),
        text,
    )


# ---------------------------------------------------------------------------
# Unit-type abbreviations
# ---------------------------------------------------------------------------

ABBREVIATIONS: dict[str, str] = {
    "VT": "Vara do Trabalho",
    "DIVEX": "Divisão de Execução",
    "TRT": "Tribunal Regional do Trabalho",
    "CEJUSC": "Centro Judiciário de Métodos Consensuais de Solução de Disputas",
}

# Execution/liquidation codes carry their own numbering and must never be
# folded into a generic abbreviation.
_NUMBERED_CODE = re.compile(r"\b(?:con|exe|liq)\s*\d+\b|\bdam\b", re.IGNORECASE)

_EXPANSIONS = [
    (re.compile(rf"\b{abbr}\b", re.IGNORECASE), full)
    for abbr, full in ABBREVIATIONS.items()
]

# Longest expansion first so nested phrases are contracted as a whole
_CONTRACTIONS = [
    (
        re.compile(
            r"\b(?:" + "|".join(re.escape(f) for f in sorted({full, unidecode(full)})) + r")\b",
            re.IGNORECASE,
        ),
        abbr,
    )
    for abbr, full in sorted(ABBREVIATIONS.items(), key=lambda kv: -len(kv[1]))
]


def has_numbered_code(text: str) -> bool:
    """Return True when *text* carries a CON#/EXE#/LIQ#/DAM code."""
    return bool(_NUMBERED_CODE.search(text or ""))


def expand_abbreviation(text: str) -> str:
    """Expand unit-type abbreviations, e.g. ``VT`` → ``Vara do Trabalho``."""
    if not text or has_numbered_code(text):
        return text or ""
    for pattern, full in _EXPANSIONS:
        text = pattern.sub(full, text)
    return text


def contract_abbreviation(text: str) -> str:
    """Contract unit-type phrases, e.g. ``Vara do Trabalho`` → ``VT``."""
    if not text or has_numbered_code(text):
        return text or ""
    for pattern, abbr in _CONTRACTIONS:
        text = pattern.sub(abbr, text)
    return text


# ---------------------------------------------------------------------------
# Localities
# ---------------------------------------------------------------------------

_LOCALITY_CORRECTIONS: dict[str, str] = {
    normalize(variant): canonical
    for variant, canonical in [
        ("santa barbara d'oeste", "Santa Bárbara d'Oeste"),
        ("santa barbara doeste", "Santa Bárbara d'Oeste"),
        ("santa barbara do oeste", "Santa Bárbara d'Oeste"),
        ("pirasununga", "Pirassununga"),
        ("pirassunga", "Pirassununga"),
        ("bebedoro", "Bebedouro"),
        ("jaboticaba", "Jaboticabal"),
        ("mococa", "Mococa"),
        ("sao carlos", "São Carlos"),
        ("s. carlos", "São Carlos"),
        ("sao jose rio pardo", "São José do Rio Pardo"),
        ("sao jose do rio pardo", "São José do Rio Pardo"),
        ("s. j. rio pardo", "São José do Rio Pardo"),
        ("sao jose do rio preto", "São José do Rio Preto"),
        ("s. jose do rio preto", "São José do Rio Preto"),
        ("sao jose dos campos", "São José dos Campos"),
        ("s. j. dos campos", "São José dos Campos"),
        ("s. jose dos campos", "São José dos Campos"),
        ("aracatuba", "Araçatuba"),
        ("ribeirao preto", "Ribeirão Preto"),
        ("rib. preto", "Ribeirão Preto"),
        ("pres. prudente", "Presidente Prudente"),
        ("lencois paulista", "Lençóis Paulista"),
        ("lencois", "Lençóis Paulista"),
        ("mogi guacu", "Mogi Guaçu"),
        ("tatui", "Tatuí"),
        ("jundiai", "Jundiaí"),
        ("avare", "Avaré"),
        ("taubate", "Taubaté"),
        ("hortolandia", "Hortolândia"),
        ("itapolis", "Itápolis"),
        ("jau", "Jaú"),
        ("jose bonifacio", "José Bonifácio"),
        ("matao", "Matão"),
        ("marilia", "Marília"),
        ("sao bernardo", "São Bernardo do Campo"),
        ("s. bernardo", "São Bernardo do Campo"),
        ("santo andre", "Santo André"),
        ("sao caetano", "São Caetano do Sul"),
        ("maua", "Mauá"),
        ("poa", "Poá"),
        ("guaruja", "Guarujá"),
        ("cubatao", "Cubatão"),
        ("sao vicente", "São Vicente"),
        ("sumare", "Sumaré"),
        ("sao joao da boa vista", "São João da Boa Vista"),
    ]
}

LOWERCASE_PREPOSITIONS = frozenset({"de", "do", "da", "dos", "das"})


def canonicalize_locality(city: str | None) -> str:
    """Return the canonical spelling of a city name.

    Known misspellings and accent-less forms come from a fixed table;
    anything else is title-cased with Portuguese prepositions kept in
    lower case.
    """
    if not city or not city.strip():
        return ""

    corrected = _LOCALITY_CORRECTIONS.get(normalize(city))
    if corrected is not None:
        return corrected

    words = city.strip().lower().split()
    return " ".join(
        word if index > 0 and word in LOWERCASE_PREPOSITIONS else word[:1].upper() + word[1:]
        for index, word in enumerate(words)
    )


# ---------------------------------------------------------------------------
# Preposition standardisation (comparison only)
# ---------------------------------------------------------------------------

_CONTRACTED_PREPOSITION = re.compile(r"\b(?:da|do|dos|das)\b")
_CONJOINED_PREPOSITION = re.compile(r"\be de\b")
_HYPHEN = re.compile(r"\s*-\s*")


def standardize_prepositions(text: str) -> str:
    """Fold ``da/do/dos/das`` into ``de`` and ``e da``/``e de`` into ``e``.

    Expects already-normalised text.  Hyphens become plain spaces.
    """
    text = _CONTRACTED_PREPOSITION.sub("de", text)
    text = _CONJOINED_PREPOSITION.sub("e", text)
    text = _HYPHEN.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


# ---------------------------------------------------------------------------
# Loose "Vara" spellings
# ---------------------------------------------------------------------------

_LOOSE_VARA = re.compile(
    r"^(?:(?P<number>\d+)\s*[ªº°ao]?\.?\s+)?"
    r"(?:vara(?:\s+(?:d[oa]\s+)?trabalho)?|v\.?\s*t\.?)\s+"
    r"(?:d[eoa]s?\s+|-\s*)?"
    r"(?P<city>\S.*)$",
    re.IGNORECASE,
)

# A remainder naming another jurisdiction is not a labour-court locality
_FOREIGN_SPECIALTIES = frozenset({
    "trabalho", "civel", "criminal", "infancia", "execucao",
    "familia", "fazenda", "federal", "juizado",
})


def reformat_unit_name(text: str | None) -> str:
    """Rewrite a loosely typed labour-court name into the official pattern.

    ``"1 Vara Pirassununga"``, ``"1ª VT Pirassununga"``, ``"V.T. Pirassununga"``,
    ``"Primeira Vara Pirassununga"`` and the external systems' hyphenated
    ``"1ª Vara do Trabalho - Pirassununga"`` all become
    ``"[Nª ]Vara do Trabalho de Pirassununga"``.  Returns the trimmed input
    when no pattern applies.
    """
    if not text:
        return ""
    original = text.strip()

    match = _LOOSE_VARA.match(convert_spelled_ordinal(original))
    if match is None:
        return original

    city = match.group("city").strip().lstrip("-").strip()
    if not city or set(normalize(city).split()) & _FOREIGN_SPECIALTIES:
        return original

    number = match.group("number")
    prefix = f"{int(number)}ª " if number else ""
    return f"{prefix}Vara do Trabalho de {canonicalize_locality(city)}"
