"""Tests for the OJ name resolver."""

from __future__ import annotations

import pytest
from conftest import CEJUSC_SOROCABA

from ojmatch.config import Settings
from ojmatch.entity_resolution.index import build_index
from ojmatch.entity_resolution.resolver import (
    keyword_tokens,
    resolve,
    resolve_name,
)
from ojmatch.entity_resolution.variants import generate_variants

# =========================================================================
# Strategy order
# =========================================================================


class TestStrategies:
    """Each strategy is reached when the earlier ones miss."""

    def test_identity(self, reference_index, settings):
        result = resolve_name("1a Vara do Trabalho de Campinas", reference_index, settings)
        assert result.resolved == "1ª Vara do Trabalho de Campinas"
        assert result.method == "identity"

    def test_identity_code_without_hyphen(self, reference_index, settings):
        result = resolve_name("DAM Jundiai", reference_index, settings)
        assert result.resolved == "DAM - Jundiaí"
        assert result.method == "identity"

    def test_variant(self, reference_index, settings):
        result = resolve_name("CEJUS Sorocaba", reference_index, settings)
        assert result.resolved == CEJUSC_SOROCABA
        assert result.method == "variant"

    def test_variant_bare_city(self, reference_index, settings):
        assert resolve("hortolandia", reference_index, settings) == "Vara do Trabalho de Hortolândia"

    def test_reformatted(self, reference_index, settings):
        result = resolve_name("1 Vara Campinas", reference_index, settings)
        assert result.resolved == "1ª Vara do Trabalho de Campinas"
        assert result.method == "reformatted"

    def test_reformatted_spelled_ordinal(self, reference_index, settings):
        result = resolve_name("Primeira Vara São José dos Campos", reference_index, settings)
        assert result.resolved == "1ª Vara do Trabalho de São José dos Campos"
        assert result.method == "reformatted"

    def test_partial(self, reference_index, settings):
        result = resolve_name("Juizado Especial da Infância", reference_index, settings)
        assert result.resolved == "Juizado Especial da Infância e Adolescência de Limeira"
        assert result.method == "partial"

    def test_keyword(self, reference_index, settings):
        result = resolve_name("Infancia Adolescencia Limeira", reference_index, settings)
        assert result.resolved == "Juizado Especial da Infância e Adolescência de Limeira"
        assert result.method == "keyword"

    def test_unresolved_echoes_trimmed_input(self, reference_index, settings):
        result = resolve_name("  Tribunal de Justiça de Marte  ", reference_index, settings)
        assert result.resolved == "Tribunal de Justiça de Marte"
        assert result.method is None
        assert not result.is_resolved


# =========================================================================
# Configurable heuristics
# =========================================================================


class TestSettings:
    """Thresholds and toggles come from Settings."""

    def test_partial_disabled_falls_through_to_keywords(self, reference_index):
        settings = Settings(_env_file=None, partial_match_enabled=False)
        result = resolve_name("Juizado Especial da Infância", reference_index, settings)
        assert result.method == "keyword"

    def test_unreachable_threshold_leaves_input_unresolved(self, reference_index):
        settings = Settings(
            _env_file=None,
            partial_match_enabled=False,
            keyword_overlap_threshold=1.01,
        )
        result = resolve_name("Juizado Especial da Infância", reference_index, settings)
        assert not result.is_resolved

    def test_keyword_tokens_respect_min_length(self):
        assert keyword_tokens("1 vara de campinas", 3) == ["vara", "campinas"]
        assert keyword_tokens("1 vara de campinas", 2) == ["vara", "de", "campinas"]


# =========================================================================
# Deterministic partial matching
# =========================================================================


class TestPartialOrder:
    """Partial matching scans canonical names in declaration order."""

    def test_first_declared_wins(self, settings):
        names = ["Vara do Trabalho de Limeira", "2ª Vara do Trabalho de Limeira"]
        assert resolve("trabalho de limeira", build_index(names), settings) == names[0]

    def test_reversed_declaration_reverses_result(self, settings):
        names = ["2ª Vara do Trabalho de Limeira", "Vara do Trabalho de Limeira"]
        assert resolve("trabalho de limeira", build_index(names), settings) == names[0]


# =========================================================================
# Properties
# =========================================================================


class TestProperties:
    """Behavioural guarantees of the resolver."""

    def test_idempotent_on_canonical_names(self, canonical_names, reference_index, settings):
        for name in canonical_names:
            once = resolve(name, reference_index, settings)
            assert once == name
            assert resolve(once, reference_index, settings) == once

    def test_every_variant_resolves_to_its_canonical_name(
        self, canonical_names, reference_index, settings
    ):
        for name in canonical_names:
            for variant in generate_variants(name):
                assert resolve(variant, reference_index, settings) == name, variant

    def test_empty_dataset_is_identity(self, settings):
        index = build_index([])
        for raw in ["  Vara do Trabalho de Campinas ", "CEJUS Sorocaba", "x"]:
            result = resolve_name(raw, index, settings)
            assert result.resolved == raw.strip()
            assert not result.is_resolved

    def test_missing_index_is_identity(self, settings):
        assert resolve(" EXE1 - Campinas ", None, settings) == "EXE1 - Campinas"

    def test_blank_input(self, reference_index, settings):
        assert resolve(None, reference_index, settings) == ""
        assert resolve("   ", reference_index, settings) == ""
        assert not resolve_name("", reference_index, settings).is_resolved

    def test_rebuild_drops_stale_variants(self, canonical_names, settings):
        before = build_index(canonical_names)
        assert resolve("CEJUS Sorocaba", before, settings) == CEJUSC_SOROCABA

        after = build_index([n for n in canonical_names if n != CEJUSC_SOROCABA])
        assert resolve("CEJUS Sorocaba", after, settings) == "CEJUS Sorocaba"
        assert "cejus sorocaba" not in after.variants


# =========================================================================
# External-system spellings
# =========================================================================


class TestHyphenatedSpellings:
    """External lists write "<N>ª Vara do Trabalho - <City>" and similar."""

    def test_numbered_vara_keeps_its_number(self, reference_index, settings):
        result = resolve_name("2ª Vara do Trabalho - Campinas", reference_index, settings)
        assert result.resolved == "2ª Vara do Trabalho de Campinas"
        assert result.method == "reformatted"

    def test_first_vara(self, reference_index, settings):
        assert (
            resolve("1ª Vara do Trabalho - Campinas", reference_index, settings)
            == "1ª Vara do Trabalho de Campinas"
        )

    def test_unnumbered_vara(self, reference_index, settings):
        assert (
            resolve("Vara do Trabalho - Hortolândia", reference_index, settings)
            == "Vara do Trabalho de Hortolândia"
        )

    def test_expanded_divex(self, reference_index, settings):
        result = resolve_name("Divisão de Execução - Presidente Prudente", reference_index, settings)
        assert result.resolved == "DIVEX - Presidente Prudente"
        assert result.method == "variant"


# =========================================================================
# City and number
# =========================================================================


class TestCityNumber:
    """Units of the input's city, chosen by sequence number."""

    def test_misspelled_city_with_code(self, reference_index, settings):
        result = resolve_name("EXE1 - Campinass", reference_index, settings)
        assert result.resolved == "EXE1 - Campinas"
        assert result.method == "city_number"
        assert result.confidence == 0.95

    def test_second_code_of_the_city(self, reference_index, settings):
        assert resolve("EXE2 Campinass", reference_index, settings) == "EXE2 - Campinas"

    def test_unnumbered_input_takes_the_first_vara(self, reference_index, settings):
        result = resolve_name("Vara do Trabalho Campinas", reference_index, settings)
        assert result.resolved == "1ª Vara do Trabalho de Campinas"
        assert result.method == "city_number"
        assert result.confidence == 0.9

    def test_disabled_falls_through_to_partial(self, reference_index):
        settings = Settings(_env_file=None, city_number_match_enabled=False)
        result = resolve_name("EXE1 - Campinass", reference_index, settings)
        assert result.resolved == "EXE1 - Campinas"
        assert result.method == "partial"


# =========================================================================
# Similarity and confidence
# =========================================================================


class TestSimilarity:
    """Levenshtein fallback and reported confidence."""

    def test_misspelled_name(self, reference_index, settings):
        result = resolve_name("Vara do Trabalho de Hortolandya", reference_index, settings)
        assert result.resolved == "Vara do Trabalho de Hortolândia"
        assert result.method == "similarity"
        assert result.confidence == pytest.approx(1 - 1 / 31)

    def test_threshold_from_settings(self, reference_index):
        settings = Settings(_env_file=None, similarity_threshold=0.99)
        result = resolve_name("Vara do Trabalho de Hortolandya", reference_index, settings)
        assert not result.is_resolved

    def test_exact_lookups_are_fully_confident(self, reference_index, settings):
        assert resolve_name("EXE1 - Campinas", reference_index, settings).confidence == 1.0

    def test_keyword_confidence_is_overlap_share(self, reference_index, settings):
        result = resolve_name("Infancia Adolescencia Limeira", reference_index, settings)
        assert result.confidence == 1.0

    def test_unresolved_has_no_confidence(self, reference_index, settings):
        assert resolve_name("Tribunal de Justiça de Marte", reference_index, settings).confidence == 0.0


class TestNumberSafety:
    """Loose strategies never trade one sequence number for another."""

    def test_other_number_of_same_city_is_not_returned(self, settings):
        index = build_index(["1ª Vara do Trabalho de Sorocaba"])
        for raw in ["2ª Vara do Trabalho Sorocaba", "2ª Vara do Trabalho de Sorocabba"]:
            result = resolve_name(raw, index, settings)
            assert not result.is_resolved, raw
