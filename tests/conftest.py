"""Shared fixtures for OJ entity resolution tests."""

from __future__ import annotations

import pytest

from ojmatch.config import Settings
from ojmatch.entity_resolution.index import ReferenceIndex, build_index

CEJUSC_SOROCABA = (
    "CEJUSC SOROCABA - JT Centro Judiciário de Métodos Consensuais "
    "de Solução de Disputas da Justiça do Trabalho"
)

# Declaration order matters for partial and keyword matching
FIXTURE_NAMES = [
    "1ª Vara do Trabalho de Campinas",
    "2ª Vara do Trabalho de Campinas",
    "Vara do Trabalho de Hortolândia",
    "Vara do Trabalho de Santa Bárbara d'Oeste",
    "1ª Vara do Trabalho de São José dos Campos",
    "Juizado Especial da Infância e Adolescência de Limeira",
    CEJUSC_SOROCABA,
    "DAM - Jundiaí",
    "EXE1 - Campinas",
    "EXE2 - Campinas",
    "LIQ1 - Campinas",
    "DIVEX - Presidente Prudente",
]


@pytest.fixture()
def canonical_names() -> list[str]:
    """A small slice of the regional court's reference dataset."""
    return list(FIXTURE_NAMES)


@pytest.fixture()
def reference_index(canonical_names: list[str]) -> ReferenceIndex:
    return build_index(canonical_names)


@pytest.fixture()
def settings() -> Settings:
    """Default heuristics, isolated from any OJ_* environment variables."""
    return Settings(
        _env_file=None,
        reference_dataset_path="",
        keyword_overlap_threshold=0.7,
        keyword_min_token_length=3,
        partial_match_enabled=True,
        city_number_match_enabled=True,
        similarity_threshold=0.8,
    )
