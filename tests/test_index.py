"""Tests for the immutable reference index."""

from __future__ import annotations

import dataclasses

import pytest

from ojmatch.entity_resolution.index import build_index

# =========================================================================
# build_index
# =========================================================================


class TestBuildIndex:
    """Tests for index construction."""

    def test_identity_keyed_by_normalized_name(self, reference_index):
        assert (
            reference_index.identity["1 vara do trabalho de sao jose dos campos"]
            == "1ª Vara do Trabalho de São José dos Campos"
        )

    def test_variant_keys(self, reference_index):
        assert reference_index.variants["hortolandia"] == "Vara do Trabalho de Hortolândia"
        assert reference_index.variants["cejus sorocaba"].startswith("CEJUSC SOROCABA")

    def test_canonical_names_in_declaration_order(self, canonical_names, reference_index):
        assert list(reference_index.canonical_names) == canonical_names

    def test_duplicates_tolerated(self):
        index = build_index(["DAM - Jundiaí", "DAM - Jundiaí"])
        assert index.canonical_names == ("DAM - Jundiaí",)
        assert len(index) == 1

    def test_blank_names_skipped(self):
        index = build_index(["", "   ", None, "EXE1 - Campinas"])
        assert index.canonical_names == ("EXE1 - Campinas",)

    def test_last_write_wins_on_collision(self):
        index = build_index(["Vara do Trabalho de Limeira", "VT de Limeira"])
        assert index.variants["vt de limeira"] == "VT de Limeira"

    def test_empty_dataset(self):
        index = build_index([])
        assert len(index) == 0
        assert dict(index.identity) == {}
        assert dict(index.variants) == {}

    def test_none_dataset(self):
        assert len(build_index(None)) == 0

    def test_contains_is_accent_insensitive(self, reference_index):
        assert "dam jundiai" in reference_index
        assert "Vara do Trabalho de Marte" not in reference_index
        assert 42 not in reference_index


# =========================================================================
# Immutability
# =========================================================================


class TestImmutability:
    """The index is a value: rebuilt wholesale, never patched."""

    def test_mappings_are_read_only(self, reference_index):
        with pytest.raises(TypeError):
            reference_index.identity["new"] = "New"  # type: ignore[index]
        with pytest.raises(TypeError):
            reference_index.variants["new"] = "New"  # type: ignore[index]

    def test_fields_are_frozen(self, reference_index):
        with pytest.raises(dataclasses.FrozenInstanceError):
            reference_index.canonical_names = ()  # type: ignore[misc]

    def test_rebuild_leaves_old_index_untouched(self, canonical_names, reference_index):
        rebuilt = build_index(canonical_names[:1])
        assert len(rebuilt) == 1
        assert len(reference_index) == len(canonical_names)
