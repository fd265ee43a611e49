"""Tests for region resolution and generation alias handling.

The resolver applies a fixed precedence chain; these tests pin down each step
and the cases where an earlier step must win over a later one.
"""

from __future__ import annotations

import dataclasses
from types import MappingProxyType

import pytest

from pokedoku import regions
from pokedoku.tables import DEFAULT_TABLES


@pytest.mark.parametrize(
    ("key", "generation", "region"),
    [
        ("pikachu-alola", "generation-i", "Alola"),
        ("raichu-alola", "generation-i", "Alola"),
        ("meowth-galar", "generation-i", "Galar"),
        ("arcanine-hisui", "generation-i", "Hisui"),
        ("wooper-paldea", "generation-ii", "Paldea"),
        ("aerodactyl-mega", "generation-i", "Kanto"),
        ("tyrunt", None, "Kalos"),
        ("mewtwo", "generation-i", "Kanto"),
        ("kyogre-primal", None, "Hoenn"),
        ("great-tusk", None, "Paldea"),
        ("nihilego", None, "Alola"),
        ("charizard-mega-x", "generation-i", "Kanto"),
        ("lucario", "generation-iv", "Sinnoh"),
        ("lycanroc-dusk", None, "Alola"),
        ("bulbasaur", "generation-i", "Kanto"),
        ("sprigatito", "generation-ix", "Paldea"),
    ],
)
def test_resolve_region_precedence(key: str, generation, region: str) -> None:
    """Resolve regions through the documented precedence chain."""
    assert regions.resolve_region(key, generation) == region


def test_regional_suffix_beats_generation() -> None:
    """A regional form wins over the species' debut generation."""
    assert regions.resolve_region("ninetales-alola", "generation-i") == "Alola"


def test_battle_form_uses_base_generation() -> None:
    """Battle forms resolve through their base species."""
    assert regions.resolve_region("gengar-mega", "generation-i") == "Kanto"


def test_raw_names_are_normalized_first() -> None:
    """Raw display names resolve the same way as keys."""
    assert regions.resolve_region("Pikachu Alola") == "Alola"
    assert regions.resolve_region("Ho-Oh") == "Johto"


@pytest.mark.parametrize("generation", [None, "", "generation-x", "banana"])
def test_unknown_generation_falls_back_to_unknown(generation) -> None:
    """Species with no rule and no usable generation resolve to Unknown."""
    assert regions.resolve_region("rattata", generation) == "Unknown"


def test_empty_key_is_unknown() -> None:
    """Unusable names never raise."""
    assert regions.resolve_region("") == "Unknown"
    assert regions.resolve_region(None) == "Unknown"


@pytest.mark.parametrize(
    ("alias", "number"),
    [("generation-iii", 3), ("gen-3", 3), ("gen3", 3), ("3", 3), ("Generation IX", 9), ("generation-x", None), (None, None)],
)
def test_generation_number_aliases(alias, number) -> None:
    """Accept slugs, gen-N forms and bare numbers."""
    assert regions.generation_number(alias) == number


def test_generation_slug_and_region() -> None:
    """Canonicalize generation aliases to slugs and regions."""
    assert regions.generation_slug("4") == "generation-iv"
    assert regions.generation_to_region("gen-4") == "Sinnoh"
    assert regions.generation_to_region(None) == "Unknown"


@pytest.mark.parametrize(
    ("value", "region"),
    [("kanto", "Kanto"), ("Hisui", "Hisui"), ("generation-vii", "Alola"), ("1", "Kanto"), ("Atlantis", None), ("", None)],
)
def test_canonical_region(value: str, region) -> None:
    """Resolve region names and generation aliases to canonical names."""
    assert regions.canonical_region(value) == region


@pytest.mark.parametrize(
    ("key", "rule"),
    [
        ("raichu-alola", "alola-form"),
        ("omanyte", "fossil-table"),
        ("mewtwo", "legendary-table"),
        ("iron-moth", "paradox-list"),
        ("nihilego", "ultra-beast-list"),
        ("gengar-mega", "battle-form-base"),
        ("lucario", "species-override"),
        ("rattata", "generation-mapping"),
    ],
)
def test_region_detected_via(key: str, rule: str) -> None:
    """Report which rule decides the region."""
    assert regions.region_detected_via(key) == rule


def test_injected_tables_replace_defaults() -> None:
    """Callers can supply their own lookup tables."""
    tables = dataclasses.replace(
        DEFAULT_TABLES,
        region_overrides=MappingProxyType({"pikachu": "Johto"}),
    )
    assert regions.resolve_region("pikachu", "generation-i", tables) == "Johto"
    assert regions.resolve_region("pikachu", "generation-i") == "Kanto"
