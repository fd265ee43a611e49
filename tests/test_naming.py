"""Tests for name normalization and the naming helpers built on it.

Covers canonical key generation, base-form stripping, sprite naming, display
names and the loose name variants used for evolution-chain matching.
"""

from __future__ import annotations

import re

import pytest

from pokedoku import naming


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Pikachu", "pikachu"),
        ("  Bulbasaur  ", "bulbasaur"),
        ("Mr. Mime", "mr-mime"),
        ("Farfetch'd", "farfetchd"),
        ("Farfetch’d", "farfetchd"),
        ("Nidoran♀", "nidoran-f"),
        ("Nidoran♂", "nidoran-m"),
        ("Flabébé", "flabebe"),
        ("Type: Null", "type-null"),
        ("Mime Jr.", "mime-jr"),
        ("Tapu Koko", "tapu-koko"),
        ("Ho-Oh", "ho-oh"),
        ("Charizard--Mega---X", "charizard-mega-x"),
        ("-pikachu-", "pikachu"),
    ],
)
def test_normalize_produces_canonical_keys(raw: str, expected: str) -> None:
    """Map player and API spellings onto the same key."""
    assert naming.normalize(raw) == expected


@pytest.mark.parametrize("raw", [None, "", 42, ["pikachu"], "!!!"])
def test_normalize_fails_closed(raw) -> None:
    """Return an empty key for unusable input instead of raising."""
    assert naming.normalize(raw) == ""


def test_normalize_is_idempotent_and_allow_listed() -> None:
    """Keys are stable under re-normalization and only use [a-z0-9-].

    Also checks there are no leading, trailing or doubled hyphens.
    """
    for raw in ("Mr. Rime", "Kommo-o", "Porygon-Z", "Great Tusk", "Sirfetch'd", "Zygarde 10%"):
        key = naming.normalize(raw)
        assert naming.normalize(key) == key
        assert re.fullmatch(r"[a-z0-9]+(-[a-z0-9]+)*", key)


def test_protected_names_are_returned_verbatim() -> None:
    """Hyphenated species names survive normalization and base-form stripping."""
    assert naming.normalize("Jangmo-o") == "jangmo-o"
    assert naming.get_base_form_name("jangmo-o") == "jangmo-o"
    assert naming.get_base_form_name("iron-moth") == "iron-moth"


@pytest.mark.parametrize(
    ("key", "base"),
    [
        ("charizard-mega-x", "charizard"),
        ("charizard-mega-y", "charizard"),
        ("aerodactyl-mega", "aerodactyl"),
        ("raichu-alola", "raichu"),
        ("venusaur-gmax", "venusaur"),
        ("kyogre-primal", "kyogre"),
        ("oricorio-pom-pom", "oricorio"),
        ("pikachu", "pikachu"),
        ("", ""),
    ],
)
def test_get_base_form_name_strips_one_suffix(key: str, base: str) -> None:
    """Remove the first matching form suffix in priority order."""
    assert naming.get_base_form_name(key) == base


def test_get_base_form_name_strips_a_single_suffix_only() -> None:
    """Stacked suffixes are reduced by one level per call."""
    assert naming.get_base_form_name("darmanitan-galar-standard") == "darmanitan-galar"


@pytest.mark.parametrize(
    ("key", "sprite"),
    [
        ("raichu-alola", "raichu-alolan"),
        ("venusaur-gmax", "venusaur-gigantamax"),
        ("tauros-paldea-aqua-breed", "tauros-paldean-aqua"),
        ("ogerpon-wellspring", "ogerpon-wellspring-mask"),
        ("minior", "minior-red-meteor"),
        ("darmanitan-standard", "darmanitan"),
        ("meowstic-female", "meowstic"),
        ("pikachu", "pikachu"),
    ],
)
def test_get_sprite_safe_name(key: str, sprite: str) -> None:
    """Translate keys into the sprite host's naming scheme."""
    assert naming.get_sprite_safe_name(key) == sprite


def test_sprite_url_uses_sprite_safe_name() -> None:
    """Build the sprite URL from the sprite-safe name."""
    assert naming.sprite_url("raichu-alola").endswith("/raichu-alolan.png")


@pytest.mark.parametrize(
    ("key", "display"),
    [
        ("charizard-mega-x", "Mega Charizard X"),
        ("gengar-mega", "Mega Gengar"),
        ("venusaur-gmax", "Venusaur (Gmax)"),
        ("raichu-alola", "Raichu (Alolan)"),
        ("arcanine-hisui", "Arcanine (Hisuian)"),
        ("groudon-primal", "Primal Groudon"),
        ("greninja-ash", "Greninja (Ash)"),
        ("mr-mime", "Mr Mime"),
        ("ho-oh", "Ho-Oh"),
        ("", ""),
    ],
)
def test_display_name(key: str, display: str) -> None:
    """Render human-readable names for forms."""
    assert naming.display_name(key) == display


def test_name_variants_cover_form_spellings() -> None:
    """Generate the loose spellings used to locate a form in its chain."""
    variants = naming.name_variants("Arcanine-Hisui")
    assert {"arcanine-hisui", "arcanine", "arcanine hisui"} <= variants


def test_name_variants_keep_protected_names_whole() -> None:
    """Protected names never produce their first-hyphen fragment."""
    variants = naming.name_variants("Mr. Mime")
    assert "mr" not in variants
    assert "mr-mime" in variants


def test_name_variants_empty_for_unusable_input() -> None:
    """Return no variants when the input cannot be normalized."""
    assert naming.name_variants(None) == frozenset()


def test_match_strength_uses_equality_or_containment() -> None:
    """Match exact names and names contained in either direction."""
    variants = naming.name_variants("raichu-alola")
    assert naming.match_strength("raichu", variants) == naming.EXACT_MATCH
    assert naming.match_strength("pikachu", variants) == naming.NO_MATCH
    assert naming.match_strength("", variants) == naming.NO_MATCH


def test_match_strength_ranks_exact_above_containment() -> None:
    """Equality outranks substring containment."""
    variants = naming.name_variants("kabuto")
    assert naming.match_strength("kabuto", variants) == naming.EXACT_MATCH
    assert naming.match_strength("kabutops", variants) == naming.LOOSE_MATCH
    assert naming.match_strength("omanyte", variants) == naming.NO_MATCH


def test_sprite_issues_flags_known_problems() -> None:
    """Report special characters, known names and Ultra Beasts."""
    assert "Contains special characters that may affect sprite loading" in naming.sprite_issues("Mr. Mime")
    assert "Known sprite naming convention issue" in naming.sprite_issues("Mr. Mime")
    assert naming.sprite_issues("Nihilego") == ["Ultra Beast - verify sprite availability"]
    assert naming.sprite_issues("pikachu") == []
