"""Name normalization helpers shared by every lookup path."""

from __future__ import annotations

import re
import unicodedata
from typing import FrozenSet, List

from . import config
from .tables import DEFAULT_TABLES, SpeciesTables

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUNS = re.compile(r"-+")
_VARIANT_SUFFIXES = re.compile(r"-(mega|gmax|alola|galar|hisui|paldea)")

# Names displayed with their hyphen kept ("Ho-Oh" rather than "Ho Oh").
_HYPHENATED_DISPLAY = frozenset({"ho-oh", "porygon-z", "jangmo-o", "hakamo-o", "kommo-o"})

_REGIONAL_ADJECTIVES = (
    ("-alola", "Alolan"),
    ("-galar", "Galarian"),
    ("-hisui", "Hisuian"),
    ("-paldea", "Paldean"),
)


def normalize(raw: object, tables: SpeciesTables = DEFAULT_TABLES) -> str:
    """Return the canonical lookup key for a species or form name.

    Args:
        raw: Name as spelled by the upstream API or a player.
        tables: Lookup tables (only the protected-name list is consulted).

    Returns:
        Lowercase ASCII key made of ``[a-z0-9-]`` with single inner hyphens,
        or an empty string for non-string or empty input.
    """
    if not isinstance(raw, str) or not raw:
        return ""

    key = raw.lower().strip()
    if key in tables.protected_names:
        return key

    # Decompose accents (e.g. Flabébé) and drop the combining marks.
    key = "".join(
        ch for ch in unicodedata.normalize("NFKD", key) if not unicodedata.combining(ch)
    )
    key = key.replace("♀", "-f").replace("♂", "-m")
    key = _WHITESPACE.sub("-", key)
    for ch in ("'", "’", ".", ":"):
        key = key.replace(ch, "")
    key = _DISALLOWED.sub("", key)
    key = _HYPHEN_RUNS.sub("-", key)
    return key.strip("-")


def get_base_form_name(key: str, tables: SpeciesTables = DEFAULT_TABLES) -> str:
    """Strip the first known form suffix from a normalized key.

    Only one suffix is removed per call, in the priority order of
    ``tables.form_suffixes``; ``darmanitan-galar-standard`` therefore
    reduces to ``darmanitan-galar``.

    Args:
        key: Normalized key.
        tables: Lookup tables providing the suffix order.

    Returns:
        Key of the base species form.
    """
    if not key or key in tables.protected_names:
        return key or ""
    for suffix in tables.form_suffixes:
        if key.endswith(suffix) and len(key) > len(suffix):
            return key[: -len(suffix)]
    return key


def get_sprite_safe_name(key: str, tables: SpeciesTables = DEFAULT_TABLES) -> str:
    """Map a normalized key onto the PokemonDB sprite naming scheme.

    Args:
        key: Normalized key.
        tables: Lookup tables providing sprite exceptions.

    Returns:
        Sprite file stem, e.g. ``raichu-alolan`` for ``raichu-alola``.
    """
    if not key:
        return ""
    if key in tables.sprite_exceptions:
        return tables.sprite_exceptions[key]

    sprite_name = key
    for suffix, replacement in tables.sprite_suffixes:
        if sprite_name.endswith(suffix):
            sprite_name = sprite_name[: -len(suffix)] + replacement
            break

    sprite_name = sprite_name.replace("-standard", "")
    for suffix in ("-male", "-female"):
        if sprite_name.endswith(suffix):
            sprite_name = sprite_name[: -len(suffix)]
    return sprite_name


def sprite_url(key: str, tables: SpeciesTables = DEFAULT_TABLES) -> str:
    """Return the PokemonDB HOME sprite URL for a normalized key."""
    return config.SPRITE_URL_TEMPLATE.format(name=get_sprite_safe_name(key, tables))


def _titleize(key: str) -> str:
    if key in _HYPHENATED_DISPLAY:
        return "-".join(part.capitalize() for part in key.split("-"))
    return " ".join(part.capitalize() for part in key.split("-") if part)


def display_name(key: str) -> str:
    """Build a human-readable name for a normalized key.

    Examples: ``charizard-mega-x`` -> ``Mega Charizard X``,
    ``raichu-alola`` -> ``Raichu (Alolan)``, ``kyogre-primal`` -> ``Primal Kyogre``.
    """
    if not key:
        return ""

    for suffix, letter in (("-mega-x", "X"), ("-mega-y", "Y")):
        if key.endswith(suffix):
            return f"Mega {_titleize(key[: -len(suffix)])} {letter}"
    if key.endswith("-mega"):
        return f"Mega {_titleize(key[: -len('-mega')])}"
    for suffix in ("-gmax", "-gigantamax"):
        if key.endswith(suffix):
            return f"{_titleize(key[: -len(suffix)])} (Gmax)"
    for suffix, adjective in _REGIONAL_ADJECTIVES:
        if key.endswith(suffix):
            return f"{_titleize(key[: -len(suffix)])} ({adjective})"
    if key.endswith("-primal"):
        return f"Primal {_titleize(key[: -len('-primal')])}"
    if key.endswith("-ash"):
        return f"{_titleize(key[: -len('-ash')])} (Ash)"
    return _titleize(key)


def name_variants(target: object, tables: SpeciesTables = DEFAULT_TABLES) -> FrozenSet[str]:
    """Return the loose spellings used to find a species inside a chain.

    Species and evolution-chain endpoints spell forms differently
    (``arcanine-hisui`` vs ``arcanine``), so matching is done against a small
    set of variants: the key itself, the part before the first hyphen, the key
    without ``-hisui``, the key with spaces for hyphens, and the key with any
    mega/gmax/regional marker removed. Protected hyphenated names skip the
    first-hyphen split.

    Args:
        target: Raw or normalized target name.
        tables: Lookup tables (protected names).

    Returns:
        Non-empty variant strings.
    """
    key = normalize(target, tables)
    if not key:
        return frozenset()

    variants = {
        key,
        key[: -len("-hisui")] if key.endswith("-hisui") else key,
        key.replace("-", " "),
        _VARIANT_SUFFIXES.sub("", key),
    }
    if key not in tables.protected_names:
        variants.add(key.split("-")[0])
    return frozenset(v for v in variants if v)


EXACT_MATCH = 2
LOOSE_MATCH = 1
NO_MATCH = 0


def match_strength(candidate: str, variants: FrozenSet[str]) -> int:
    """Rate how well a chain species name matches the target variants.

    Returns ``EXACT_MATCH`` when the name equals a variant, ``LOOSE_MATCH``
    when one contains the other, and ``NO_MATCH`` otherwise (including empty
    candidates). Comparison is case-insensitive.
    """
    current = (candidate or "").lower()
    if not current:
        return NO_MATCH
    if current in variants:
        return EXACT_MATCH
    if any(v in current or current in v for v in variants):
        return LOOSE_MATCH
    return NO_MATCH


def sprite_issues(raw: str, tables: SpeciesTables = DEFAULT_TABLES) -> List[str]:
    """List likely sprite-lookup problems for a name."""
    issues: List[str] = []
    if not isinstance(raw, str):
        return issues
    key = normalize(raw, tables)
    base = get_base_form_name(key, tables)

    if any(ch in raw for ch in ("'", ".", ":")):
        issues.append("Contains special characters that may affect sprite loading")
    if key in tables.sprite_problem_names:
        issues.append("Known sprite naming convention issue")
    if base in tables.ultra_beasts:
        issues.append("Ultra Beast - verify sprite availability")
    if base in tables.paradox:
        issues.append("Paradox Pokemon - verify sprite availability")
    return issues
