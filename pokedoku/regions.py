"""Region resolution for species and their forms."""

from __future__ import annotations

import logging
import re
from typing import Optional

from .forms import is_battle_form
from .naming import get_base_form_name, normalize
from .tables import DEFAULT_TABLES, SpeciesTables

logger = logging.getLogger(__name__)

UNKNOWN_REGION = "Unknown"

_ROMAN = ("i", "ii", "iii", "iv", "v", "vi", "vii", "viii", "ix")
_GEN_NUMBER = re.compile(r"^(?:gen(?:eration)?-?)?(\d)$")


def generation_number(generation: Optional[str]) -> Optional[int]:
    """Return 1-9 for ``generation-iii``, ``gen-3``, ``gen3`` or ``3``."""
    if not generation:
        return None
    slug = str(generation).strip().lower().replace(" ", "-")
    if slug.startswith("generation-") and slug[len("generation-"):] in _ROMAN:
        return _ROMAN.index(slug[len("generation-"):]) + 1
    match = _GEN_NUMBER.match(slug)
    if match and 1 <= int(match.group(1)) <= len(_ROMAN):
        return int(match.group(1))
    return None


def generation_slug(generation: Optional[str]) -> Optional[str]:
    """Return the canonical ``generation-<roman>`` slug for any accepted alias."""
    number = generation_number(generation)
    return f"generation-{_ROMAN[number - 1]}" if number else None


def generation_to_region(generation: Optional[str], tables: SpeciesTables = DEFAULT_TABLES) -> str:
    """Map a generation slug (or alias) to its region name."""
    slug = generation_slug(generation)
    return tables.generation_to_region.get(slug, UNKNOWN_REGION) if slug else UNKNOWN_REGION


def canonical_region(value: Optional[str], tables: SpeciesTables = DEFAULT_TABLES) -> Optional[str]:
    """Resolve a region name or generation alias to a canonical region name.

    Returns ``None`` when the value names neither a region nor a generation.
    """
    if not value:
        return None
    text = str(value).strip()
    for region in tables.generation_to_region.values():
        if region.lower() == text.lower():
            return region
    if text.lower() == "hisui":
        return "Hisui"
    region = generation_to_region(text, tables)
    return region if region != UNKNOWN_REGION else None


def _resolve(key: str, generation: Optional[str], tables: SpeciesTables, allow_recursion: bool) -> str:
    base = get_base_form_name(key, tables)

    for suffix, region in tables.regional_suffixes.items():
        if re.search(rf"-{suffix}(?=-|$)", key):
            return region
    if base in tables.fossil_regions:
        return tables.fossil_regions[base]
    if base in tables.legendary_regions:
        return tables.legendary_regions[base]
    if base in tables.paradox:
        return "Paldea"
    if base in tables.ultra_beasts:
        return "Alola"
    if allow_recursion and is_battle_form(key):
        return _resolve(base, generation, tables, allow_recursion=False)
    if key in tables.region_overrides:
        return tables.region_overrides[key]
    if base in tables.region_overrides:
        return tables.region_overrides[base]
    return generation_to_region(generation, tables)


def resolve_region(
    key: str,
    generation: Optional[str] = None,
    tables: SpeciesTables = DEFAULT_TABLES,
) -> str:
    """Resolve the game region for a normalized key.

    Rules are applied in a fixed order and the first hit wins: regional-form
    suffix, fossil table, legendary/mythical table, paradox list, Ultra Beast
    list, mega/primal/gmax base-form lookup (one level), per-species
    overrides, and finally the generation table.

    Args:
        key: Normalized key (raw names are normalized first).
        generation: Generation slug of the species, e.g. ``generation-iii``.
        tables: Lookup tables.

    Returns:
        Region name, or ``"Unknown"``.
    """
    key = normalize(key, tables)
    if not key:
        return UNKNOWN_REGION
    return _resolve(key, generation, tables, allow_recursion=True)


def region_detected_via(key: str, tables: SpeciesTables = DEFAULT_TABLES) -> str:
    """Name the rule that decides the region of a key (for diagnostics)."""
    key = normalize(key, tables)
    base = get_base_form_name(key, tables)
    for suffix in tables.regional_suffixes:
        if re.search(rf"-{suffix}(?=-|$)", key):
            return f"{suffix}-form"
    if base in tables.fossil_regions:
        return "fossil-table"
    if base in tables.legendary_regions:
        return "legendary-table"
    if base in tables.paradox:
        return "paradox-list"
    if base in tables.ultra_beasts:
        return "ultra-beast-list"
    if is_battle_form(key):
        return "battle-form-base"
    if key in tables.region_overrides or base in tables.region_overrides:
        return "species-override"
    return "generation-mapping"
